"""Solutions to the vectors and options lessons."""

from __future__ import annotations

from collections.abc import Iterable


def vec_loop(values: list[int]) -> list[int]:
    """Double every element in place and return the same list."""
    values[:] = [value * 2 for value in values]
    return values


def vec_map(values: Iterable[int]) -> list[int]:
    """Return a new list with every element doubled."""
    return [value * 2 for value in values]


def maybe_icecream(time_of_day: int) -> int | None:
    """Ice creams left at an hour of the day: 5 before 22, 0 until 23, None past 23."""
    if time_of_day < 0:
        raise ValueError("time_of_day must not be negative")
    if time_of_day > 23:
        return None
    if time_of_day >= 22:
        return 0
    return 5