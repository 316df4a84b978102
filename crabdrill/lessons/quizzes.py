"""Quiz solutions: apple pricing, a string transformer and report cards."""

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_ACTIONS = frozenset({"uppercase", "trim", "append"})


def calculate_price_of_apples(quantity: int) -> int:
    """Apples cost 2 each, or 1 each when more than 40 are bought."""
    price = 2 if quantity <= 40 else 1
    return quantity * price


@dataclass(frozen=True)
class Command:
    """A string transformation: "uppercase", "trim" or "append" (times)."""

    action: str
    times: int = 0

    def __post_init__(self) -> None:
        if self.action not in _ACTIONS:
            raise ValueError(f"unknown command: {self.action!r}")
        if self.times < 0:
            raise ValueError("times must not be negative")

    def apply(self, text: str) -> str:
        """Return the text transformed by this command."""
        if self.action == "uppercase":
            return text.translate(_ASCII_UPPER)
        if self.action == "trim":
            return text.strip()
        return text + "bar" * self.times


def transformer(items: Iterable[tuple[str, Command]]) -> list[str]:
    """Apply each command to its string."""
    return [command.apply(text) for text, command in items]


def _display(value: object) -> str:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class ReportCard(Generic[T]):
    """A report card with a numeric or alphabetical grade."""

    grade: T
    student_name: str
    student_age: int

    def print(self) -> str:
        """Return the report card line."""
        return (
            f"{self.student_name} ({self.student_age}) - "
            f"achieved a grade of {_display(self.grade)}"
        )