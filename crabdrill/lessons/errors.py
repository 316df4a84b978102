"""Solutions to the error-handling lessons."""

from __future__ import annotations

import re
from dataclasses import dataclass

_I32 = (-(2**31), 2**31 - 1)
_I64 = (-(2**63), 2**63 - 1)
_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+")

PROCESSING_FEE = 1
COST_PER_ITEM = 5


def _parse_int(text: str, bounds: tuple[int, int]) -> int:
    """Parse a signed decimal integer strictly, within the given bounds."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _SIGNED_DIGITS.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    low, high = bounds
    if value > high:
        raise ValueError("number too large to fit in target type")
    if value < low:
        raise ValueError("number too small to fit in target type")
    return value


def generate_nametag_text(name: str) -> str:
    """Return the nametag text; an empty name is refused."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Cost in tokens of buying the typed-in quantity of items."""
    quantity = _parse_int(item_quantity, _I32)
    return quantity * COST_PER_ITEM + PROCESSING_FEE


class CreationError(ValueError):
    """A value could not become a positive non-zero integer."""

    NEGATIVE = "negative"
    ZERO = "zero"

    _DESCRIPTIONS = {NEGATIVE: "number is negative", ZERO: "number is zero"}

    def __init__(self, kind: str):
        if kind not in self._DESCRIPTIONS:
            raise ValueError(f"unknown creation error kind: {kind!r}")
        super().__init__(self._DESCRIPTIONS[kind])
        self.kind = kind


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    """An integer greater than zero."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise CreationError(CreationError.NEGATIVE)
        if self.value == 0:
            raise CreationError(CreationError.ZERO)


class ParsePosNonzeroError(ValueError):
    """Text could not be parsed into a positive non-zero integer."""

    def __init__(self, error: ValueError):
        super().__init__(str(error))
        self.error = error

    @property
    def creation(self) -> CreationError | None:
        """The creation error, when the text was a number out of range."""
        return self.error if isinstance(self.error, CreationError) else None

    @property
    def parse_int(self) -> ValueError | None:
        """The parse error, when the text was not a number."""
        return None if isinstance(self.error, CreationError) else self.error


def parse_pos_nonzero(text: str) -> PositiveNonzeroInteger:
    """Parse text into a PositiveNonzeroInteger."""
    try:
        value = _parse_int(text, _I64)
    except ValueError as exc:
        raise ParsePosNonzeroError(exc) from exc
    try:
        return PositiveNonzeroInteger(value)
    except CreationError as exc:
        raise ParsePosNonzeroError(exc) from exc