"""Solutions to the From, FromStr and TryFrom conversion lessons."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

_USIZE_MAX = 2**64 - 1
_U8_MAX = 255
_UNSIGNED_DIGITS = re.compile(r"\+?[0-9]+")


def _parse_usize(text: str) -> int:
    """Parse an unsigned decimal integer strictly, within 64 bits."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _UNSIGNED_DIGITS.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _USIZE_MAX:
        raise ValueError("number too large to fit in target type")
    return value


class ParsePersonError(ValueError):
    """Text could not be parsed into a Person."""

    EMPTY = "empty"
    BAD_LEN = "bad_len"
    NO_NAME = "no_name"
    PARSE_INT = "parse_int"

    _DESCRIPTIONS = {
        EMPTY: "empty input string",
        BAD_LEN: "incorrect number of fields",
        NO_NAME: "empty name field",
        PARSE_INT: "invalid age",
    }

    def __init__(self, kind: str, cause: ValueError | None = None):
        if kind not in self._DESCRIPTIONS:
            raise ValueError(f"unknown parse error kind: {kind!r}")
        message = self._DESCRIPTIONS[kind]
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.kind = kind
        self.cause = cause


@dataclass(frozen=True)
class Person:
    """A person with a name and an age."""

    name: str
    age: int

    @classmethod
    def default(cls) -> Person:
        """The fallback person: John, aged 30."""
        return cls(name="John", age=30)

    @classmethod
    def from_text(cls, text: str) -> Person:
        """Build a person from "name,age", falling back to the default on bad input."""
        if not text:
            return cls.default()
        parts = text.split(",")
        if len(parts) < 2 or not parts[0]:
            return cls.default()
        try:
            age = _parse_usize(parts[1])
        except ValueError:
            return cls.default()
        return cls(name=parts[0], age=age)

    @classmethod
    def parse(cls, text: str) -> Person:
        """Parse exactly "name,age"; raise ParsePersonError on bad input."""
        if not text:
            raise ParsePersonError(ParsePersonError.EMPTY)
        parts = text.split(",")
        if len(parts) != 2:
            raise ParsePersonError(ParsePersonError.BAD_LEN)
        name, age_text = parts
        if not name:
            raise ParsePersonError(ParsePersonError.NO_NAME)
        try:
            age = _parse_usize(age_text)
        except ValueError as exc:
            raise ParsePersonError(ParsePersonError.PARSE_INT, exc) from exc
        return cls(name=name, age=age)


class IntoColorError(ValueError):
    """Values could not be converted into a Color."""

    BAD_LEN = "bad_len"
    INT_CONVERSION = "int_conversion"

    _DESCRIPTIONS = {
        BAD_LEN: "expected exactly three components",
        INT_CONVERSION: "component outside 0..=255",
    }

    def __init__(self, kind: str):
        if kind not in self._DESCRIPTIONS:
            raise ValueError(f"unknown colour error kind: {kind!r}")
        super().__init__(self._DESCRIPTIONS[kind])
        self.kind = kind


def _component(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"colour components must be integers, got {value!r}")
    if not 0 <= value <= _U8_MAX:
        raise IntoColorError(IntoColorError.INT_CONVERSION)
    return value


@dataclass(frozen=True)
class Color:
    """An RGB colour with components in 0..=255."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for value in (self.red, self.green, self.blue):
            _component(value)

    @classmethod
    def try_from(cls, value: Sequence[int]) -> Color:
        """Convert a sequence of three integers; raise IntoColorError when that fails."""
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise TypeError(f"cannot convert {type(value).__name__} into a Color")
        if len(value) != 3:
            raise IntoColorError(IntoColorError.BAD_LEN)
        red, green, blue = (_component(component) for component in value)
        return cls(red=red, green=green, blue=blue)