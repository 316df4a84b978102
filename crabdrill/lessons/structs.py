"""Solutions to the structs, enums and test-writing lessons."""

from __future__ import annotations

from dataclasses import dataclass, field


def _byte(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in 0..=255, got {value}")


@dataclass(frozen=True)
class Package:
    """A parcel to ship; it must weigh at least 10 grams."""

    sender_country: str
    recipient_country: str
    weight_in_grams: int

    def __post_init__(self) -> None:
        if self.weight_in_grams < 10:
            raise ValueError("Can not ship a package with weight below 10 grams.")

    def is_international(self) -> bool:
        """Whether sender and recipient countries differ."""
        return self.sender_country != self.recipient_country

    def get_fees(self, cents_per_gram: int) -> int:
        """Shipping fee for the given rate."""
        return cents_per_gram * self.weight_in_grams


@dataclass(frozen=True)
class Point:
    """A position with byte-sized coordinates."""

    x: int
    y: int

    def __post_init__(self) -> None:
        _byte("x", self.x)
        _byte("y", self.y)


@dataclass(frozen=True)
class Quit:
    """Message asking the state to quit."""


@dataclass(frozen=True)
class Echo:
    """Message replacing the stored text."""

    text: str


@dataclass(frozen=True)
class Move:
    """Message moving to a new position."""

    point: Point


@dataclass(frozen=True)
class ChangeColor:
    """Message changing the RGB colour."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        _byte("red", self.red)
        _byte("green", self.green)
        _byte("blue", self.blue)


Message = Quit | Echo | Move | ChangeColor


@dataclass
class State:
    """Mutable state driven by messages."""

    color: tuple[int, int, int] = (0, 0, 0)
    position: Point = field(default_factory=lambda: Point(0, 0))
    quit: bool = False
    message: str = ""

    def process(self, message: Message) -> None:
        """Apply one message to the state."""
        match message:
            case ChangeColor(red, green, blue):
                self.color = (red, green, blue)
            case Quit():
                self.quit = True
            case Echo(text):
                self.message = text
            case Move(point):
                self.position = point
            case _:
                raise TypeError(f"unknown message: {message!r}")


@dataclass(frozen=True)
class Rectangle:
    """A rectangle with strictly positive sides."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Rectangle width and height cannot be negative!")