"""Coloured status lines for warnings and successes."""

from __future__ import annotations

import os

from rich.console import Console
from rich.text import Text

_console = Console(soft_wrap=True, highlight=False)


def _no_emoji() -> bool:
    return "NO_EMOJI" in os.environ


def _emit(symbol: str, message: str, colour: str) -> str:
    _console.print(Text.assemble((symbol, colour), " ", (message, colour)))
    return f"{symbol} {message}"


def warn(message: str) -> str:
    """Print a red warning line and return its plain text."""
    symbol = "!" if _no_emoji() else "⚠️ "
    return _emit(symbol, message, "red")


def success(message: str) -> str:
    """Print a green success line and return its plain text."""
    symbol = "✓" if _no_emoji() else "✅"
    return _emit(symbol, message, "green")