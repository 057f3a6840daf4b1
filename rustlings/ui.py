"""Terminal styling and the warning and success messages."""

from __future__ import annotations

import os
import sys

_RESET = "\x1b[0m"


def _colors_enabled() -> bool:
    if os.environ.get("CLICOLOR_FORCE", "0") != "0":
        return True
    if os.environ.get("CLICOLOR") == "0":
        return False
    return sys.stdout.isatty() and os.environ.get("TERM") != "dumb"


def _paint(code: str, text: object) -> str:
    text = str(text)
    if not _colors_enabled():
        return text
    return f"\x1b[{code}m{text}{_RESET}"


def _no_emoji() -> bool:
    return "NO_EMOJI" in os.environ


def bold(text: object) -> str:
    """Return text rendered in bold when colours are enabled."""
    return _paint("1", text)


def blue(text: object) -> str:
    """Return text rendered in blue when colours are enabled."""
    return _paint("34", text)


def _red(text: object) -> str:
    return _paint("31", text)


def _green(text: object) -> str:
    return _paint("32", text)


def warn(message: str) -> None:
    """Print a warning line in red."""
    symbol = "!" if _no_emoji() else "\u26a0\ufe0f "
    print(f"{_red(symbol)} {_red(message)}")


def success(message: str) -> None:
    """Print a success line in green."""
    symbol = "\u2713" if _no_emoji() else "\u2705"
    print(f"{_green(symbol)} {_green(message)}")