"""Severity → color mapping and ANSI rendering."""

from enum import Enum
from typing import NamedTuple


class Color(Enum):
    DEFAULT = ""
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    YELLOW = "\033[33m"
    RED = "\033[31m"


RESET = "\033[0m"


class ColorPair(NamedTuple):
    key: Color
    value: Color


DEFAULT_PAIR = ColorPair(Color.DEFAULT, Color.DEFAULT)

_SEVERITY_COLORS = {
    ("debug", "dbg", "d"): ColorPair(Color.MAGENTA, Color.DEFAULT),
    ("info", "inf", "i"): ColorPair(Color.CYAN, Color.DEFAULT),
    ("warning", "warn", "wrn", "w"): ColorPair(Color.YELLOW, Color.DEFAULT),
    ("error", "err", "e"): ColorPair(Color.RED, Color.DEFAULT),
    ("fatal", "f"): ColorPair(Color.RED, Color.DEFAULT),
}

# Flattened lookup: alias -> pair
SEVERITY_COLORS: dict[str, ColorPair] = {
    alias: pair
    for aliases, pair in _SEVERITY_COLORS.items()
    for alias in aliases
}


def map_colors(severity: str | None) -> ColorPair:
    """Return the (key, value) colors for a severity (case-insensitive).

    Unknown or missing severities fall back to the default pair.
    """
    if severity is None:
        return DEFAULT_PAIR
    return SEVERITY_COLORS.get(severity.lower(), DEFAULT_PAIR)


def colorize(text: str, color: Color, enabled: bool = True) -> str:
    """Wrap text in the ANSI code for color. DEFAULT leaves it untouched."""
    if not enabled or color is Color.DEFAULT:
        return text
    return f"{color.value}{text}{RESET}"
