"""Terminal color utilities for partial error output.

ANSI color codes with TTY detection and NO_COLOR / FORCE_COLOR support.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "bright_red": "\033[91m",
}

ColorName = Literal["reset", "bold", "dim", "cyan", "green", "bright_red"]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    """Decide whether error output is colored.

    FORCE_COLOR wins over NO_COLOR (https://no-color.org/); otherwise
    colors are used only when stdout is a TTY.
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    return _USE_COLORS


def colorize(text: str, *colors: ColorName) -> str:
    """Wrap ``text`` in the given ANSI codes when colors are enabled.

    Example:
        >>> colorize("P-NAM-001", "bright_red", "bold")
        '\\033[91m\\033[1mP-NAM-001\\033[0m'  # if colors supported
    """
    if not _USE_COLORS or not colors:
        return text
    prefix = "".join(_COLORS.get(color, "") for color in colors)
    if not prefix:
        return text
    return f"{prefix}{text}{_COLORS['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_ESCAPE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def partial_name(text: str) -> str:
    return colorize(text, "cyan")


def hint(text: str) -> str:
    return colorize(text, "green")


def dim_text(text: str) -> str:
    return colorize(text, "dim")
