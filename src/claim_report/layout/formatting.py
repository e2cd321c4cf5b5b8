"""Value formatting rules for report fields.

Every helper degrades to the placeholder instead of raising, so a partially
filled record still renders a complete report.
"""

from __future__ import annotations

import math
import re
from typing import Any

PLACEHOLDER = "—"

_TRAILING_ZEROS = re.compile(r"\.?0+$")
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_TRUE_STRINGS = frozenset({"true", "t", "yes", "y", "1"})


def pad_or_dash(value: Any) -> str:
    """Return *value* as text, or the placeholder when it is ``None`` or ``""``."""
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)


def format_date(value: Any) -> str:
    """Truncate an ISO-like timestamp to its ``YYYY-MM-DD`` prefix."""
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)[:10]


def format_number_trimmed(value: Any, decimals: int = 3) -> str:
    """Format a reading to at most *decimals* places with trailing zeros stripped.

    ``1.500`` -> ``"1.5"``, ``1.000`` -> ``"1"``, ``"abc"`` -> placeholder.
    Strings must be plain ASCII decimals; ``"1_000"`` is not a reading.
    """
    if value is None or isinstance(value, bool):
        return PLACEHOLDER
    if isinstance(value, str):
        value = value.strip()
        if not _DECIMAL.fullmatch(value):
            return PLACEHOLDER
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return PLACEHOLDER
    if not math.isfinite(number):
        return PLACEHOLDER
    return _TRAILING_ZEROS.sub("", f"{number:.{decimals}f}")


def yes_no(value: Any) -> str:
    """Render an assessment flag. Absent and false both read ``"No"``."""
    if isinstance(value, str):
        return "Yes" if value.strip().lower() in _TRUE_STRINGS else "No"
    return "Yes" if value else "No"


def wrap_fixed(text: str, width: int, max_lines: int) -> tuple[list[str], bool]:
    """Split *text* into hard *width*-character chunks.

    Returns at most *max_lines* chunks and whether anything was dropped.
    Not word-aware: a word may be split anywhere.
    """
    chunks = [text[i : i + width] for i in range(0, len(text), width)]
    return chunks[:max_lines], len(chunks) > max_lines
