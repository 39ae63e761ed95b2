"""Lenient value coercion for hand-maintained JSON.

The data files are edited by hand across decades of seasons, so numbers may
arrive as strings, blanks, nulls or be missing entirely. These helpers never
raise.
"""

from __future__ import annotations

import math
from typing import Any


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def safe_num(value: Any) -> float:
    """Coerce to a finite float, treating anything unusable as zero."""
    number = _as_float(value)
    return 0.0 if number is None else number


def has_value(value: Any) -> bool:
    """Whether a field was explicitly recorded (0 counts, null does not)."""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def to_optional_float(value: Any) -> float | None:
    return _as_float(value)


def to_optional_int(value: Any) -> int | None:
    number = _as_float(value)
    return None if number is None else int(number)


def to_id(value: Any) -> str | None:
    """Normalize an identifier so ``202506``, ``202506.0`` and ``"202506"`` match."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return str(int(value))
        return str(value)
    text = str(value).strip()
    if text.endswith(".0") and text[:-2].isdigit():
        text = text[:-2]
    return text or None


def to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_season(value: Any) -> int | None:
    """Starting year of a season given as ``2024``, ``"2024"`` or ``"2024-25"``."""
    if isinstance(value, str) and "-" in value.strip()[1:]:
        value = value.strip().split("-")[0]
    return to_optional_int(value)
