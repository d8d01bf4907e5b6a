"""Tolerant conversion of raw field values to numbers and labels."""
from __future__ import annotations

import math
from typing import Any

UNKNOWN_LABEL = "Unknown"


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Convert a field value to a finite float.

    Args:
        value: Anything read from a record (number, string, None...).
        default: Returned when the value is missing or does not parse.

    Returns:
        The parsed number, or ``default``. Never raises.
    """
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def to_label(value: Any, default: str = UNKNOWN_LABEL) -> str:
    """Trimmed string form of a value, or ``default`` when missing/blank."""
    if value is None:
        return default
    text = str(value).strip()
    return text if text else default
