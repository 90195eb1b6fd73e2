"""Numeric helpers for presenting and reading loosely typed marks."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from src.validation.rules import NUMBER_PATTERN


def format_numeric_display(
    value: float | Decimal | None,
    precision: int = 1,
    suffix: str = "%",
) -> str:
    """Format a mark for display, e.g. 85.25 → "85.3%", 80.0 → "80%".

    None and NaN render as "N/A". Trailing zeros are dropped.
    """
    if value is None:
        return "N/A"
    number = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    if number.is_nan():
        return "N/A"
    if number.is_infinite():
        return f"{value}{suffix}"

    rounded = number.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}{suffix}"


def safe_number_parse(value: str | float | None, default: float = 0.0) -> float:
    """Parse a number, falling back to default for empty or non-finite input."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float, Decimal)):
        return float(value) if math.isfinite(value) else default

    text = str(value).strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return default
    try:
        parsed = float(Decimal(text))
    except (InvalidOperation, ValueError):
        return default
    return parsed if math.isfinite(parsed) else default
