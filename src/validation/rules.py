"""Per-field validation rules for raw student-record values.

Each rule takes a raw value and the field name and returns a FieldResult.
Rules never raise on bad data: failures come back as field-tagged error
strings. Raw values are dispatched on their type explicitly, so booleans
and arbitrary objects are rejected instead of being coerced.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from src.config import get_field_constraints
from src.schemas.student import FieldConstraints, FieldResult, RawValue

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Plain ASCII decimal literals only: no underscores, no non-ASCII digits
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

# Error messages fall back to scientific notation past this exponent
DISPLAY_EXPONENT_LIMIT = 15

# String placeholders some sources emit for a missing identifier
NULL_LITERALS = frozenset({"null", "undefined"})


def _resolve(constraints: FieldConstraints | None) -> FieldConstraints:
    return constraints if constraints is not None else get_field_constraints()


def _is_empty(value: object) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _parse_number(value: object) -> Decimal | None:
    """Convert a raw value into a finite Decimal, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not NUMBER_PATTERN.fullmatch(text):
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite():
        return None
    return number


def _display(number: Decimal) -> str:
    """Render a number the way a user typed it: 101, 3.5, -1."""
    if abs(number.adjusted()) > DISPLAY_EXPONENT_LIMIT:
        return str(number)
    return format(number.normalize(), "f")


def _within(number: Decimal, low: float, high: float) -> bool:
    return Decimal(str(low)) <= number <= Decimal(str(high))


# ── Marks ────────────────────────────────────────────────────────────


def validate_mark(
    value: RawValue,
    field_name: str,
    *,
    constraints: FieldConstraints | None = None,
) -> FieldResult:
    """Validate a percentage mark and round it to the configured precision."""
    if _is_empty(value):
        return FieldResult(success=True, value=None)

    c = _resolve(constraints)
    number = _parse_number(value)
    if number is None:
        return FieldResult(success=False, error=f'{field_name}: Invalid number format "{value}"')

    if not _within(number, c.min_mark, c.max_mark):
        return FieldResult(
            success=False,
            error=(
                f"{field_name}: Value {_display(number)} must be between "
                f"{c.min_mark:g} and {c.max_mark:g}"
            ),
        )

    quantum = Decimal(1).scaleb(-c.mark_precision)
    return FieldResult(success=True, value=float(number.quantize(quantum, rounding=ROUND_HALF_UP)))


# ── Integer bands ────────────────────────────────────────────────────


def _validate_integer(
    value: RawValue,
    field_name: str,
    *,
    label: str,
    format_label: str,
    low: int,
    high: int,
) -> FieldResult:
    """Shared integer discipline for levels and APS: no rounding, ever."""
    if _is_empty(value):
        return FieldResult(success=True, value=None)

    number = _parse_number(value)
    if number is None:
        return FieldResult(success=False, error=f'{field_name}: Invalid {format_label} format "{value}"')

    if number != number.to_integral_value():
        return FieldResult(
            success=False,
            error=f"{field_name}: {label} {_display(number)} must be an integer",
        )

    if not low <= number <= high:
        return FieldResult(
            success=False,
            error=f"{field_name}: {label} {_display(number)} must be between {low} and {high}",
        )

    return FieldResult(success=True, value=int(number))


def validate_level(
    value: RawValue,
    field_name: str,
    max_level: int | None = None,
    *,
    constraints: FieldConstraints | None = None,
) -> FieldResult:
    """Validate an achievement level (0–7 unless max_level overrides it)."""
    c = _resolve(constraints)
    return _validate_integer(
        value,
        field_name,
        label="Level",
        format_label="integer",
        low=c.min_level,
        high=c.max_level if max_level is None else max_level,
    )


def validate_aps_mark(
    value: RawValue,
    field_name: str,
    *,
    constraints: FieldConstraints | None = None,
) -> FieldResult:
    """Validate an Admission Point Score (0–42)."""
    c = _resolve(constraints)
    return _validate_integer(
        value,
        field_name,
        label="APS",
        format_label="APS",
        low=c.min_aps,
        high=c.max_aps,
    )


# ── Identifiers and text ─────────────────────────────────────────────


def validate_uuid(
    value: RawValue,
    field_name: str,
    *,
    constraints: FieldConstraints | None = None,
) -> FieldResult:
    """Validate a version-4 UUID string. No partial acceptance."""
    if _is_empty(value) or (isinstance(value, str) and value in NULL_LITERALS):
        return FieldResult(success=True, value=None)

    c = _resolve(constraints)
    text = str(value)
    if len(text) != c.uuid_length or not UUID_PATTERN.fullmatch(text):
        return FieldResult(success=False, error=f'{field_name}: Invalid UUID format "{text}"')

    return FieldResult(success=True, value=text)


def validate_text(
    value: RawValue,
    field_name: str,
    *,
    constraints: FieldConstraints | None = None,
) -> FieldResult:
    """Trim a free-text value, truncating it with a warning when too long."""
    if _is_empty(value):
        return FieldResult(success=True, value=None)

    c = _resolve(constraints)
    text = str(value).strip()
    if not text:
        return FieldResult(success=True, value=None)

    if len(text) > c.max_text_length:
        return FieldResult(
            success=True,
            value=text[: c.max_text_length],
            warning=f"{field_name}: Text truncated to {c.max_text_length} characters",
        )

    return FieldResult(success=True, value=text)
