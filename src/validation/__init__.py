"""Student-record validation — raw academic marks into a strict schema."""

from src.validation.engine import (
    FIELD_RULES,
    validate_and_format_student_data,
    validate_student_data_array,
)
from src.validation.formatting import format_numeric_display, safe_number_parse
from src.validation.rules import (
    validate_aps_mark,
    validate_level,
    validate_mark,
    validate_text,
    validate_uuid,
)

__all__ = [
    "FIELD_RULES",
    "validate_and_format_student_data",
    "validate_student_data_array",
    "validate_mark",
    "validate_level",
    "validate_aps_mark",
    "validate_uuid",
    "validate_text",
    "format_numeric_display",
    "safe_number_parse",
]
