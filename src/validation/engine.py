"""Student-record validation engine — raw mapping in, ValidationResult out.

Pure Python, table-driven. Every field is run through its rule, all errors
and warnings are collected (no short-circuit), then record-level checks run.
Bad data never raises; only a non-mapping record does.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, NamedTuple

from src.config import get_field_constraints
from src.schemas.student import (
    BatchValidationResult,
    FieldConstraints,
    FieldResult,
    InvalidStudent,
    ValidatedStudentMark,
    ValidationResult,
    ValidationSummary,
)
from src.validation.rules import (
    validate_aps_mark,
    validate_level,
    validate_mark,
    validate_text,
    validate_uuid,
)

logger = logging.getLogger(__name__)


class FieldRule(NamedTuple):
    """One row of the rule table: record key, rule function, extra arguments."""

    key: str
    rule: Callable[..., FieldResult]
    kwargs: dict[str, Any]


def _rule(key: str, rule: Callable[..., FieldResult], **kwargs: Any) -> FieldRule:
    return FieldRule(key, rule, kwargs)


# Adding a field to ValidatedStudentMark means adding one row here.
FIELD_RULES: tuple[FieldRule, ...] = (
    _rule("user_id", validate_uuid),
    _rule("math_mark", validate_mark),
    _rule("home_language_mark", validate_mark),
    _rule("first_additional_language_mark", validate_mark),
    _rule("second_additional_language_mark", validate_mark),
    _rule("subject1", validate_text),
    _rule("subject1_mark", validate_mark),
    _rule("subject2", validate_text),
    _rule("subject2_mark", validate_mark),
    _rule("subject3", validate_text),
    _rule("subject3_mark", validate_mark),
    _rule("subject4", validate_text),
    _rule("subject4_mark", validate_mark),
    _rule("life_orientation_mark", validate_mark),
    _rule("average", validate_mark),
    _rule("math_level", validate_level),
    _rule("home_language_level", validate_level),
    _rule("first_additional_language_level", validate_level),
    _rule("second_additional_language_level", validate_level),
    _rule("subject1_level", validate_level),
    _rule("subject2_level", validate_level),
    _rule("subject3_level", validate_level),
    _rule("subject4_level", validate_level),
    _rule("aps_mark", validate_aps_mark),
    _rule("life_orientation_level", validate_level),
    _rule("math_type", validate_text),
    _rule("home_language", validate_text),
    _rule("first_additional_language", validate_text),
    _rule("second_additional_language", validate_text),
    _rule("profile_id", validate_uuid),
)


def _check_average(data: dict[str, Any], constraints: FieldConstraints, errors: list[str]) -> None:
    """Record-level check; unreachable unless the rule table is wrong."""
    average = data.get("average")
    if average is not None and not constraints.min_mark <= average <= constraints.max_mark:
        errors.append(
            f"Average {average} is outside valid range "
            f"({constraints.min_mark:g}-{constraints.max_mark:g})"
        )


def validate_and_format_student_data(
    raw: Mapping[str, Any],
    constraints: FieldConstraints | None = None,
) -> ValidationResult:
    """Validate one raw student record.

    Args:
        raw: Field name → raw value. Missing keys count as empty.
        constraints: Bounds to apply; defaults to the configured constraints.

    Returns:
        ValidationResult with every error and warning found. formatted_data
        is set only when there are no errors.

    Raises:
        TypeError: If raw is not a mapping.
    """
    if not isinstance(raw, Mapping):
        msg = f"Student record must be a mapping, got {type(raw).__name__}"
        raise TypeError(msg)

    c = constraints if constraints is not None else get_field_constraints()
    errors: list[str] = []
    warnings: list[str] = []
    formatted: dict[str, Any] = {}

    for key, rule, kwargs in FIELD_RULES:
        result = rule(raw.get(key), key, constraints=c, **kwargs)
        if not result.success:
            errors.append(result.error or f"{key}: Unknown validation error")
            continue
        if result.warning:
            warnings.append(result.warning)
        formatted[key] = result.value

    _check_average(formatted, c, errors)

    logger.debug(
        "Student record validated: user_id=%s errors=%d warnings=%d",
        formatted.get("user_id"),
        len(errors),
        len(warnings),
    )

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        formatted_data=None if errors else ValidatedStudentMark(**formatted),
    )


def validate_student_data_array(
    records: Iterable[Mapping[str, Any]],
    constraints: FieldConstraints | None = None,
) -> BatchValidationResult:
    """Validate a batch of raw records independently.

    A bad record never stops the batch. Rejected records keep their
    original index; the warning count covers valid and invalid records.
    """
    valid_students: list[ValidatedStudentMark] = []
    invalid_students: list[InvalidStudent] = []
    total = 0
    total_warnings = 0

    for index, record in enumerate(records):
        total += 1
        result = validate_and_format_student_data(record, constraints)
        total_warnings += len(result.warnings)

        if result.is_valid and result.formatted_data is not None:
            valid_students.append(result.formatted_data)
        else:
            invalid_students.append(InvalidStudent(data=record, errors=result.errors, index=index))

    summary = ValidationSummary(
        total=total,
        valid=len(valid_students),
        invalid=len(invalid_students),
        warnings=total_warnings,
    )
    logger.info(
        "Batch validation complete: total=%d valid=%d invalid=%d warnings=%d",
        summary.total,
        summary.valid,
        summary.invalid,
        summary.warnings,
    )

    return BatchValidationResult(
        valid_students=valid_students,
        invalid_students=invalid_students,
        validation_summary=summary,
    )
