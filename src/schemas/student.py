"""Pydantic schemas for student academic-record validation.

Pure data classes — no I/O. Inputs/outputs of the deterministic
validation pipeline in src.validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Raw field values as received from an external source. Anything else is
# treated as an unknown value by the field rules.
type RawValue = int | float | Decimal | str | None


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


class FieldConstraints(BaseModel):
    """Numeric and text bounds applied by the validator and the matcher."""

    model_config = ConfigDict(frozen=True)

    min_mark: float = 0
    max_mark: float = 100
    min_level: int = 0
    max_level: int = 7
    min_aps: int = 0
    max_aps: int = 42
    max_text_length: int = Field(default=255, gt=0)
    uuid_length: int = 36
    mark_precision: int = Field(default=2, ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> FieldConstraints:
        """Every lower bound must not exceed its upper bound."""
        for low, high in (
            ("min_mark", "max_mark"),
            ("min_level", "max_level"),
            ("min_aps", "max_aps"),
        ):
            if getattr(self, low) > getattr(self, high):
                msg = f"{low} ({getattr(self, low)}) exceeds {high} ({getattr(self, high)})"
                raise ValueError(msg)
        # max_aps normalizes the match score
        if self.max_aps <= 0:
            msg = f"max_aps must be positive, got {self.max_aps}"
            raise ValueError(msg)
        return self


DEFAULT_CONSTRAINTS = FieldConstraints()


# ---------------------------------------------------------------------------
# Field rule output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldResult:
    """Outcome of a single field rule."""

    success: bool
    value: Any = None
    error: str | None = None
    warning: str | None = None


# ---------------------------------------------------------------------------
# Validated record
# ---------------------------------------------------------------------------


class ValidatedStudentMark(BaseModel):
    """A student's marks after every field passed its rule.

    Marks are percentages with at most 2 decimals, levels are integer
    achievement bands, text is trimmed and length-capped.
    """

    model_config = ConfigDict(frozen=True)

    # Identifiers
    user_id: str | None = None
    profile_id: str | None = None

    # Marks (percentages)
    math_mark: float | None = None
    home_language_mark: float | None = None
    first_additional_language_mark: float | None = None
    second_additional_language_mark: float | None = None
    subject1_mark: float | None = None
    subject2_mark: float | None = None
    subject3_mark: float | None = None
    subject4_mark: float | None = None
    life_orientation_mark: float | None = None
    average: float | None = None

    # Levels (achievement bands)
    math_level: int | None = None
    home_language_level: int | None = None
    first_additional_language_level: int | None = None
    second_additional_language_level: int | None = None
    subject1_level: int | None = None
    subject2_level: int | None = None
    subject3_level: int | None = None
    subject4_level: int | None = None
    life_orientation_level: int | None = None

    # Admission Point Score
    aps_mark: int | None = None

    # Descriptors
    math_type: str | None = None
    home_language: str | None = None
    first_additional_language: str | None = None
    second_additional_language: str | None = None
    subject1: str | None = None
    subject2: str | None = None
    subject3: str | None = None
    subject4: str | None = None


class ValidationResult(BaseModel):
    """Validation outcome for one raw record."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    formatted_data: ValidatedStudentMark | None = None


# ---------------------------------------------------------------------------
# Bulk validation
# ---------------------------------------------------------------------------


class InvalidStudent(BaseModel):
    """A rejected record, tagged with its position in the input batch."""

    data: Any
    errors: list[str]
    index: int


class ValidationSummary(BaseModel):
    """Counts for bulk ingestion reporting."""

    total: int
    valid: int
    invalid: int
    warnings: int  # summed over valid and invalid records


class BatchValidationResult(BaseModel):
    """Output of validating a list of raw records."""

    valid_students: list[ValidatedStudentMark] = Field(default_factory=list)
    invalid_students: list[InvalidStudent] = Field(default_factory=list)
    validation_summary: ValidationSummary
