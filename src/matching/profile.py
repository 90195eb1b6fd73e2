"""Builds the matcher's StudentProfile from a validated record."""

from __future__ import annotations

from src.schemas.matching import StudentProfile
from src.schemas.student import ValidatedStudentMark

# Percentage marks carried into subject_marks (aps_mark stays top-level)
SUBJECT_MARK_FIELDS = (
    "math_mark",
    "home_language_mark",
    "first_additional_language_mark",
    "second_additional_language_mark",
    "subject1_mark",
    "subject2_mark",
    "subject3_mark",
    "subject4_mark",
    "life_orientation_mark",
    "average",
)


def build_student_profile(
    validated: ValidatedStudentMark,
    interests: list[str] | None = None,
    career_goals: list[str] | None = None,
) -> StudentProfile:
    """Lift a validated record into a StudentProfile."""
    return StudentProfile(
        user_id=validated.user_id,
        aps_mark=validated.aps_mark,
        subject_marks={name: getattr(validated, name) for name in SUBJECT_MARK_FIELDS},
        interests=list(interests or []),
        career_goals=list(career_goals or []),
    )
