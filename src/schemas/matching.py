"""Pydantic schemas for the program matching engine.

Catalog entries and match results are immutable; the matcher creates
fresh ProgramMatch objects on every call and never persists them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class InstitutionType(StrEnum):
    """Kind of institution offering a program."""

    UNIVERSITY = "university"
    TVET = "tvet"


class MatchConfidence(StrEnum):
    """Five-point confidence tier derived from the matching score."""

    VERY_HIGH = "very_high"  # ≥ 85
    HIGH = "high"            # 70–84
    MEDIUM = "medium"        # 60–69
    LOW = "low"              # 50–59
    VERY_LOW = "very_low"    # < 50, unreachable past the eligibility gate


class MatchFlag(StrEnum):
    """Markers attached to an eligible match."""

    MET_CUTOFF = "met_cutoff"
    EXCEEDS_REQUIREMENTS = "exceeds_requirements"
    RECOMMENDED_VERIFICATION = "recommended_verification"


class StudentProfile(BaseModel):
    """Matcher input, assembled from a validated student record."""

    user_id: str | None = None
    aps_mark: int | None = None
    subject_marks: dict[str, float | None] = Field(default_factory=dict)
    interests: list[str] = Field(default_factory=list)
    career_goals: list[str] = Field(default_factory=list)


class AvailableProgram(BaseModel):
    """A catalog entry: one qualification at one institution."""

    model_config = ConfigDict(frozen=True)

    id: int
    type: InstitutionType
    qualification: str
    institution_name: str
    required_aps: int
    faculty: str | None = None


class ProgramMatch(BaseModel):
    """An eligible program with its score and justification."""

    model_config = ConfigDict(frozen=True)

    program_id: int
    institution_type: InstitutionType
    qualification: str
    institution_name: str
    required_aps: int
    matching_score: int = Field(ge=50, le=100)
    match_confidence: MatchConfidence
    success_probability: int = Field(ge=30, le=100)
    flags: list[MatchFlag] = Field(default_factory=list)
    why_matched: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Display shape
# ---------------------------------------------------------------------------


class DisplayMatchDetails(BaseModel):
    required_aps: int
    flags: list[MatchFlag]
    match_reasons: list[str]


class DisplayMatch(BaseModel):
    """ProgramMatch renamed for the dashboard tables."""

    name: str
    institution: str
    type: str  # "UNIVERSITY" or "TVET"
    match_score: int
    confidence: MatchConfidence
    probability: int
    score_passed: bool
    details: DisplayMatchDetails
