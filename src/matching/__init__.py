"""Matching engine — APS-gated program ranking for validated students."""

from src.matching.display import format_for_display
from src.matching.engine import ProfileMatcher, find_matches, meets_aps_minimum
from src.matching.profile import build_student_profile
from src.matching.scoring import (
    calculate_match_score,
    calculate_probability,
    determine_confidence,
    generate_flags,
    generate_match_reasons,
)
from src.schemas.matching import (
    AvailableProgram,
    DisplayMatch,
    InstitutionType,
    MatchConfidence,
    MatchFlag,
    ProgramMatch,
    StudentProfile,
)

__all__ = [
    "ProfileMatcher",
    "find_matches",
    "meets_aps_minimum",
    "format_for_display",
    "build_student_profile",
    "calculate_match_score",
    "calculate_probability",
    "determine_confidence",
    "generate_flags",
    "generate_match_reasons",
    "AvailableProgram",
    "DisplayMatch",
    "InstitutionType",
    "MatchConfidence",
    "MatchFlag",
    "ProgramMatch",
    "StudentProfile",
]
