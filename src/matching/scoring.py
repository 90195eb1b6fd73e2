"""Scoring model for a single eligible (student, program) pair.

Score, confidence tier and success probability are fixed step/affine
functions of the APS advantage:

  score       = clamp(round(50 + (aps - required) / max_aps * 50), 50, 100)
  confidence  ≥ 85 very_high, ≥ 70 high, ≥ 60 medium, ≥ 50 low, else very_low
  probability = max(30, round(score * 0.7 + 30))

Rounding is half-up throughout.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

from src.schemas.matching import AvailableProgram, MatchConfidence, MatchFlag, StudentProfile

SCORE_FLOOR = 50
SCORE_CEILING = 100
PROBABILITY_FLOOR = 30
PROBABILITY_SLOPE = Decimal("0.7")
PROBABILITY_OFFSET = Decimal("30")

# (minimum score, tier), checked top-down
CONFIDENCE_BREAKPOINTS: tuple[tuple[int, MatchConfidence], ...] = (
    (85, MatchConfidence.VERY_HIGH),
    (70, MatchConfidence.HIGH),
    (60, MatchConfidence.MEDIUM),
    (50, MatchConfidence.LOW),
)

# APS points above the requirement before a match counts as exceeding it
EXCEEDS_MARGIN = 5

HIGH_DEMAND_KEYWORDS = ("medical", "engineering", "law")
MATH_HEAVY_PATTERN = re.compile(r"engineering|computer|mathematics")
MATH_APTITUDE_THRESHOLD = 70


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_match_score(aps_mark: int, required_aps: int, max_aps: int = 42) -> int:
    """Score an eligible pair from its APS advantage, normalized by max_aps."""
    advantage = Decimal(aps_mark - required_aps) / Decimal(max_aps)
    base_score = SCORE_FLOOR + advantage * (SCORE_CEILING - SCORE_FLOOR)
    return max(SCORE_FLOOR, min(SCORE_CEILING, _round_half_up(base_score)))


def determine_confidence(score: int) -> MatchConfidence:
    for minimum, tier in CONFIDENCE_BREAKPOINTS:
        if score >= minimum:
            return tier
    return MatchConfidence.VERY_LOW


def calculate_probability(score: int) -> int:
    """Success probability in percent, never below 30."""
    return max(PROBABILITY_FLOOR, _round_half_up(score * PROBABILITY_SLOPE + PROBABILITY_OFFSET))


def generate_flags(student: StudentProfile, program: AvailableProgram) -> list[MatchFlag]:
    """Flags for an eligible match. met_cutoff is always first."""
    aps = student.aps_mark or 0
    flags = [MatchFlag.MET_CUTOFF]

    if aps > program.required_aps + EXCEEDS_MARGIN:
        flags.append(MatchFlag.EXCEEDS_REQUIREMENTS)

    qualification = program.qualification.lower()
    if any(keyword in qualification for keyword in HIGH_DEMAND_KEYWORDS):
        flags.append(MatchFlag.RECOMMENDED_VERIFICATION)

    return flags


def generate_match_reasons(student: StudentProfile, program: AvailableProgram) -> list[str]:
    """Human-readable justification for an eligible match."""
    aps = student.aps_mark or 0
    reasons: list[str] = []

    margin = aps - program.required_aps
    if margin > 0:
        reasons.append(
            f"APS score {aps} meets requirement ({program.required_aps}) "
            f"with {margin} point margin"
        )
    else:
        reasons.append(f"APS score {aps} meets minimum requirement ({program.required_aps})")

    math_heavy = MATH_HEAVY_PATTERN.search(program.qualification.lower()) is not None
    math_mark = student.subject_marks.get("math_mark") or 0
    if math_heavy and math_mark > MATH_APTITUDE_THRESHOLD:
        reasons.append("Strong mathematical aptitude matches program requirements")

    return reasons
