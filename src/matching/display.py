"""Output-shape adapter for the dashboard. No business logic here."""

from __future__ import annotations

from collections.abc import Iterable

from src.matching.scoring import SCORE_FLOOR
from src.schemas.matching import DisplayMatch, DisplayMatchDetails, ProgramMatch


def format_for_display(matches: Iterable[ProgramMatch]) -> list[DisplayMatch]:
    """Rename match fields for display and uppercase the institution type."""
    return [
        DisplayMatch(
            name=match.qualification,
            institution=match.institution_name,
            type=match.institution_type.value.upper(),
            match_score=match.matching_score,
            confidence=match.match_confidence,
            probability=match.success_probability,
            score_passed=match.matching_score >= SCORE_FLOOR,
            details=DisplayMatchDetails(
                required_aps=match.required_aps,
                flags=list(match.flags),
                match_reasons=list(match.why_matched),
            ),
        )
        for match in matches
    ]
