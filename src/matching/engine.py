"""Matching engine — ranks a program catalog against a student profile.

Pure Python orchestrator. No DB access, no network calls.
The caller supplies the catalog and persists or renders the results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.config import get_field_constraints
from src.matching.display import format_for_display
from src.matching.scoring import (
    SCORE_FLOOR,
    calculate_match_score,
    calculate_probability,
    determine_confidence,
    generate_flags,
    generate_match_reasons,
)
from src.schemas.matching import AvailableProgram, DisplayMatch, ProgramMatch, StudentProfile
from src.schemas.student import FieldConstraints
from src.validation.rules import validate_aps_mark

logger = logging.getLogger(__name__)


def meets_aps_minimum(
    student: StudentProfile,
    program: AvailableProgram,
    constraints: FieldConstraints,
) -> bool:
    """Eligibility gate: a valid APS at or above the program requirement."""
    if student.aps_mark is None:
        return False
    if not validate_aps_mark(student.aps_mark, "aps_mark", constraints=constraints).success:
        return False
    return student.aps_mark >= program.required_aps


def _score_program(
    student: StudentProfile,
    program: AvailableProgram,
    constraints: FieldConstraints,
) -> ProgramMatch:
    aps = student.aps_mark or 0
    score = calculate_match_score(aps, program.required_aps, constraints.max_aps)
    return ProgramMatch(
        program_id=program.id,
        institution_type=program.type,
        qualification=program.qualification,
        institution_name=program.institution_name,
        required_aps=program.required_aps,
        matching_score=score,
        match_confidence=determine_confidence(score),
        success_probability=calculate_probability(score),
        flags=generate_flags(student, program),
        why_matched=generate_match_reasons(student, program),
    )


def find_matches(
    student: StudentProfile,
    programs: Iterable[AvailableProgram],
    constraints: FieldConstraints | None = None,
) -> list[ProgramMatch]:
    """Score every eligible program and rank the results.

    Programs below the APS cutoff are omitted, not reported. Results are
    sorted by matching_score descending, ties by program_id ascending.
    An empty list is a normal outcome.
    """
    c = constraints if constraints is not None else get_field_constraints()
    matches: list[ProgramMatch] = []
    evaluated = 0

    for program in programs:
        evaluated += 1
        if not meets_aps_minimum(student, program, c):
            logger.debug(
                "Program %s excluded: aps=%s required=%s",
                program.id,
                student.aps_mark,
                program.required_aps,
            )
            continue
        matches.append(_score_program(student, program, c))

    ranked = sorted(
        (m for m in matches if m.matching_score >= SCORE_FLOOR),
        key=lambda m: (-m.matching_score, m.program_id),
    )

    logger.info(
        "Matching complete: user_id=%s evaluated=%d matched=%d",
        student.user_id,
        evaluated,
        len(ranked),
    )
    return ranked


class ProfileMatcher:
    """Holds a program catalog and matches students against it.

    The catalog is copied into a tuple, so one matcher can serve
    concurrent callers.
    """

    def __init__(
        self,
        programs: Iterable[AvailableProgram],
        constraints: FieldConstraints | None = None,
    ) -> None:
        self.programs: tuple[AvailableProgram, ...] = tuple(programs)
        self.constraints = constraints if constraints is not None else get_field_constraints()

    def find_matches(self, student: StudentProfile) -> list[ProgramMatch]:
        return find_matches(student, self.programs, self.constraints)

    def format_for_display(self, matches: Iterable[ProgramMatch]) -> list[DisplayMatch]:
        return format_for_display(matches)
