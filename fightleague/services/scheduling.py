"""
Deterministic round-robin schedule generation for league divisions.

Round-robin is used so every fighter meets every other fighter in the division
exactly once; a division of N fighters (N even) runs N-1 rounds of N/2 fights.
Odd divisions are rejected: there are no byes.

Uses the circle method: fix first slot, rotate the others each round. Same roster
ordering yields the same schedule, and every fight gets an identifier of the form
"{code}-S{season}-D{division}-R{round}-F{index}".

audit_division_schedule() replays a generated schedule and reports any pairing
that occurs twice; callers must discard a schedule with violations.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from fightleague.models import Fight, Round, ScheduledFight, Violation
from fightleague.services.fight_ids import format_fight_identifier, is_valid_competition_code

logger = logging.getLogger(__name__)


# ---------- Exceptions ----------


class ScheduleErrorKind(str, Enum):
    ODD_ROSTER_SIZE = "OddRosterSize"
    MISSING_COMPETITION_CODE = "MissingCompetitionCode"
    INVALID_COMPETITION_CODE = "InvalidCompetitionCode"
    INVALID_NUMBERING = "InvalidNumbering"
    DUPLICATE_COMPETITOR = "DuplicateCompetitor"
    DUPLICATE_DIVISION = "DuplicateDivision"
    NO_DIVISIONS = "NoDivisions"
    DUPLICATE_FIXTURE = "DuplicateFixture"
    FIXTURE_COUNT_MISMATCH = "FixtureCountMismatch"


class ScheduleError(ValueError):
    """Schedule cannot be produced or failed verification. Never retryable."""

    def __init__(
        self,
        kind: ScheduleErrorKind,
        message: str,
        *,
        division_number: int | None = None,
        roster_size: int | None = None,
        violations: Sequence[Violation] = (),
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.division_number = division_number
        self.roster_size = roster_size
        self.violations = list(violations)


# ---------- Pairings ----------


def round_robin_pairings(roster: Sequence[str]) -> list[list[tuple[str, str]]]:
    """
    Circle-method pairings, one list of (fighter1, fighter2) per round.
    Roster must have even length; caller validates.
    """
    n = len(roster)
    rounds: list[list[tuple[str, str]]] = []
    order = list(roster)
    for _ in range(n - 1):
        # Pair order[0] with order[n-1], order[1] with order[n-2], ...
        rounds.append([(order[i], order[n - 1 - i]) for i in range(n // 2)])
        # Rotate: keep 0, then order[n-1], order[1], order[2], ..., order[n-2]
        order = [order[0]] + [order[n - 1]] + order[1 : n - 1]
    return rounds


def expected_fight_count(roster_size: int) -> int:
    """n(n-1)/2: every unordered pair once."""
    return roster_size * (roster_size - 1) // 2


def _validate_inputs(
    roster: Sequence[str], division_number: int, competition_code: str | None, season_number: int
) -> None:
    n = len(roster)
    if n < 2 or n % 2 == 1:
        logger.warning("Rejecting division %s roster of size %d", division_number, n)
        raise ScheduleError(
            ScheduleErrorKind.ODD_ROSTER_SIZE,
            f"Division {division_number} needs an even number of fighters (at least 2), got {n}",
            division_number=division_number,
            roster_size=n,
        )
    repeated = sorted({f for f in roster if roster.count(f) > 1})
    if repeated:
        raise ScheduleError(
            ScheduleErrorKind.DUPLICATE_COMPETITOR,
            f"Division {division_number} roster lists fighters more than once: {', '.join(repeated)}",
            division_number=division_number,
            roster_size=n,
        )
    if not competition_code:
        raise ScheduleError(
            ScheduleErrorKind.MISSING_COMPETITION_CODE,
            "Competition code is required to build fight identifiers",
            division_number=division_number,
            roster_size=n,
        )
    if not is_valid_competition_code(competition_code):
        raise ScheduleError(
            ScheduleErrorKind.INVALID_COMPETITION_CODE,
            f"Competition code may only contain letters, digits and underscores: {competition_code!r}",
            division_number=division_number,
            roster_size=n,
        )
    for label, value in (("Division", division_number), ("Season", season_number)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ScheduleError(
                ScheduleErrorKind.INVALID_NUMBERING,
                f"{label} number must be a positive integer, got {value!r}",
                division_number=division_number,
                roster_size=n,
            )


# ---------- Generator ----------


def generate_division_schedule(
    roster: Sequence[str],
    division_number: int,
    competition_code: str | None,
    season_number: int,
) -> list[Round]:
    """
    Return rounds 1..n-1 of a single round-robin for one division.
    Every fight is scheduled (no winner, date or stats). The roster is not modified.
    Raises ScheduleError on an odd/short roster or a missing/unsafe competition code.
    """
    _validate_inputs(roster, division_number, competition_code, season_number)
    rounds: list[Round] = []
    for round_number, pairs in enumerate(round_robin_pairings(roster), start=1):
        fights: list[Fight] = [
            ScheduledFight(
                fighter1=f1,
                fighter2=f2,
                fight_identifier=format_fight_identifier(
                    competition_code, season_number, division_number, round_number, index
                ),
            )
            for index, (f1, f2) in enumerate(pairs, start=1)
        ]
        rounds.append(Round(round_number=round_number, fights=fights))
    return rounds


# ---------- Auditor ----------


def _pair_key(fighter1: str, fighter2: str) -> tuple[str, str]:
    a, b = sorted((fighter1, fighter2))
    return a, b


def audit_division_schedule(rounds: Sequence[Round], division_number: int) -> list[Violation]:
    """
    Replay every fight and report pairings seen more than once.
    Empty list means the schedule passes. Never modifies the rounds.
    """
    seen: set[tuple[str, str]] = set()
    violations: list[Violation] = []
    for rnd in rounds:
        for fight in rnd.fights:
            key = _pair_key(fight.fighter1, fight.fighter2)
            if key in seen:
                violations.append(Violation(division_number, fight.fighter1, fight.fighter2))
            seen.add(key)
    if violations:
        logger.warning("Division %s audit found %d duplicate pairings", division_number, len(violations))
    return violations
