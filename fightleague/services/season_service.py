"""
Season service: assemble a league season from division rosters, record results.
Assembly is all-or-nothing: every division is generated and audited before a
Season is returned; any ScheduleError aborts the whole season.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from fightleague import config
from fightleague.models import (
    CompletedFight,
    DivisionSchedule,
    FighterStats,
    Round,
    ScheduledFight,
    Season,
)
from fightleague.services.fight_ids import parse_fight_identifier
from fightleague.services.scheduling import (
    ScheduleError,
    ScheduleErrorKind,
    audit_division_schedule,
    expected_fight_count,
    generate_division_schedule,
)

logger = logging.getLogger(__name__)

# ---------- Exceptions ----------


class FightNotFoundError(LookupError):
    """No fight in the season matches the identifier."""


class FightAlreadyCompletedError(ValueError):
    """Result already recorded for this fight."""


# ---------- Input ----------


@dataclass(frozen=True)
class DivisionEntry:
    """One division's input: number, optional display name, ordered roster."""
    division_number: int
    fighters: tuple[str, ...]
    division_name: str | None = None


# ---------- SeasonService ----------


class SeasonService:
    """
    Domain logic for league seasons: scheduling every division and recording results.
    Persistence of the returned Season is the caller's job.
    """

    def __init__(self, points_per_win: int | None = None) -> None:
        self._points_per_win = points_per_win if points_per_win is not None else config.DEFAULT_POINTS_PER_WIN

    def schedule_division(
        self,
        entry: DivisionEntry,
        competition_code: str,
        season_number: int,
    ) -> DivisionSchedule:
        """
        Generate and verify one division. Raises ScheduleError if the audit finds
        duplicate pairings or the fight count is not n(n-1)/2.
        """
        roster = list(entry.fighters)
        rounds = generate_division_schedule(roster, entry.division_number, competition_code, season_number)
        violations = audit_division_schedule(rounds, entry.division_number)
        if violations:
            raise ScheduleError(
                ScheduleErrorKind.DUPLICATE_FIXTURE,
                f"Division {entry.division_number} schedule repeats {len(violations)} pairing(s)",
                division_number=entry.division_number,
                roster_size=len(roster),
                violations=violations,
            )
        actual = sum(len(r.fights) for r in rounds)
        expected = expected_fight_count(len(roster))
        if actual != expected:
            raise ScheduleError(
                ScheduleErrorKind.FIXTURE_COUNT_MISMATCH,
                f"Division {entry.division_number} has {actual} fights, expected {expected}",
                division_number=entry.division_number,
                roster_size=len(roster),
            )
        return DivisionSchedule(
            division_number=entry.division_number,
            division_name=entry.division_name or f"Division {entry.division_number}",
            fighters=roster,
            total_rounds=len(rounds),
            rounds=rounds,
        )

    def build_season(
        self,
        competition_code: str,
        season_number: int,
        divisions: Sequence[DivisionEntry],
    ) -> Season:
        """
        Schedule every division of a new season. Divisions are scheduled in the
        order given; any failure raises and no Season is returned.
        """
        if not divisions:
            raise ScheduleError(ScheduleErrorKind.NO_DIVISIONS, "A season needs at least one division")
        numbers = [d.division_number for d in divisions]
        repeated = sorted({n for n in numbers if numbers.count(n) > 1})
        if repeated:
            raise ScheduleError(
                ScheduleErrorKind.DUPLICATE_DIVISION,
                f"Division numbers used more than once: {repeated}",
                division_number=repeated[0],
            )
        # Identifiers embed the division number, so distinct divisions never share one
        schedules = [self.schedule_division(d, competition_code, season_number) for d in divisions]
        logger.info(
            "Scheduled %s season %d: %d division(s), %d fights",
            competition_code, season_number, len(schedules), sum(s.fight_count for s in schedules),
        )
        return Season(
            competition_code=competition_code,
            season_number=season_number,
            divisions=schedules,
            points_per_win=self._points_per_win,
        )

    # ---------- Results ----------

    def find_fight(self, season: Season, fight_identifier: str) -> tuple[Round, int]:
        """
        Locate a fight by identifier. Returns (round, 0-based position in round.fights).
        Raises FightNotFoundError if the identifier does not belong to this season.
        """
        fid = parse_fight_identifier(fight_identifier)
        if fid.competition_code != season.competition_code or fid.season_number != season.season_number:
            raise FightNotFoundError(
                f"Fight {fight_identifier} does not belong to {season.competition_code} season {season.season_number}"
            )
        division = season.division(fid.division_number)
        if division is None:
            raise FightNotFoundError(f"Division {fid.division_number} not found")
        rnd = next((r for r in division.rounds if r.round_number == fid.round_number), None)
        if rnd is None:
            raise FightNotFoundError(f"Round {fid.round_number} not found in division {fid.division_number}")
        position = fid.fight_index - 1
        if position >= len(rnd.fights):
            raise FightNotFoundError(f"Fight {fid.fight_index} not found in round {fid.round_number}")
        return rnd, position

    def record_result(
        self,
        season: Season,
        fight_identifier: str,
        winner_id: str,
        *,
        fight_date: datetime | None = None,
        is_simulated: bool = False,
        fighter_stats: Sequence[FighterStats] = (),
        user_description: str | None = None,
    ) -> CompletedFight:
        """
        Replace a scheduled fight with its completed version in place.
        Guards: fight exists, not already completed, winner is one of the two fighters.
        The first recorded result sets the season start date; the division's
        current_round follows completed rounds; the last result sets the end date.
        """
        rnd, position = self.find_fight(season, fight_identifier)
        fight = rnd.fights[position]
        if not isinstance(fight, ScheduledFight):
            raise FightAlreadyCompletedError(f"Fight {fight_identifier} has already been completed")
        when = fight_date or datetime.now(timezone.utc)
        completed = fight.complete(
            winner_id,
            when,
            is_simulated=is_simulated,
            fighter_stats=tuple(fighter_stats),
            user_description=None if is_simulated else user_description,
        )
        rnd.fights[position] = completed
        if season.start_date is None:
            season.start_date = when
        division = season.division(parse_fight_identifier(fight_identifier).division_number)
        division.refresh_current_round()
        if season.is_complete:
            season.end_date = max(
                f.date for d in season.divisions for r in d.rounds for f in r.fights
            )
            logger.info("%s season %d complete", season.competition_code, season.season_number)
        logger.info("Recorded %s: winner %s", fight_identifier, winner_id)
        return completed
