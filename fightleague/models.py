"""
Data models for league season scheduling.
Domain objects only — no scheduling, persistence or API logic.

A season owns divisions; divisions own rounds; rounds own fights. Fights are a
tagged variant: ScheduledFight (created by the scheduler) or CompletedFight
(produced when a result is recorded). Serialised shapes use the camelCase keys
the rest of the site reads.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


# ---------- Fight status ----------
class FightStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


# ---------- FighterStats ----------
@dataclass(frozen=True)
class FighterStats:
    """Per-fighter stat block of a completed fight. Stats shape is owned by the result workflow."""
    fighter_id: str
    stats: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"fighterId": self.fighter_id, "stats": dict(self.stats)}


# ---------- ScheduledFight ----------
@dataclass(frozen=True)
class ScheduledFight:
    """
    A fight created by the scheduler. Not yet fought: no winner, date or stats.
    fighter1 != fighter2 is enforced on construction.
    """
    fighter1: str
    fighter2: str
    fight_identifier: str

    def __post_init__(self) -> None:
        if self.fighter1 == self.fighter2:
            raise ValueError(f"Fighter cannot be paired with themselves: {self.fighter1}")

    @property
    def status(self) -> FightStatus:
        return FightStatus.SCHEDULED

    def complete(
        self,
        winner: str,
        date: datetime,
        *,
        is_simulated: bool = False,
        fighter_stats: tuple[FighterStats, ...] = (),
        user_description: str | None = None,
    ) -> CompletedFight:
        """Return the completed version of this fight. Winner must be one of the two fighters."""
        return CompletedFight(
            fighter1=self.fighter1,
            fighter2=self.fighter2,
            fight_identifier=self.fight_identifier,
            winner=winner,
            date=date,
            is_simulated=is_simulated,
            fighter_stats=tuple(fighter_stats),
            user_description=user_description,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "fighter1": self.fighter1,
            "fighter2": self.fighter2,
            "winner": None,
            "fightIdentifier": self.fight_identifier,
            "date": None,
            "isSimulated": False,
            "fighterStats": [],
            "fightStatus": FightStatus.SCHEDULED.value,
        }


# ---------- CompletedFight ----------
@dataclass(frozen=True)
class CompletedFight:
    """A fought fight. Winner is always fighter1 or fighter2."""
    fighter1: str
    fighter2: str
    fight_identifier: str
    winner: str
    date: datetime
    is_simulated: bool = False
    fighter_stats: tuple[FighterStats, ...] = ()
    user_description: str | None = None

    def __post_init__(self) -> None:
        if self.fighter1 == self.fighter2:
            raise ValueError(f"Fighter cannot be paired with themselves: {self.fighter1}")
        if self.winner not in (self.fighter1, self.fighter2):
            raise ValueError(
                f"Winner must be one of the two fighters ({self.fighter1}, {self.fighter2}), got {self.winner}"
            )

    @property
    def status(self) -> FightStatus:
        return FightStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "fighter1": self.fighter1,
            "fighter2": self.fighter2,
            "winner": self.winner,
            "fightIdentifier": self.fight_identifier,
            "date": self.date.isoformat(),
            "isSimulated": self.is_simulated,
            "fighterStats": [s.to_dict() for s in self.fighter_stats],
            "fightStatus": FightStatus.COMPLETED.value,
        }
        if self.user_description is not None:
            d["userDescription"] = self.user_description
        return d


Fight = Union[ScheduledFight, CompletedFight]


# ---------- Round ----------
@dataclass
class Round:
    """One layer of a division's schedule: every fighter appears at most once."""
    round_number: int  # 1-based
    fights: list[Fight] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True once every fight in the round has a result."""
        return bool(self.fights) and all(isinstance(f, CompletedFight) for f in self.fights)

    def to_dict(self) -> dict[str, Any]:
        return {
            "roundNumber": self.round_number,
            "fights": [f.to_dict() for f in self.fights],
        }


# ---------- Violation ----------
@dataclass(frozen=True)
class Violation:
    """A pairing that broke the each-pair-exactly-once invariant."""
    division_number: int
    fighter1: str
    fighter2: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "divisionNumber": self.division_number,
            "fighter1": self.fighter1,
            "fighter2": self.fighter2,
        }


# ---------- DivisionSchedule ----------
@dataclass
class DivisionSchedule:
    """
    Full single round-robin for one division.
    total_rounds == len(fighters) - 1; current_round starts at 0 (nothing fought yet)
    and, once results come in, is the round being fought (capped at total_rounds).
    """
    division_number: int
    division_name: str
    fighters: list[str]
    total_rounds: int
    rounds: list[Round]
    current_round: int = 0

    @property
    def fight_count(self) -> int:
        return sum(len(r.fights) for r in self.rounds)

    @property
    def is_complete(self) -> bool:
        return all(r.is_complete for r in self.rounds)

    def refresh_current_round(self) -> int:
        """
        Move current_round to the round after the highest fully completed one.
        1 when no round is complete yet; total_rounds when all are.
        """
        highest = max((r.round_number for r in self.rounds if r.is_complete), default=0)
        self.current_round = min(highest + 1, self.total_rounds)
        return self.current_round

    def to_dict(self) -> dict[str, Any]:
        return {
            "divisionNumber": self.division_number,
            "divisionName": self.division_name,
            "totalRounds": self.total_rounds,
            "currentRound": self.current_round,
            "rounds": [r.to_dict() for r in self.rounds],
        }


# ---------- Season ----------
@dataclass
class Season:
    """
    One league season of a competition, as handed to persistence.
    start_date/end_date stay None until fights are recorded.
    """
    competition_code: str
    season_number: int
    divisions: list[DivisionSchedule]
    points_per_win: int
    is_active: bool = True
    start_date: datetime | None = None
    end_date: datetime | None = None

    def division(self, division_number: int) -> DivisionSchedule | None:
        for d in self.divisions:
            if d.division_number == division_number:
                return d
        return None

    @property
    def is_complete(self) -> bool:
        return bool(self.divisions) and all(d.is_complete for d in self.divisions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "competitionCode": self.competition_code,
            "isActive": self.is_active,
            "seasonMeta": {
                "seasonNumber": self.season_number,
                "startDate": self.start_date.isoformat() if self.start_date else None,
                "endDate": self.end_date.isoformat() if self.end_date else None,
                "leagueDivisions": [
                    {"divisionNumber": d.division_number, "fighters": list(d.fighters)}
                    for d in self.divisions
                ],
            },
            "leagueData": {
                "divisions": [d.to_dict() for d in self.divisions],
                "activeLeagueFights": [],
            },
            "config": {
                "leagueConfiguration": {
                    "numberOfDivisions": len(self.divisions),
                    "fightersPerDivision": [
                        {"divisionNumber": d.division_number, "numberOfFighters": len(d.fighters)}
                        for d in self.divisions
                    ],
                    "pointsPerWin": self.points_per_win,
                },
            },
        }
