"""
Service layer: round-robin generation, audit, season assembly, result recording.
No persistence here; callers store the returned Season.
"""
from .scheduling import (
    ScheduleError,
    ScheduleErrorKind,
    audit_division_schedule,
    generate_division_schedule,
)
from .season_service import (
    DivisionEntry,
    FightAlreadyCompletedError,
    FightNotFoundError,
    SeasonService,
)

__all__ = [
    "ScheduleError",
    "ScheduleErrorKind",
    "audit_division_schedule",
    "generate_division_schedule",
    "DivisionEntry",
    "FightAlreadyCompletedError",
    "FightNotFoundError",
    "SeasonService",
]
