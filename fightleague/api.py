"""
REST API for league season scheduling.
Thin wrappers around the season service; nothing is persisted here.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from fightleague import config
from fightleague.services.fight_ids import InvalidFightIdentifierError, parse_fight_identifier
from fightleague.services.scheduling import ScheduleError
from fightleague.services.season_service import DivisionEntry, SeasonService

logger = logging.getLogger(__name__)


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="Fight League Scheduler API",
    description="Round-robin season schedules for league divisions",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Request models ----------


class DivisionRequest(BaseModel):
    division_number: int = Field(..., ge=1)
    division_name: str | None = Field(None, max_length=200, description="Defaults to 'Division {n}'")
    fighters: list[str] = Field(
        ...,
        min_length=2,
        max_length=config.MAX_FIGHTERS_PER_DIVISION,
        description="Ordered roster; even number of distinct fighter ids",
    )


class CreateSeasonRequest(BaseModel):
    competition_code: str = Field(..., min_length=1, max_length=20, description="Short code, e.g. 'IFC'")
    season_number: int = Field(..., ge=1)
    points_per_win: int | None = Field(None, ge=0, description="Defaults to DEFAULT_POINTS_PER_WIN")
    divisions: list[DivisionRequest] = Field(..., min_length=1)


def _schedule_error_detail(e: ScheduleError) -> dict[str, Any]:
    return {
        "kind": e.kind.value,
        "message": str(e),
        "division_number": e.division_number,
        "violations": [v.to_dict() for v in e.violations],
    }


# ---------- Seasons ----------


@app.post("/seasons")
def create_season(req: CreateSeasonRequest) -> dict[str, Any]:
    """Schedule every division of a season. Any invalid division rejects the whole season."""
    svc = SeasonService(points_per_win=req.points_per_win)
    entries = [
        DivisionEntry(
            division_number=d.division_number,
            fighters=tuple(d.fighters),
            division_name=d.division_name,
        )
        for d in req.divisions
    ]
    try:
        season = svc.build_season(req.competition_code, req.season_number, entries)
    except ScheduleError as e:
        logger.warning("Season %s-S%d rejected: %s", req.competition_code, req.season_number, e)
        raise HTTPException(status_code=400, detail=_schedule_error_detail(e))
    return season.to_dict()


@app.get("/fight-identifiers/{fight_identifier}")
def get_fight_identifier(fight_identifier: str) -> dict[str, Any]:
    """Split a fight identifier into competition code, season, division, round and fight index."""
    try:
        return parse_fight_identifier(fight_identifier).to_dict()
    except InvalidFightIdentifierError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
