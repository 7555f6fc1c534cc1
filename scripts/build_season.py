#!/usr/bin/env python3
"""
Build a season schedule from a JSON rosters file and print the season document.
Run from project root:

  python3 scripts/build_season.py --code IFC --season 3 rosters.json

rosters.json: {"1": ["fighter-a", "fighter-b", ...], "2": [...]}
(keys are division numbers; each roster needs an even number of fighters)
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fightleague import config
from fightleague.services import DivisionEntry, ScheduleError, SeasonService


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a round-robin league season")
    parser.add_argument("rosters", type=Path, help="JSON file mapping division number to roster")
    parser.add_argument("--code", required=True, help="Competition short code, e.g. IFC")
    parser.add_argument("--season", type=int, required=True, help="Season number")
    parser.add_argument("--points-per-win", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    rosters = json.loads(args.rosters.read_text(encoding="utf-8"))
    entries = [
        DivisionEntry(division_number=int(number), fighters=tuple(fighters))
        for number, fighters in sorted(rosters.items(), key=lambda kv: int(kv[0]))
    ]
    try:
        season = SeasonService(points_per_win=args.points_per_win).build_season(
            args.code, args.season, entries
        )
    except ScheduleError as e:
        print(f"Season rejected ({e.kind.value}): {e}", file=sys.stderr)
        return 1
    print(json.dumps(season.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
