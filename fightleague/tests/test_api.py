"""
API integration tests.
Uses TestClient to avoid starting a server.
Requires: pip install httpx (for TestClient)
"""
from __future__ import annotations

from pathlib import Path

import pytest

try:
    from fastapi.testclient import TestClient
    HAS_HTTPX = True
except (ImportError, RuntimeError):
    HAS_HTTPX = False

# Ensure project root on path
import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

pytestmark = pytest.mark.skipif(not HAS_HTTPX, reason="httpx required for TestClient")

from fightleague.api import app


@pytest.fixture
def client():
    return TestClient(app)


def _season_body(**overrides):
    body = {
        "competition_code": "IFC",
        "season_number": 3,
        "divisions": [
            {"division_number": 1, "fighters": ["A", "B", "C", "D"]},
            {"division_number": 2, "division_name": "Challengers", "fighters": ["E", "F"]},
        ],
    }
    body.update(overrides)
    return body


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_season(client):
    """POST /seasons returns the full season document."""
    resp = client.post("/seasons", json=_season_body())
    assert resp.status_code == 200
    data = resp.json()
    assert data["seasonMeta"]["seasonNumber"] == 3
    divisions = data["leagueData"]["divisions"]
    assert [d["divisionName"] for d in divisions] == ["Division 1", "Challengers"]
    assert divisions[0]["totalRounds"] == 3
    first = divisions[0]["rounds"][0]["fights"][0]
    assert first == {
        "fighter1": "A",
        "fighter2": "D",
        "winner": None,
        "fightIdentifier": "IFC-S3-D1-R1-F1",
        "date": None,
        "isSimulated": False,
        "fighterStats": [],
        "fightStatus": "scheduled",
    }
    assert divisions[1]["rounds"][0]["fights"][0]["fightIdentifier"] == "IFC-S3-D2-R1-F1"
    assert data["config"]["leagueConfiguration"]["pointsPerWin"] == 3


def test_create_season_points_per_win(client):
    resp = client.post("/seasons", json=_season_body(points_per_win=2))
    assert resp.status_code == 200
    assert resp.json()["config"]["leagueConfiguration"]["pointsPerWin"] == 2


def test_create_season_odd_division(client):
    """Odd division: 400 with the error kind; nothing scheduled."""
    body = _season_body(divisions=[
        {"division_number": 1, "fighters": ["A", "B", "C", "D"]},
        {"division_number": 2, "fighters": ["E", "F", "G"]},
    ])
    resp = client.post("/seasons", json=body)
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["kind"] == "OddRosterSize"
    assert detail["division_number"] == 2
    assert detail["violations"] == []


def test_create_season_bad_code(client):
    resp = client.post("/seasons", json=_season_body(competition_code="IF-C"))
    assert resp.status_code == 400
    assert resp.json()["detail"]["kind"] == "InvalidCompetitionCode"


def test_create_season_validation(client):
    """Missing divisions fails request validation."""
    resp = client.post("/seasons", json={"competition_code": "IFC", "season_number": 1, "divisions": []})
    assert resp.status_code == 422


def test_parse_fight_identifier(client):
    resp = client.get("/fight-identifiers/IFC-S3-D1-R2-F1")
    assert resp.status_code == 200
    assert resp.json() == {
        "competition_code": "IFC",
        "season_number": 3,
        "division_number": 1,
        "round_number": 2,
        "fight_index": 1,
    }


def test_parse_fight_identifier_malformed(client):
    resp = client.get("/fight-identifiers/IFC-S3-D1")
    assert resp.status_code == 400
