"""
Tests for fight identifier formatting and parsing.
"""
from __future__ import annotations

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from fightleague.services.fight_ids import (
    FightIdentifier,
    InvalidFightIdentifierError,
    format_fight_identifier,
    is_valid_competition_code,
    parse_fight_identifier,
)


def test_format():
    assert format_fight_identifier("IFC", 3, 1, 1, 2) == "IFC-S3-D1-R1-F2"


def test_parse():
    fid = parse_fight_identifier("IFC-S10-D2-R7-F4")
    assert fid == FightIdentifier("IFC", 10, 2, 7, 4)
    assert str(fid) == "IFC-S10-D2-R7-F4"
    assert fid.to_dict() == {
        "competition_code": "IFC",
        "season_number": 10,
        "division_number": 2,
        "round_number": 7,
        "fight_index": 4,
    }


@pytest.mark.parametrize(
    "token",
    [
        "",
        "IFC",
        "IFC-S3-D1-R1",
        "IFC-S3-D1-R1-F0",
        "IFC-S0-D1-R1-F1",
        "IF-C-S3-D1-R1-F1",
        "IFC-S3-D1-R1-F1-extra",
        "IFC-s3-d1-r1-f1",
        "S3-D1-R1-F1",
    ],
)
def test_parse_rejects_malformed(token):
    with pytest.raises(InvalidFightIdentifierError):
        parse_fight_identifier(token)


def test_invalid_identifier_is_value_error():
    with pytest.raises(ValueError):
        parse_fight_identifier("nope")


@pytest.mark.parametrize("code, ok", [("IFC", True), ("ifl_2", True), ("", False), (None, False), ("A-B", False), ("A B", False)])
def test_competition_code_validation(code, ok):
    assert is_valid_competition_code(code) is ok


@pytest.mark.parametrize("code", ["IFC\n", "IFC\r\n", "IFC٣", "ＩＦＣ", 123, ["IFC"]])
def test_competition_code_must_be_plain_ascii_str(code):
    assert is_valid_competition_code(code) is False


@pytest.mark.parametrize(
    "token",
    [
        "IFC-S3-D1-R1-F1\n",
        "IFC\n-S3-D1-R1-F1",
        "IFC-S1٣-D1-R1-F1",
        "IFC-S3-D١-R1-F1",
        "IFC-S3-D1-R1-F１",
    ],
)
def test_parse_rejects_non_canonical_tokens(token):
    """Only the exact formatted spelling parses; no trailing newline, ASCII digits only."""
    with pytest.raises(InvalidFightIdentifierError):
        parse_fight_identifier(token)


def test_parse_rejects_non_string():
    with pytest.raises(InvalidFightIdentifierError):
        parse_fight_identifier(None)  # type: ignore[arg-type]
