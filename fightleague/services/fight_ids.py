"""
Fight identifiers: "{code}-S{season}-D{division}-R{round}-F{index}".

The identifier is the stable key downstream readers use to look up a fight's
result, so it must round-trip: format -> parse gives back the same parts.
Competition codes may not contain "-" (the part separator).
"""
from __future__ import annotations

import re
from dataclasses import dataclass

_CODE_RE = re.compile(r"[A-Za-z0-9_]+")
_IDENTIFIER_RE = re.compile(
    r"(?P<code>[A-Za-z0-9_]+)-S(?P<season>[1-9][0-9]*)-D(?P<division>[1-9][0-9]*)"
    r"-R(?P<round>[1-9][0-9]*)-F(?P<index>[1-9][0-9]*)"
)


class InvalidFightIdentifierError(ValueError):
    """Token does not follow the fight identifier format."""


@dataclass(frozen=True)
class FightIdentifier:
    """Parsed parts of a fight identifier. fight_index is 1-based within the round."""
    competition_code: str
    season_number: int
    division_number: int
    round_number: int
    fight_index: int

    def __str__(self) -> str:
        return format_fight_identifier(
            self.competition_code,
            self.season_number,
            self.division_number,
            self.round_number,
            self.fight_index,
        )

    def to_dict(self) -> dict[str, int | str]:
        return {
            "competition_code": self.competition_code,
            "season_number": self.season_number,
            "division_number": self.division_number,
            "round_number": self.round_number,
            "fight_index": self.fight_index,
        }


def is_valid_competition_code(code: str | None) -> bool:
    """True if code is non-empty and only letters, digits or underscore."""
    return isinstance(code, str) and _CODE_RE.fullmatch(code) is not None


def format_fight_identifier(
    competition_code: str,
    season_number: int,
    division_number: int,
    round_number: int,
    fight_index: int,
) -> str:
    return f"{competition_code}-S{season_number}-D{division_number}-R{round_number}-F{fight_index}"


def parse_fight_identifier(token: str) -> FightIdentifier:
    """Split an identifier into its parts. Raises InvalidFightIdentifierError if malformed."""
    m = _IDENTIFIER_RE.fullmatch(token) if isinstance(token, str) else None
    if m is None:
        raise InvalidFightIdentifierError(f"Invalid fight identifier: {token!r}")
    return FightIdentifier(
        competition_code=m.group("code"),
        season_number=int(m.group("season")),
        division_number=int(m.group("division")),
        round_number=int(m.group("round")),
        fight_index=int(m.group("index")),
    )
