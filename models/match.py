"""Match creation records and the match status calculation."""

from __future__ import annotations

from typing import Any, List, Literal, Mapping, Optional, Sequence

from pydantic import Field, field_validator

from models.base import CamelModel

MatchFormat = Literal["singles", "doubles"]
Gender = Literal["male", "female"]

# Point multipliers for players under 1000 ranking points.
MIXED_DOUBLES_BONUS = 1.075
CROSS_GENDER_SINGLES_FEMALE_BONUS = 1.15
STANDARD_BONUS = 1.0

MIN_COMPETITIVE_BALANCE = 20.0
MAX_COMPETITIVE_BALANCE = 100.0
POINTS_PER_BALANCE_UNIT = 20.0

OPPONENTS_REQUIRED: dict[str, int] = {"singles": 1, "doubles": 3}


class MatchPlayer(CamelModel):
    display_name: str = Field(min_length=1)
    passport_code: str = Field(min_length=1)
    gender: Optional[Gender] = None
    ranking_points: Optional[float] = Field(default=None, ge=0)

    @field_validator("display_name", "passport_code", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("gender", mode="before")
    @classmethod
    def _blank_gender(cls, value: object) -> object:
        return value or None


class Pairings(CamelModel):
    team1: List[dict[str, Any]] = Field(min_length=2, max_length=2)
    team2: List[dict[str, Any]] = Field(min_length=2, max_length=2)


class MatchStatus(CamelModel):
    competitive_balance: float
    gender_bonus: float
    description: str


class MatchCreationData(CamelModel):
    """The finalized match handed to the recording flow."""

    format: MatchFormat
    selected_players: List[MatchPlayer]
    pairings: Optional[Pairings] = None
    match_status: MatchStatus


def _gender_of(player: Mapping[str, Any] | MatchPlayer) -> str | None:
    if isinstance(player, MatchPlayer):
        return player.gender
    value = player.get("gender")
    return value if isinstance(value, str) and value else None


def _points_of(player: Mapping[str, Any] | MatchPlayer) -> float | None:
    value = player.ranking_points if isinstance(player, MatchPlayer) else player.get("rankingPoints")
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def calculate_match_status(
    match_format: str,
    opponents: Sequence[Mapping[str, Any] | MatchPlayer],
    current_user_gender: str | None,
) -> MatchStatus:
    """Return the gender bonus and competitive balance for a prospective match.

    Doubles earn the mixed bonus when both genders are on court. Singles earn
    the cross-gender bonus only when the opponent is female and the current
    user is not. Competitive balance is ``100 - avg_points / 20`` clamped to
    ``[20, 100]`` over the players whose ranking points are known.
    """

    if not opponents:
        return MatchStatus(
            competitive_balance=0,
            gender_bonus=0,
            description="Select players to see match analysis",
        )

    genders = [current_user_gender, *(_gender_of(player) for player in opponents)]
    male_count = sum(1 for gender in genders if gender == "male")
    female_count = sum(1 for gender in genders if gender == "female")

    bonus = STANDARD_BONUS
    if match_format == "doubles":
        if male_count and female_count:
            bonus = MIXED_DOUBLES_BONUS
            description = f"🎉 Mixed Gender Match • {bonus}x point multiplier"
        else:
            description = "⚪ Same Gender Match • Standard points"
    else:
        opponent_gender = _gender_of(opponents[0])
        if len(opponents) == 1 and opponent_gender != current_user_gender:
            if opponent_gender == "female":
                bonus = CROSS_GENDER_SINGLES_FEMALE_BONUS
                description = f"💪 Cross-Gender Match • {bonus}x point multiplier for female player"
            else:
                description = "⚔️ Cross-Gender Match • Standard points"
        else:
            description = "⚪ Same Gender Match • Standard points"

    points = [value for value in (_points_of(player) for player in opponents) if value is not None]
    average = sum(points) / len(points) if points else 0.0
    balance = min(
        MAX_COMPETITIVE_BALANCE,
        max(MIN_COMPETITIVE_BALANCE, MAX_COMPETITIVE_BALANCE - average / POINTS_PER_BALANCE_UNIT),
    )
    return MatchStatus(competitive_balance=balance, gender_bonus=bonus, description=description)


def build_pairings(players: Sequence[Mapping[str, Any]], you: Mapping[str, Any], partner_code: str) -> dict[str, Any] | None:
    """Split a doubles lineup into teams with ``you`` and the chosen partner on team 1."""

    partner = next((player for player in players if player.get("passportCode") == partner_code), None)
    if partner is None:
        return None
    others = [dict(player) for player in players if player is not partner]
    return {"team1": [dict(you), dict(partner)], "team2": others}


__all__ = [
    "CROSS_GENDER_SINGLES_FEMALE_BONUS",
    "MIXED_DOUBLES_BONUS",
    "MatchCreationData",
    "MatchFormat",
    "MatchPlayer",
    "MatchStatus",
    "OPPONENTS_REQUIRED",
    "Pairings",
    "build_pairings",
    "calculate_match_status",
]
