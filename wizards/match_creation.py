"""Match creation: format, opponents, doubles pairings and review.

The finished match is not posted to the backend. It is handed to the session
store under a generated id for the match recording flow to pick up.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Mapping

import streamlit as st

from models.match import (
    OPPONENTS_REQUIRED,
    MatchCreationData,
    build_pairings,
    calculate_match_status,
)
from wizard.definition import WizardDefinition
from wizard.navigation_types import StepContext
from wizard.session_store import SessionResultSender
from wizard.steps import StepDefinition
from wizard.submission import SubmissionRequest
from wizard.validation import custom_rule, require_choice
from wizard.widgets import field_selectbox

WIZARD_ID = "match_creation"
RECORD_ROUTE = "/match/record"

FORMATS: dict[str, str] = {"singles": "Singles (1 vs 1)", "doubles": "Doubles (2 vs 2)"}
GENDERS: dict[str, str] = {"male": "Male", "female": "Female"}

DEFAULTS: dict[str, Any] = {
    "format": "singles",
    "currentUserGender": "male",
    "players": [],
    "partnerCode": "",
}


def _empty_player() -> dict[str, Any]:
    return {"displayName": "", "passportCode": "", "gender": None, "rankingPoints": None}


def _player_is_complete(player: object) -> bool:
    if not isinstance(player, Mapping):
        return False
    name = player.get("displayName")
    code = player.get("passportCode")
    return isinstance(name, str) and bool(name.strip()) and isinstance(code, str) and bool(code.strip())


def selected_players(fields: Mapping[str, object]) -> list[dict[str, Any]]:
    """Return the fully entered players in the slots the current format uses."""

    players = fields.get("players")
    if not isinstance(players, list):
        return []
    return [dict(player) for player in players[: _required_count(fields)] if _player_is_complete(player)]


def _required_count(fields: Mapping[str, object]) -> int:
    return OPPONENTS_REQUIRED.get(str(fields.get("format")), 1)


def _players_complete(fields: Mapping[str, object]) -> bool:
    players = selected_players(fields)
    codes = {str(player["passportCode"]).strip().upper() for player in players}
    return len(players) == _required_count(fields) and len(codes) == len(players)


def needs_pairings(fields: Mapping[str, object]) -> bool:
    """Pairings only apply to doubles once all three other players are chosen."""

    return fields.get("format") == "doubles" and len(selected_players(fields)) == OPPONENTS_REQUIRED["doubles"]


def _current_user(fields: Mapping[str, object]) -> dict[str, Any]:
    return {"displayName": "You", "gender": fields.get("currentUserGender")}


def resolve_pairings(fields: Mapping[str, object]) -> dict[str, Any] | None:
    if not needs_pairings(fields):
        return None
    partner = fields.get("partnerCode")
    if not isinstance(partner, str) or not partner:
        return None
    return build_pairings(selected_players(fields), _current_user(fields), partner)


def _pairings_set(fields: Mapping[str, object]) -> bool:
    return resolve_pairings(fields) is not None


def _player_on_change(ctx: StepContext, index: int, attribute: str, key: str) -> Callable[[], None]:
    def _callback() -> None:
        players = copy.deepcopy(list(ctx.latest().get("players") or []))
        while len(players) <= index:
            players.append(_empty_player())
        players[index][attribute] = st.session_state.get(key)
        ctx.update({"players": players})

    return _callback


def _render_format(ctx: StepContext) -> None:
    field_selectbox(ctx, "format", "Choose match format", list(FORMATS), format_func=FORMATS.get)
    field_selectbox(ctx, "currentUserGender", "Your gender", list(GENDERS), format_func=GENDERS.get)


def _render_players(ctx: StepContext) -> None:
    required = _required_count(ctx.fields)
    players = list(ctx.fields.get("players") or [])
    st.caption(f"Add {required} {'opponent' if required == 1 else 'other players'} for this match.")
    for index in range(required):
        player = players[index] if index < len(players) else _empty_player()
        with st.container(border=True):
            st.markdown(f"**Player {index + 1}**")
            name_col, code_col = st.columns(2)
            gender_col, points_col = st.columns(2)
            for column, attribute, label in (
                (name_col, "displayName", "Name"),
                (code_col, "passportCode", "Passport code"),
            ):
                key = ctx.widget_key(f"players.{index}.{attribute}")
                if key not in st.session_state:
                    st.session_state[key] = str(player.get(attribute) or "")
                column.text_input(label, key=key, on_change=_player_on_change(ctx, index, attribute, key))

            gender_key = ctx.widget_key(f"players.{index}.gender")
            if gender_key not in st.session_state:
                st.session_state[gender_key] = player.get("gender") if player.get("gender") in GENDERS else None
            gender_col.selectbox(
                "Gender",
                list(GENDERS),
                index=None,
                format_func=GENDERS.get,
                key=gender_key,
                on_change=_player_on_change(ctx, index, "gender", gender_key),
            )

            points_key = ctx.widget_key(f"players.{index}.rankingPoints")
            if points_key not in st.session_state:
                points = player.get("rankingPoints")
                st.session_state[points_key] = float(points) if isinstance(points, (int, float)) else None
            points_col.number_input(
                "Ranking points",
                min_value=0.0,
                step=10.0,
                key=points_key,
                on_change=_player_on_change(ctx, index, "rankingPoints", points_key),
            )


def _render_pairings(ctx: StepContext) -> None:
    players = selected_players(ctx.fields)
    labels = {player["passportCode"]: player["displayName"] for player in players}
    key = ctx.widget_key("partnerCode")
    if key not in st.session_state:
        current = ctx.fields.get("partnerCode")
        st.session_state[key] = current if current in labels else None

    def _on_partner_change() -> None:
        ctx.update({"partnerCode": st.session_state.get(key) or ""})

    st.radio(
        "Pick your partner",
        list(labels),
        index=None,
        format_func=lambda code: f"{labels.get(code, code)} ({code})",
        key=key,
        on_change=_on_partner_change,
    )
    pairings = resolve_pairings(ctx.fields)
    if pairings:
        team1, team2 = st.columns(2)
        team1.markdown("**Team 1**\n\n" + "\n".join(f"- {p['displayName']}" for p in pairings["team1"]))
        team2.markdown("**Team 2**\n\n" + "\n".join(f"- {p['displayName']}" for p in pairings["team2"]))


def _render_review(ctx: StepContext) -> None:
    status = calculate_match_status(
        str(ctx.fields.get("format")),
        selected_players(ctx.fields),
        ctx.fields.get("currentUserGender"),
    )
    st.markdown(f"**Format:** {FORMATS.get(str(ctx.fields.get('format')), '-')}")
    for player in selected_players(ctx.fields):
        st.markdown(f"- {player['displayName']} ({player['passportCode']})")
    st.info(status.description)
    st.metric("Competitive balance", f"{status.competitive_balance:.0f}")


STEPS: tuple[StepDefinition, ...] = (
    StepDefinition(
        key="format",
        label="Format",
        description="Singles or doubles?",
        rules=(require_choice("format", FORMATS, "Please choose singles or doubles"),),
        summary_fields=("format",),
        renderer=_render_format,
    ),
    StepDefinition(
        key="players",
        label="Players",
        description="Who is playing?",
        rules=(
            custom_rule(
                ("players", "format"),
                _players_complete,
                "Add exactly 1 opponent for singles or 3 players for doubles, each with a unique passport code",
            ),
        ),
        summary_fields=("players",),
        renderer=_render_players,
    ),
    StepDefinition(
        key="pairings",
        label="Pairings",
        description="Choose your doubles partner.",
        rules=(custom_rule(("partnerCode",), _pairings_set, "Please pick your partner"),),
        renderer=_render_pairings,
        is_active=needs_pairings,
    ),
    StepDefinition(
        key="review",
        label="Review",
        description="Check the lineup before recording the match.",
        renderer=_render_review,
    ),
)


def build_request(fields: Mapping[str, Any]) -> SubmissionRequest:
    players = selected_players(fields)
    match = MatchCreationData.model_validate(
        {
            "format": fields.get("format"),
            "selectedPlayers": players,
            "pairings": resolve_pairings(fields),
            "matchStatus": calculate_match_status(
                str(fields.get("format")),
                players,
                fields.get("currentUserGender"),
            ),
        }
    )
    return SubmissionRequest(method="POST", path=RECORD_ROUTE, payload=match.to_payload())


def build_definition() -> WizardDefinition:
    return WizardDefinition(
        wizard_id=WIZARD_ID,
        title="🎾 Create New Match",
        description="Set up a match and continue to recording.",
        steps=STEPS,
        defaults=DEFAULTS,
        build_request=build_request,
        success_title="Match Ready",
        success_message="Continue to record the match.",
        failure_title="Match Setup Failed",
        success_route=RECORD_ROUTE,
        sender=SessionResultSender,
    )


__all__ = [
    "STEPS",
    "WIZARD_ID",
    "build_definition",
    "build_request",
    "needs_pairings",
    "resolve_pairings",
    "selected_players",
]
