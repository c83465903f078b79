"""Coach goal creation: goal details, milestones, then single or bulk assignment."""

from __future__ import annotations

import copy
from datetime import date, timedelta
from typing import Any, Callable, Mapping

import streamlit as st

from models.goal import BulkGoalAssignment, GoalAssignment, goal_fields
from wizard.definition import WizardDefinition
from wizard.navigation_types import StepContext
from wizard.steps import StepDefinition
from wizard.submission import SubmissionRequest
from wizard.validation import (
    custom_rule,
    require_choice,
    require_in_range,
    require_min_length,
    require_present,
    to_number,
)
from wizard.widgets import (
    field_checkbox,
    field_date_input,
    field_number_input,
    field_selectbox,
    field_text_area,
    field_text_input,
)

WIZARD_ID = "goal_creation"
ASSIGN_PATH = "/api/coach/goals/assign"
BULK_ASSIGN_PATH = "/api/coach/goals/bulk-assign"

CATEGORIES: tuple[str, ...] = ("technical", "tactical", "physical", "mental")
PRIORITIES: tuple[str, ...] = ("high", "medium", "low")

TARGET_DATE_OFFSET_DAYS = 90
FIRST_MILESTONE_OFFSET_DAYS = 30
MIN_TITLE_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 10
MIN_MILESTONE_TITLE_LENGTH = 3
MIN_MILESTONE_DESCRIPTION_LENGTH = 5


def new_milestone(index: int, *, today: date | None = None) -> dict[str, Any]:
    start = today or date.today()
    if index == 0:
        return {
            "title": "Foundation Phase",
            "description": "Build basic skills and understanding",
            "targetRating": 6,
            "orderIndex": 0,
            "requiresCoachValidation": True,
            "dueDate": (start + timedelta(days=FIRST_MILESTONE_OFFSET_DAYS)).isoformat(),
        }
    return {
        "title": f"Milestone {index + 1}",
        "description": "",
        "targetRating": 7,
        "orderIndex": index,
        "requiresCoachValidation": True,
        "dueDate": (start + timedelta(days=FIRST_MILESTONE_OFFSET_DAYS * (index + 1))).isoformat(),
    }


def build_defaults(today: date | None = None) -> dict[str, Any]:
    start = today or date.today()
    return {
        "title": "",
        "description": "",
        "category": "technical",
        "priority": "medium",
        "targetDate": (start + timedelta(days=TARGET_DATE_OFFSET_DAYS)).isoformat(),
        "targetRating": 7,
        "currentRating": 5,
        "milestones": [new_milestone(0, today=start)],
        "playerIds": [],
        "saveAsTemplate": False,
        "templateName": "",
    }


def _milestone_is_valid(milestone: object) -> bool:
    if not isinstance(milestone, Mapping):
        return False
    title = milestone.get("title")
    description = milestone.get("description")
    rating = to_number(milestone.get("targetRating"))
    return (
        isinstance(title, str)
        and len(title.strip()) >= MIN_MILESTONE_TITLE_LENGTH
        and isinstance(description, str)
        and len(description.strip()) >= MIN_MILESTONE_DESCRIPTION_LENGTH
        and rating is not None
        and 1 <= rating <= 10
    )


def _milestones_valid(fields: Mapping[str, object]) -> bool:
    milestones = fields.get("milestones")
    return isinstance(milestones, list) and bool(milestones) and all(map(_milestone_is_valid, milestones))


def parse_player_ids(raw: object) -> list[int]:
    """Parse ``"12, 15 18"`` style input into unique positive ids, in order."""

    if isinstance(raw, (list, tuple)):
        tokens = [str(item) for item in raw]
    elif isinstance(raw, str):
        tokens = raw.replace(",", " ").split()
    else:
        return []
    ids: list[int] = []
    for token in tokens:
        try:
            value = int(token)
        except ValueError:
            continue
        if value > 0 and value not in ids:
            ids.append(value)
    return ids


def _players_selected(fields: Mapping[str, object]) -> bool:
    return bool(parse_player_ids(fields.get("playerIds")))


def _template_named(fields: Mapping[str, object]) -> bool:
    if fields.get("saveAsTemplate") is not True:
        return True
    name = fields.get("templateName")
    return isinstance(name, str) and bool(name.strip())


def _render_goal(ctx: StepContext) -> None:
    field_text_input(ctx, "title", "Goal title")
    field_text_area(ctx, "description", "Description")
    left, right = st.columns(2)
    with left:
        field_selectbox(ctx, "category", "Category", CATEGORIES, format_func=str.title)
        field_number_input(ctx, "currentRating", "Current rating", min_value=0, max_value=10, step=1)
    with right:
        field_selectbox(ctx, "priority", "Priority", PRIORITIES, format_func=str.title)
        field_number_input(ctx, "targetRating", "Target rating", min_value=1, max_value=10, step=1)
    field_date_input(ctx, "targetDate", "Target date")


def _milestone_on_change(ctx: StepContext, index: int, attribute: str, key: str) -> Callable[[], None]:
    def _callback() -> None:
        milestones = copy.deepcopy(list(ctx.latest().get("milestones") or []))
        if index >= len(milestones):
            return
        value = st.session_state.get(key)
        if isinstance(value, date):
            value = value.isoformat()
        milestones[index][attribute] = value
        ctx.update({"milestones": milestones})

    return _callback


def _render_milestones(ctx: StepContext) -> None:
    milestones = list(ctx.fields.get("milestones") or [])
    for index, milestone in enumerate(milestones):
        with st.container(border=True):
            st.markdown(f"**Milestone {index + 1}**")
            for attribute, label in (("title", "Title"), ("description", "Description")):
                key = ctx.widget_key(f"milestones.{index}.{attribute}")
                if key not in st.session_state:
                    st.session_state[key] = str(milestone.get(attribute) or "")
                st.text_input(label, key=key, on_change=_milestone_on_change(ctx, index, attribute, key))
            rating_key = ctx.widget_key(f"milestones.{index}.targetRating")
            if rating_key not in st.session_state:
                st.session_state[rating_key] = int(to_number(milestone.get("targetRating")) or 1)
            st.number_input(
                "Target rating",
                min_value=1,
                max_value=10,
                step=1,
                key=rating_key,
                on_change=_milestone_on_change(ctx, index, "targetRating", rating_key),
            )
            validation_key = ctx.widget_key(f"milestones.{index}.requiresCoachValidation")
            if validation_key not in st.session_state:
                st.session_state[validation_key] = milestone.get("requiresCoachValidation") is True
            st.checkbox(
                "Requires coach validation",
                key=validation_key,
                on_change=_milestone_on_change(ctx, index, "requiresCoachValidation", validation_key),
            )

    add_col, remove_col = st.columns(2)
    if add_col.button("➕ Add milestone", key=ctx.widget_key("milestones.add")):
        ctx.update({"milestones": [*copy.deepcopy(milestones), new_milestone(len(milestones))]})
        st.rerun()
    if remove_col.button(
        "➖ Remove last milestone",
        key=ctx.widget_key("milestones.remove"),
        disabled=len(milestones) <= 1,
    ):
        stale_prefix = ctx.widget_key(f"milestones.{len(milestones) - 1}.")
        for key in [key for key in st.session_state.keys() if str(key).startswith(stale_prefix)]:
            del st.session_state[key]
        ctx.update({"milestones": copy.deepcopy(milestones[:-1])})
        st.rerun()


def _render_assignment(ctx: StepContext) -> None:
    key = ctx.widget_key("playerIds")
    if key not in st.session_state:
        st.session_state[key] = ", ".join(str(pid) for pid in parse_player_ids(ctx.fields.get("playerIds")))

    def _on_players_change() -> None:
        ctx.update({"playerIds": parse_player_ids(st.session_state.get(key))})

    st.text_input(
        "Player IDs",
        key=key,
        on_change=_on_players_change,
        help="One id assigns the goal directly; several ids use bulk assignment.",
    )
    player_ids = parse_player_ids(ctx.fields.get("playerIds"))
    if len(player_ids) > 1:
        st.caption(f"Bulk assignment to {len(player_ids)} players")
    if field_checkbox(ctx, "saveAsTemplate", "Save this goal as a template"):
        field_text_input(ctx, "templateName", "Template name")


STEPS: tuple[StepDefinition, ...] = (
    StepDefinition(
        key="goal",
        label="Goal",
        description="Describe what the player should achieve.",
        rules=(
            require_min_length("title", MIN_TITLE_LENGTH, "Title must be at least 3 characters"),
            require_min_length(
                "description",
                MIN_DESCRIPTION_LENGTH,
                "Description must be at least 10 characters",
            ),
            require_choice("category", CATEGORIES),
            require_choice("priority", PRIORITIES),
            require_present("targetDate", "Target date is required"),
            require_in_range("targetRating", 1, 10),
            require_in_range("currentRating", 0, 10),
        ),
        summary_fields=("title", "category", "priority", "targetDate"),
        renderer=_render_goal,
    ),
    StepDefinition(
        key="milestones",
        label="Milestones",
        description="Break the goal into checkpoints.",
        rules=(
            custom_rule(
                ("milestones",),
                _milestones_valid,
                "Every milestone needs a title (3+ characters), a description (5+ characters) and a rating from 1 to 10",
            ),
        ),
        renderer=_render_milestones,
    ),
    StepDefinition(
        key="assignment",
        label="Assign",
        description="Choose who receives this goal.",
        rules=(
            custom_rule(("playerIds",), _players_selected, "Please select at least one player"),
            custom_rule(
                ("saveAsTemplate", "templateName"),
                _template_named,
                "Please name the template",
            ),
        ),
        summary_fields=("playerIds",),
        renderer=_render_assignment,
    ),
)


def build_request(fields: Mapping[str, Any]) -> SubmissionRequest:
    """Route one player to the single assign endpoint and several to bulk assign."""

    goal = goal_fields(fields)
    milestones = [
        {**milestone, "orderIndex": index} for index, milestone in enumerate(goal.get("milestones") or [])
    ]
    goal["milestones"] = milestones
    player_ids = parse_player_ids(fields.get("playerIds"))
    save_as_template = fields.get("saveAsTemplate") is True

    if len(player_ids) == 1 and not save_as_template:
        payload = GoalAssignment.model_validate({**goal, "playerId": player_ids[0]})
        return SubmissionRequest(method="POST", path=ASSIGN_PATH, payload=payload.to_payload())

    bulk = BulkGoalAssignment.model_validate(
        {
            "goalTemplate": goal,
            "playerIds": player_ids,
            "saveAsTemplate": save_as_template,
            "templateName": fields.get("templateName"),
        }
    )
    return SubmissionRequest(method="POST", path=BULK_ASSIGN_PATH, payload=bulk.to_payload())


def build_definition() -> WizardDefinition:
    return WizardDefinition(
        wizard_id=WIZARD_ID,
        title="Create Player Goal",
        description="Set a development goal with milestones and assign it to players.",
        steps=STEPS,
        defaults=build_defaults(),
        build_request=build_request,
        success_title="Goal Created Successfully",
        success_message="The goal has been assigned.",
        failure_title="Goal Creation Failed",
        success_route="/coach/goals",
    )


__all__ = [
    "STEPS",
    "WIZARD_ID",
    "build_defaults",
    "build_definition",
    "build_request",
    "new_milestone",
    "parse_player_ids",
]
