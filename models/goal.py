"""Pydantic payloads for coach goal assignment."""

from __future__ import annotations

from datetime import date
from typing import Any, List, Literal, Mapping, Optional

from pydantic import Field, field_validator, model_validator

from models.base import CamelModel

GoalCategory = Literal["technical", "tactical", "physical", "mental"]
GoalPriority = Literal["high", "medium", "low"]


class Milestone(CamelModel):
    title: str = Field(min_length=3)
    description: str = Field(min_length=5)
    target_rating: float = Field(ge=1, le=10)
    order_index: int = Field(ge=0)
    requires_coach_validation: bool = True
    due_date: str = ""

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class GoalDraft(CamelModel):
    """A goal as entered by the coach, before it is assigned to players."""

    title: str = Field(min_length=3)
    description: str = Field(min_length=10)
    category: GoalCategory
    priority: GoalPriority
    target_date: str
    target_rating: float = Field(ge=1, le=10)
    current_rating: float = Field(ge=0, le=10)
    source_assessment_id: Optional[int] = None
    target_skill: Optional[str] = None
    milestones: List[Milestone] = Field(min_length=1)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("target_date", mode="before")
    @classmethod
    def _normalise_target_date(cls, value: object) -> object:
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str) and value.strip():
            return date.fromisoformat(value.strip()[:10]).isoformat()
        raise ValueError("target date is required")

    @model_validator(mode="after")
    def _order_milestones(self) -> "GoalDraft":
        self.milestones = sorted(self.milestones, key=lambda milestone: milestone.order_index)
        return self


class GoalAssignment(GoalDraft):
    """Body of ``POST /api/coach/goals/assign``: the goal plus one player."""

    player_id: int


class BulkGoalAssignment(CamelModel):
    """Body of ``POST /api/coach/goals/bulk-assign``."""

    goal_template: GoalDraft
    player_ids: List[int] = Field(min_length=1)
    save_as_template: bool = False
    template_name: Optional[str] = None

    @model_validator(mode="after")
    def _template_name_only_when_saving(self) -> "BulkGoalAssignment":
        if not self.save_as_template:
            self.template_name = None
        elif not (self.template_name or "").strip():
            raise ValueError("a template name is required when saving as a template")
        return self


def goal_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the goal attributes out of the wizard's field snapshot."""

    keys = (
        "title",
        "description",
        "category",
        "priority",
        "targetDate",
        "targetRating",
        "currentRating",
        "sourceAssessmentId",
        "targetSkill",
        "milestones",
    )
    return {key: fields[key] for key in keys if key in fields}


__all__ = [
    "BulkGoalAssignment",
    "GoalAssignment",
    "GoalCategory",
    "GoalDraft",
    "GoalPriority",
    "Milestone",
    "goal_fields",
]
