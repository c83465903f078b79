"""Pydantic request bodies and records exchanged with the Pickle+ backend."""

from .base import CamelModel
from .coach_application import CoachApplicationPayload, Level1ApplicationPayload
from .goal import BulkGoalAssignment, GoalAssignment, GoalDraft, Milestone
from .match import MatchCreationData, MatchPlayer, MatchStatus, calculate_match_status

__all__ = [
    "BulkGoalAssignment",
    "CamelModel",
    "CoachApplicationPayload",
    "GoalAssignment",
    "GoalDraft",
    "Level1ApplicationPayload",
    "MatchCreationData",
    "MatchPlayer",
    "MatchStatus",
    "Milestone",
    "calculate_match_status",
]
