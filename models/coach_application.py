"""Pydantic payloads for the coach application endpoints."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import Field, field_validator
from pydantic.alias_generators import to_camel

from constants.patterns import EMAIL_PATTERN
from models.base import CamelModel


class Certification(CamelModel):
    certification_type: str = ""
    issuing_organization: str = ""
    certification_number: str = ""
    issued_date: str = ""
    expiration_date: str = ""


class CoachApplicationPayload(CamelModel):
    """Body of ``POST /api/coach/application/submit`` for the full application.

    The form collects ``hourlyRate``; the backend names the same value
    ``individualRate``.
    """

    teaching_philosophy: str = Field(min_length=50)
    experience_years: int = Field(gt=0)
    specializations: List[str] = Field(min_length=1)
    previous_experience: str = Field(min_length=20)
    availability_data: dict[str, Any] = Field(default_factory=dict)
    achievements: str = ""
    individual_rate: float = Field(gt=0)
    group_rate: float = Field(default=0, ge=0)
    background_check_consent: bool
    certifications: List[Certification] = Field(default_factory=list)
    pcp_certification_interest: bool = False
    pcp_certification_email: str = ""

    @field_validator("teaching_philosophy", "previous_experience", "achievements", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("background_check_consent")
    @classmethod
    def _require_consent(cls, value: bool) -> bool:
        if not value:
            raise ValueError("background check consent is required")
        return value

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "CoachApplicationPayload":
        """Build the payload from the wizard's camelCase field snapshot."""

        availability = fields.get("availability") or []
        availability_data = dict(fields.get("availabilityData") or {})
        if availability:
            availability_data.setdefault("preferredTimes", list(availability))
        return cls(
            teaching_philosophy=fields.get("teachingPhilosophy", ""),
            experience_years=fields.get("experienceYears", 0),
            specializations=list(fields.get("specializations") or []),
            previous_experience=fields.get("previousExperience", ""),
            availability_data=availability_data,
            achievements=fields.get("achievements") or "",
            individual_rate=fields.get("hourlyRate", 0),
            group_rate=fields.get("groupRate") or 0,
            background_check_consent=fields.get("backgroundCheckConsent") is True,
            certifications=list(fields.get("certifications") or []),
            pcp_certification_interest=fields.get("pcpCertificationInterest") is True,
            pcp_certification_email=fields.get("pcpCertificationEmail") or "",
        )


class Level1ApplicationPayload(CamelModel):
    """Body of the Level 1 coach application; mirrors the form one-to-one."""

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str = ""
    location: str = ""
    playing_experience: str = ""
    skill_level: str = Field(min_length=1)
    why_coach: str = Field(min_length=1)
    teaching_experience: str = ""
    coaching_goals: str = Field(min_length=1)
    hours_per_week: str = Field(min_length=1)
    preferred_schedule: List[str] = Field(default_factory=list)
    in_person_online: str = Field(min_length=1)
    travel_distance: str = ""
    reference1_name: str = Field(min_length=1)
    reference1_email: str = Field(pattern=EMAIL_PATTERN)
    reference1_relationship: str = ""
    reference2_name: str = Field(min_length=1)
    reference2_email: str = Field(pattern=EMAIL_PATTERN)
    reference2_relationship: str = ""
    background_check: bool = False
    understands_level1: bool
    commits_to_certification: bool
    agrees_to_terms: bool
    additional_comments: Optional[str] = ""

    @field_validator("*", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "Level1ApplicationPayload":
        known = {name: fields[name] for name in _LEVEL1_FIELD_NAMES if name in fields}
        return cls.model_validate(known)


_LEVEL1_FIELD_NAMES = tuple(
    to_camel(name) for name in Level1ApplicationPayload.model_fields
)


__all__ = ["Certification", "CoachApplicationPayload", "Level1ApplicationPayload"]
