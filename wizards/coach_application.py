"""Five-step coach application (``/coach/apply``)."""

from __future__ import annotations

from typing import Any, Mapping

import streamlit as st

from models.coach_application import CoachApplicationPayload
from wizard.definition import WizardDefinition
from wizard.navigation_types import StepContext
from wizard.steps import StepDefinition
from wizard.submission import SubmissionRequest
from wizard.validation import (
    require_all_true,
    require_min_length,
    require_non_empty_list,
    require_positive,
)
from wizard.widgets import (
    field_checkbox,
    field_multiselect,
    field_number_input,
    field_selectbox,
    field_text_area,
    field_text_input,
)

WIZARD_ID = "coach_application"
SUBMIT_PATH = "/api/coach/application/submit"

MIN_PHILOSOPHY_LENGTH = 50
MIN_PREVIOUS_EXPERIENCE_LENGTH = 20

COACH_TYPES: dict[str, str] = {
    "independent": "Independent Coach: teach privately and set your own rates",
    "facility": "Facility Coach: work at facilities assigned by administrators",
    "volunteer": "Volunteer Coach: teach community programs and beginner clinics",
    "guest": "Guest Coach: occasional coaching for special events",
}

SPECIALIZATIONS: tuple[str, ...] = (
    "Singles Strategy",
    "Doubles Strategy",
    "Beginner Fundamentals",
    "Advanced Techniques",
    "Serve & Return",
    "Third Shot Drop",
    "Dinking",
    "Volley Techniques",
    "Court Positioning",
    "Mental Game",
    "Youth Coaching",
    "Senior Coaching",
    "Tournament Preparation",
    "Injury Prevention",
)

AVAILABILITY_SLOTS: tuple[str, ...] = (
    "Weekday Mornings",
    "Weekday Afternoons",
    "Weekday Evenings",
    "Weekend Mornings",
    "Weekend Afternoons",
    "Weekend Evenings",
)

DEFAULTS: dict[str, Any] = {
    "coachType": "independent",
    "experienceYears": 0,
    "teachingPhilosophy": "",
    "specializations": [],
    "pcpCertificationInterest": False,
    "pcpCertificationEmail": "",
    "previousExperience": "",
    "athleticBackground": "",
    "availability": [],
    "availabilityData": {},
    "achievements": "",
    "hourlyRate": 0,
    "groupRate": 0,
    "certifications": [],
    "backgroundCheckConsent": False,
    "termsAccepted": False,
    "codeOfConductAccepted": False,
}


def _render_basics(ctx: StepContext) -> None:
    st.info(
        "As a coach on Pickle+ you set your own rates, choose your schedule and build your "
        "coaching business the way you want."
    )
    field_selectbox(
        ctx,
        "coachType",
        "Coach type",
        list(COACH_TYPES),
        format_func=lambda value: COACH_TYPES.get(value, value),
    )
    field_number_input(
        ctx,
        "experienceYears",
        "How many years have you been playing or coaching pickleball? ⭐",
        min_value=0,
        max_value=50,
        step=1,
    )


def _render_philosophy(ctx: StepContext) -> None:
    philosophy = field_text_area(
        ctx,
        "teachingPhilosophy",
        "Your teaching philosophy ⭐",
        placeholder="What's your approach to teaching? How do you motivate players?",
        height=160,
    )
    st.caption(f"{len(philosophy.strip())}/{MIN_PHILOSOPHY_LENGTH} characters minimum")
    field_multiselect(ctx, "specializations", "Specializations ⭐", SPECIALIZATIONS)
    interested = field_checkbox(
        ctx,
        "pcpCertificationInterest",
        "I'm interested in the PCP Coaching Certification Programme",
    )
    if interested:
        field_text_input(ctx, "pcpCertificationEmail", "Email for certification updates")


def _render_experience(ctx: StepContext) -> None:
    experience = field_text_area(
        ctx,
        "previousExperience",
        "Previous coaching or teaching experience ⭐",
        placeholder="Sports coached, age groups, levels and notable achievements",
        height=140,
    )
    st.caption(f"{len(experience.strip())}/{MIN_PREVIOUS_EXPERIENCE_LENGTH} characters minimum")
    field_text_area(ctx, "athleticBackground", "Athletic background")
    field_multiselect(ctx, "availability", "When are you usually available?", AVAILABILITY_SLOTS)


def _render_rates(ctx: StepContext) -> None:
    field_text_area(
        ctx,
        "achievements",
        "Achievements",
        placeholder="Tournament wins, certifications, coaching successes or awards",
    )
    left, right = st.columns(2)
    with left:
        field_number_input(ctx, "hourlyRate", "Individual rate (USD/hour) ⭐", min_value=0.0, step=5.0)
        st.caption("Your rate for 1-on-1 coaching sessions")
    with right:
        field_number_input(ctx, "groupRate", "Group rate (USD/hour)", min_value=0.0, step=5.0)
        st.caption("Your rate for group coaching sessions")


def _render_legal(ctx: StepContext) -> None:
    st.info(
        "All coaches complete a background check before they can accept sessions. "
        "Results stay confidential."
    )
    field_checkbox(ctx, "backgroundCheckConsent", "I consent to a background check")
    field_checkbox(ctx, "termsAccepted", "I accept the Coach Terms of Service")
    field_checkbox(ctx, "codeOfConductAccepted", "I agree to the Coach Code of Conduct")


STEPS: tuple[StepDefinition, ...] = (
    StepDefinition(
        key="basics",
        label="Coaching Basics",
        description="Tell us about your pickleball background and coaching experience.",
        rules=(require_positive("experienceYears", "Please enter valid years of experience"),),
        summary_fields=("coachType", "experienceYears"),
        renderer=_render_basics,
    ),
    StepDefinition(
        key="philosophy",
        label="Teaching Philosophy",
        description="Tell us about your approach to helping players improve.",
        rules=(
            require_min_length(
                "teachingPhilosophy",
                MIN_PHILOSOPHY_LENGTH,
                f"Teaching philosophy must be at least {MIN_PHILOSOPHY_LENGTH} characters",
            ),
            require_non_empty_list("specializations", "Please select at least one specialization"),
        ),
        summary_fields=("teachingPhilosophy", "specializations"),
        renderer=_render_philosophy,
    ),
    StepDefinition(
        key="experience",
        label="Experience",
        description="Share your relevant coaching, teaching or athletic experience.",
        rules=(
            require_min_length(
                "previousExperience",
                MIN_PREVIOUS_EXPERIENCE_LENGTH,
                f"Previous experience must be at least {MIN_PREVIOUS_EXPERIENCE_LENGTH} characters",
            ),
        ),
        summary_fields=("previousExperience", "availability"),
        renderer=_render_experience,
    ),
    StepDefinition(
        key="rates",
        label="Achievements & Rates",
        description="Tell us about your accomplishments and set your coaching rates.",
        rules=(require_positive("hourlyRate", "Please set an individual rate above 0"),),
        summary_fields=("hourlyRate", "groupRate"),
        renderer=_render_rates,
    ),
    StepDefinition(
        key="legal",
        label="Agreements",
        description="Complete the legal agreements and background check consent.",
        rules=(
            require_all_true(
                "backgroundCheckConsent",
                "termsAccepted",
                "codeOfConductAccepted",
                message="Please accept the background check, terms and code of conduct",
            ),
        ),
        renderer=_render_legal,
    ),
)


def build_request(fields: Mapping[str, Any]) -> SubmissionRequest:
    payload = CoachApplicationPayload.from_fields(fields)
    return SubmissionRequest(method="POST", path=SUBMIT_PATH, payload=payload.to_payload())


def build_definition() -> WizardDefinition:
    return WizardDefinition(
        wizard_id=WIZARD_ID,
        title="Become a Pickle+ Coach",
        description="Apply to coach on Pickle+.",
        steps=STEPS,
        defaults=DEFAULTS,
        build_request=build_request,
        success_title="Application Submitted Successfully!",
        success_message=(
            "Your coach application has been submitted for review. "
            "You'll receive an email update within 2-3 business days."
        ),
        failure_title="Application Failed",
        success_route="/",
    )


__all__ = ["SPECIALIZATIONS", "STEPS", "WIZARD_ID", "build_definition", "build_request"]
