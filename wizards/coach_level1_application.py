"""Level 1 coach application: personal info through certification commitment."""

from __future__ import annotations

from typing import Any, Mapping

import streamlit as st

from models.coach_application import Level1ApplicationPayload
from wizard.definition import WizardDefinition
from wizard.navigation_types import StepContext
from wizard.steps import StepDefinition
from wizard.submission import SubmissionRequest
from wizard.validation import require_all_true, require_email, require_present
from wizard.widgets import (
    field_checkbox,
    field_multiselect,
    field_selectbox,
    field_text_area,
    field_text_input,
)

WIZARD_ID = "coach_level1_application"
SUBMIT_PATH = "/api/coach/application/submit"

SKILL_LEVELS: dict[str, str] = {
    "2.5": "2.5 - Novice",
    "3.0": "3.0 - Beginner",
    "3.5": "3.5 - Intermediate",
    "4.0": "4.0 - Advanced",
    "4.5": "4.5 - Expert",
    "5.0": "5.0+ - Professional",
}

HOURS_PER_WEEK: dict[str, str] = {
    "1-5": "1-5 hours",
    "5-10": "5-10 hours",
    "10-20": "10-20 hours",
    "20+": "20+ hours",
}

COACHING_FORMATS: dict[str, str] = {
    "in-person": "In-person only",
    "online": "Online only",
    "both": "Both in-person and online",
}

TRAVEL_DISTANCES: dict[str, str] = {
    "5": "Within 5 miles",
    "10": "Within 10 miles",
    "25": "Within 25 miles",
    "50": "Within 50 miles",
    "any": "Any distance",
}

SCHEDULE_OPTIONS: tuple[str, ...] = (
    "Early Morning (6-9 AM)",
    "Morning (9-12 PM)",
    "Afternoon (12-5 PM)",
    "Evening (5-8 PM)",
    "Weekends",
)

DEFAULTS: dict[str, Any] = {
    "firstName": "",
    "lastName": "",
    "email": "",
    "phone": "",
    "location": "",
    "playingExperience": "",
    "skillLevel": "",
    "whyCoach": "",
    "teachingExperience": "",
    "coachingGoals": "",
    "hoursPerWeek": "",
    "preferredSchedule": [],
    "inPersonOnline": "",
    "travelDistance": "",
    "reference1Name": "",
    "reference1Email": "",
    "reference1Relationship": "",
    "reference2Name": "",
    "reference2Email": "",
    "reference2Relationship": "",
    "backgroundCheck": False,
    "understandsLevel1": False,
    "commitsToCertification": False,
    "agreesToTerms": False,
    "additionalComments": "",
}


def _labelled(options: Mapping[str, str]):
    return lambda value: options.get(value, value)


def _render_personal(ctx: StepContext) -> None:
    left, right = st.columns(2)
    with left:
        field_text_input(ctx, "firstName", "First Name *")
        field_text_input(ctx, "email", "Email Address *", placeholder="your@email.com")
    with right:
        field_text_input(ctx, "lastName", "Last Name *")
        field_text_input(ctx, "phone", "Phone Number", placeholder="(555) 123-4567")
    field_text_input(ctx, "location", "Location (City, State)", placeholder="e.g., Austin, TX")
    field_selectbox(
        ctx,
        "skillLevel",
        "Current Skill Level *",
        list(SKILL_LEVELS),
        format_func=_labelled(SKILL_LEVELS),
        placeholder="Select your skill level",
    )
    field_text_area(
        ctx,
        "playingExperience",
        "Playing Experience",
        placeholder="How long have you been playing? What tournaments have you participated in?",
    )


def _render_motivation(ctx: StepContext) -> None:
    field_text_area(
        ctx,
        "whyCoach",
        "Why do you want to become a pickleball coach? *",
        placeholder="Share your passion for coaching and helping others improve their game...",
    )
    field_text_area(
        ctx,
        "teachingExperience",
        "Previous Teaching or Coaching Experience",
        placeholder="Any experience teaching or coaching (sports, academics, professional training, etc.)",
    )
    field_text_area(
        ctx,
        "coachingGoals",
        "What are your goals as a coach? *",
        placeholder="What type of coaching do you want to do? What impact do you want to make?",
    )


def _render_availability(ctx: StepContext) -> None:
    field_selectbox(
        ctx,
        "hoursPerWeek",
        "Hours per week available for coaching *",
        list(HOURS_PER_WEEK),
        format_func=_labelled(HOURS_PER_WEEK),
    )
    field_multiselect(
        ctx,
        "preferredSchedule",
        "Preferred Coaching Schedule (select all that apply)",
        SCHEDULE_OPTIONS,
    )
    field_selectbox(
        ctx,
        "inPersonOnline",
        "Coaching Format Preference *",
        list(COACHING_FORMATS),
        format_func=_labelled(COACHING_FORMATS),
    )
    field_selectbox(
        ctx,
        "travelDistance",
        "Willing to travel",
        list(TRAVEL_DISTANCES),
        format_func=_labelled(TRAVEL_DISTANCES),
    )


def _render_references(ctx: StepContext) -> None:
    for number in (1, 2):
        st.markdown(f"**Reference {number} \\***")
        left, right = st.columns(2)
        with left:
            field_text_input(ctx, f"reference{number}Name", "Full Name", placeholder="Reference's full name")
        with right:
            field_text_input(ctx, f"reference{number}Email", "Email Address", placeholder="reference@email.com")
        field_text_input(
            ctx,
            f"reference{number}Relationship",
            "Relationship to You",
            placeholder="e.g., Former coach, playing partner, colleague",
        )
    field_checkbox(
        ctx,
        "backgroundCheck",
        "I consent to a background check if required for coaching certification",
    )


def _render_commitment(ctx: StepContext) -> None:
    st.info(
        "**Level 1: Coaching Fundamentals**\n\n"
        "Every coach starts at Level 1, regardless of prior experience."
    )
    field_checkbox(
        ctx,
        "understandsLevel1",
        "I understand that all coaches must start with Level 1 certification regardless of experience, "
        "and that level skipping requires administrator approval on a case-by-case basis",
    )
    field_checkbox(
        ctx,
        "commitsToCertification",
        "I commit to completing the Level 1 certification within 30 days of approval and understand "
        "the $699 certification fee",
    )
    field_checkbox(
        ctx,
        "agreesToTerms",
        "I agree to maintain professional standards, provide quality coaching services, "
        "and uphold the Pickle+ coaching community values",
    )
    field_text_area(
        ctx,
        "additionalComments",
        "Additional Comments or Questions",
        placeholder="Any additional information you'd like to share...",
    )


STEPS: tuple[StepDefinition, ...] = (
    StepDefinition(
        key="personal",
        label="Personal Information",
        description="Tell us about yourself and your pickleball background.",
        rules=(
            require_present("firstName", "First name is required"),
            require_present("lastName", "Last name is required"),
            require_email("email", "Please enter a valid email address"),
            require_present("skillLevel", "Please select your skill level"),
        ),
        renderer=_render_personal,
    ),
    StepDefinition(
        key="motivation",
        label="Coaching Motivation",
        description="Help us understand your passion for coaching.",
        rules=(
            require_present("whyCoach", "Please tell us why you want to coach"),
            require_present("coachingGoals", "Please describe your coaching goals"),
        ),
        renderer=_render_motivation,
    ),
    StepDefinition(
        key="availability",
        label="Availability",
        description="Let us know when and how you would like to coach.",
        rules=(
            require_present("hoursPerWeek", "Please select your weekly availability"),
            require_present("inPersonOnline", "Please select a coaching format"),
        ),
        renderer=_render_availability,
    ),
    StepDefinition(
        key="references",
        label="References",
        description="Provide two references who can speak to your character and abilities.",
        rules=(
            require_present("reference1Name", "Reference 1 name is required"),
            require_email("reference1Email", "Please enter a valid email for reference 1"),
            require_present("reference2Name", "Reference 2 name is required"),
            require_email("reference2Email", "Please enter a valid email for reference 2"),
        ),
        renderer=_render_references,
    ),
    StepDefinition(
        key="commitment",
        label="Commitment",
        description="Confirm your understanding of and commitment to the certification program.",
        rules=(
            require_all_true(
                "understandsLevel1",
                "commitsToCertification",
                "agreesToTerms",
                message="Please confirm all three Level 1 commitments",
            ),
        ),
        renderer=_render_commitment,
    ),
)


def build_request(fields: Mapping[str, Any]) -> SubmissionRequest:
    payload = Level1ApplicationPayload.from_fields(fields)
    return SubmissionRequest(method="POST", path=SUBMIT_PATH, payload=payload.to_payload())


def build_definition() -> WizardDefinition:
    return WizardDefinition(
        wizard_id=WIZARD_ID,
        title="Coach Application: Level 1",
        description="Join the Pickle+ coaching community.",
        steps=STEPS,
        defaults=DEFAULTS,
        build_request=build_request,
        success_title="Application Submitted!",
        success_message=(
            "Thank you for applying. We'll review your application and get back to you "
            "within 3-5 business days."
        ),
        failure_title="Submission Failed",
        success_route="/coach",
    )


__all__ = ["STEPS", "WIZARD_ID", "build_definition", "build_request"]
