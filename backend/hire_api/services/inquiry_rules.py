"""Field rules for the four-step hire wizard.

Shared by the client-side submission flow and the inquiry API so both
reject the same incomplete submissions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..utils.validation import is_blank, is_valid_email


@dataclass(frozen=True)
class WizardStep:
    key: str
    title: str
    fields: Tuple[str, ...]
    required: Tuple[str, ...] = ()


WIZARD_STEPS: Tuple[WizardStep, ...] = (
    WizardStep(
        "project",
        "about your project",
        (
            "project_type",
            "business_type",
            "current_challenge",
            "project_goal",
            "target_audience",
            "has_existing_website",
        ),
        required=("project_type", "project_goal"),
    ),
    WizardStep(
        "features",
        "features & services",
        (
            "selected_features",
            "selected_additional_services",
            "design_preference",
            "needs_maintenance",
            "maintenance_level",
        ),
    ),
    WizardStep(
        "timeline",
        "timeline & budget",
        ("timeline", "content_ready", "budget"),
        required=("timeline",),
    ),
    WizardStep(
        "contact",
        "your details",
        ("name", "email", "company", "phone", "message", "hear_about_us"),
        required=("name", "email", "message"),
    ),
)

STEP_COUNT = len(WIZARD_STEPS)


def _read(form: Any, key: str) -> Any:
    if isinstance(form, dict):
        return form.get(key)
    return getattr(form, key, None)


def validate_step(form: Any, step: int) -> Dict[str, str]:
    """Return ``{field: error}`` for one 1-based wizard step."""
    if step < 1 or step > STEP_COUNT:
        raise ValueError(f"wizard step must be between 1 and {STEP_COUNT}, got {step}")
    wizard_step = WIZARD_STEPS[step - 1]
    errors: Dict[str, str] = {}
    for key in wizard_step.required:
        if is_blank(_read(form, key)):
            errors[key] = "required"
    if "email" in wizard_step.fields and "email" not in errors:
        if not is_valid_email(_read(form, "email")):
            errors["email"] = "invalid_email"
    return errors


def validate_inquiry(form: Any) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for step in range(1, STEP_COUNT + 1):
        errors.update(validate_step(form, step))
    return errors
