from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from app.wizard.draft import WizardDraft


@dataclass
class ValidationResult:
    """
    Outcome of a stage check.

    - default is_valid=True
    - add_error() flips is_valid=False and appends {"field": ..., "message": ...}
    - errors property returns a COPY
    """

    is_valid: bool = True
    _errors: list[dict[str, str]] = field(default_factory=list, repr=False)

    def add_error(self, field: str, message: str) -> None:
        self.is_valid = False
        self._errors.append({"field": field, "message": message})

    @property
    def errors(self) -> list[dict[str, str]]:
        return list(self._errors)

    @property
    def message(self) -> str:
        """All error messages joined for a single notification."""
        return "; ".join(e["message"] for e in self._errors)


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def validate_details(draft: WizardDraft) -> ValidationResult:
    result = ValidationResult()
    if _is_blank(draft.name):
        result.add_error("name", "Campaign name is required")
    return result


def validate_source(draft: WizardDraft) -> ValidationResult:
    result = ValidationResult()
    if not draft.source:
        result.add_error("source", "Add at least one candidate")
    return result


def validate_flow(draft: WizardDraft) -> ValidationResult:
    result = ValidationResult()
    if draft.mode is None:
        result.add_error("mode", "Select an interview mode")
    return result


def validate_persona(draft: WizardDraft) -> ValidationResult:
    result = ValidationResult()
    if _is_blank(draft.agent):
        result.add_error("agent", "Select an AI agent persona")
    if _is_blank(draft.voice):
        result.add_error("voice", "Select a voice model")
    return result


def validate_script(draft: WizardDraft) -> ValidationResult:
    result = ValidationResult()
    if _is_blank(draft.script):
        result.add_error("script", "Evaluation context is required")
    if _is_blank(draft.company):
        result.add_error("company", "Company name is required")
    if _is_blank(draft.job_title):
        result.add_error("jobTitle", "Job title is required")
    return result


STAGE_VALIDATORS: dict[int, Callable[[WizardDraft], ValidationResult]] = {
    1: validate_details,
    2: validate_source,
    3: validate_flow,
    4: validate_persona,
    5: validate_script,
}


def validate_stage(stage: int, draft: WizardDraft) -> ValidationResult:
    """Run the validator for ``stage``; an unknown stage is reported, not raised."""
    validator = STAGE_VALIDATORS.get(stage)
    if validator is None:
        result = ValidationResult()
        result.add_error("stage", f"Unknown wizard stage: {stage}")
        return result
    return validator(draft)
