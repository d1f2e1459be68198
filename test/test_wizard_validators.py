"""
Unit tests for the per-stage validators.
"""

import pytest

from app.wizard.draft import Candidate, WizardDraft
from app.wizard.validators import (
    ValidationResult,
    validate_details,
    validate_flow,
    validate_persona,
    validate_script,
    validate_source,
    validate_stage,
)


class TestValidationResult:
    def test_starts_valid(self) -> None:
        result = ValidationResult()
        assert result.is_valid is True
        assert result.errors == []
        assert result.message == ""

    def test_add_error_flips_validity(self) -> None:
        result = ValidationResult()
        result.add_error("name", "Campaign name is required")
        result.add_error("jobTitle", "Job title is required")

        assert result.is_valid is False
        assert result.message == "Campaign name is required; Job title is required"

    def test_errors_returns_copy(self) -> None:
        result = ValidationResult()
        result.add_error("name", "x")
        result.errors.clear()
        assert len(result.errors) == 1


class TestStageValidators:
    """Pass conditions for each of the five stages."""

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_details_rejects_blank_name(self, name: str) -> None:
        result = validate_details(WizardDraft(name=name))
        assert result.is_valid is False
        assert result.errors[0]["field"] == "name"

    def test_details_accepts_padded_name(self) -> None:
        assert validate_details(WizardDraft(name="  QA Engineer ")).is_valid

    def test_source_requires_a_candidate(self) -> None:
        assert validate_source(WizardDraft()).is_valid is False
        draft = WizardDraft(source=[Candidate(name="Jo", phone="555-0100")])
        assert validate_source(draft).is_valid

    def test_flow_passes_with_default_mode(self) -> None:
        assert validate_flow(WizardDraft()).is_valid

    def test_flow_fails_without_mode(self) -> None:
        assert validate_flow(WizardDraft(mode=None)).is_valid is False

    def test_persona_passes_with_defaults(self) -> None:
        assert validate_persona(WizardDraft()).is_valid

    def test_persona_reports_each_missing_field(self) -> None:
        result = validate_persona(WizardDraft(agent="", voice=None))
        assert [e["field"] for e in result.errors] == ["agent", "voice"]

    def test_script_requires_all_three_fields(self) -> None:
        result = validate_script(WizardDraft(script=" ", company="", job_title=""))
        assert [e["field"] for e in result.errors] == ["script", "company", "jobTitle"]

    def test_script_passes_when_filled(self) -> None:
        draft = WizardDraft(script="Need 3 yrs QA", company="Acme", job_title="QA Engineer")
        assert validate_script(draft).is_valid


class TestValidateStage:
    def test_dispatches_by_stage_number(self) -> None:
        assert validate_stage(1, WizardDraft(name="x")).is_valid
        assert validate_stage(2, WizardDraft()).is_valid is False

    @pytest.mark.parametrize("stage", [0, 6, -1])
    def test_unknown_stage_is_reported_not_raised(self, stage: int) -> None:
        result = validate_stage(stage, WizardDraft())
        assert result.is_valid is False
        assert result.errors[0]["field"] == "stage"
