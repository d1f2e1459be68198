"""
Template blueprint generator: deterministic, no network.
"""

from app.blueprint.interface import BlueprintGenerator
from app.blueprint.models import Blueprint, BlueprintProvider, BlueprintRequest
from app.blueprint.prompts import build_interview_prompt
from app.shared.exceptions import BlueprintGenerationError
from app.shared.logging import get_logger

logger = get_logger(__name__)


class TemplateBlueprintGenerator(BlueprintGenerator):
    """Renders the interview prompt template and echoes the requested duration."""

    @property
    def provider(self) -> BlueprintProvider:
        return BlueprintProvider.TEMPLATE

    async def generate_blueprint(self, request: BlueprintRequest) -> Blueprint:
        if not request.description.strip() or not request.job_role.strip():
            raise BlueprintGenerationError(
                "Job role and description are required",
                code="BLUEPRINT_INPUT_INVALID",
            )

        prompt = build_interview_prompt(request)
        logger.info(
            "Template blueprint rendered",
            extra={
                "mode": request.mode.value,
                "prompt_chars": len(prompt),
            },
        )
        return Blueprint(system_prompt=prompt, estimated_duration=request.duration)
