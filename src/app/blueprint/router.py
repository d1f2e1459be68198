"""
Blueprint generation API router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.blueprint.factory import get_blueprint_generator
from app.blueprint.interface import BlueprintGenerator
from app.blueprint.models import BlueprintProvider, BlueprintRequest
from app.campaigns.schemas import BlueprintResponseBody, ErrorResponse, GenerateBlueprintBody
from app.shared.exceptions import BlueprintGenerationError, BlueprintTimeoutError
from app.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/blueprints", tags=["blueprints"])


@router.post(
    "/generate",
    response_model=BlueprintResponseBody,
    response_model_by_alias=True,
    responses={
        502: {"model": ErrorResponse, "description": "Generator failed"},
        503: {"model": ErrorResponse, "description": "Generator not usable on the server"},
        504: {"model": ErrorResponse, "description": "Generator timed out"},
    },
)
async def generate_blueprint(
    body: GenerateBlueprintBody,
    generator: Annotated[BlueprintGenerator, Depends(get_blueprint_generator)],
) -> BlueprintResponseBody:
    """Generate a system prompt and duration estimate for a campaign.

    Raises:
        HTTPException: 503 if the server is configured to forward to itself,
            504 on timeout, 502 on any other generator failure.
    """
    if generator.provider == BlueprintProvider.HTTP:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "code": "GENERATOR_MISCONFIGURED",
                "message": "The server cannot use the http blueprint provider",
            },
        )

    request = BlueprintRequest(
        job_role=body.job_role,
        description=body.description,
        candidate_count=body.candidate_count,
        persona=body.persona,
        strictness=body.strictness,
        mode=body.mode,
        duration=body.duration,
        company=body.company,
        industry=body.industry,
    )

    try:
        blueprint = await generator.generate_blueprint(request)
    except BlueprintTimeoutError as e:
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail={"code": e.code, "message": e.message},
        )
    except BlueprintGenerationError as e:
        logger.warning(
            "Blueprint generation failed",
            extra={"error": e.message},
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": e.code, "message": e.message},
        )

    return BlueprintResponseBody(
        system_prompt=blueprint.system_prompt,
        estimated_duration=blueprint.estimated_duration,
    )
