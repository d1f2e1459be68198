"""
Campaign launch API router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.campaigns.router import get_campaign_service
from app.campaigns.schemas import CampaignResponse, ErrorResponse, LaunchCampaignRequest
from app.campaigns.service import CampaignService
from app.shared.exceptions import CampaignNotFoundError, InvalidStatusTransitionError
from app.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


@router.post(
    "/{campaign_id}/launch",
    response_model=CampaignResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Body does not match the path"},
        404: {"model": ErrorResponse, "description": "Campaign not found"},
        409: {"model": ErrorResponse, "description": "Campaign already launched"},
    },
)
async def launch_campaign(
    campaign_id: UUID,
    request: LaunchCampaignRequest,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> CampaignResponse:
    """Launch a campaign with its confirmed blueprint.

    Stores persona, voice, strictness, mode and the finalized system prompt in
    the campaign config and transitions status to 'Active'.

    Args:
        campaign_id: Campaign UUID to launch.
        request: Launch settings chosen in the wizard.
        service: Campaign service.

    Returns:
        Updated campaign with 'Active' status.

    Raises:
        HTTPException: 400 on id mismatch, 404 if not found, 409 if already active.
    """
    logger.info(
        "Campaign launch requested",
        extra={"campaign_id": str(campaign_id), "agent_id": request.agent_id},
    )

    if request.campaign_id != campaign_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "CAMPAIGN_ID_MISMATCH",
                "message": "campaignId in body does not match the path",
            },
        )

    try:
        campaign = await service.launch_campaign(campaign_id, request)
    except CampaignNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": e.code, "message": e.message},
        )
    except InvalidStatusTransitionError as e:
        logger.warning(
            "Campaign launch rejected",
            extra={"campaign_id": str(campaign_id), "error": e.message},
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": e.code, "message": e.message},
        )

    logger.info("Campaign launched", extra={"campaign_id": str(campaign_id)})
    return CampaignResponse.model_validate(campaign)
