"""
Campaign draft store API router.

Paths mirror what the dashboard already calls: ``GET /api/campaigns`` and
``POST /api/campaigns/create``.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.campaigns.repository import CampaignRepository
from app.campaigns.schemas import (
    CampaignCreate,
    CampaignListResponse,
    CampaignResponse,
    CampaignUpdate,
    CandidateListResponse,
    ErrorResponse,
)
from app.campaigns.service import CampaignService
from app.shared.database import get_db_session
from app.shared.exceptions import (
    AppError,
    CampaignNotEditableError,
    CampaignNotFoundError,
    InvalidStatusTransitionError,
)
from app.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


def get_campaign_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> CampaignRepository:
    """Dependency for the campaign repository."""
    return CampaignRepository(session)


def get_campaign_service(
    repository: Annotated[CampaignRepository, Depends(get_campaign_repository)],
) -> CampaignService:
    """Dependency for campaign service."""
    return CampaignService(repository)


def _not_found(exc: CampaignNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"code": exc.code, "message": exc.message},
    )


def _conflict(exc: AppError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={"code": exc.code, "message": exc.message},
    )


@router.get("", response_model=CampaignListResponse)
async def list_campaigns(
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> CampaignListResponse:
    """List all campaigns, oldest first."""
    campaigns = await service.list_campaigns()
    return CampaignListResponse(
        campaigns=[CampaignResponse.model_validate(c) for c in campaigns],
    )


@router.post(
    "/create",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"description": "Validation error"}},
)
async def create_campaign(
    data: CampaignCreate,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> CampaignResponse:
    """Create a new campaign draft."""
    logger.info("Creating campaign", extra={"campaign_name": data.name})
    campaign = await service.create_campaign(data)
    return CampaignResponse.model_validate(campaign)


@router.get(
    "/{campaign_id}",
    response_model=CampaignResponse,
    responses={404: {"model": ErrorResponse, "description": "Campaign not found"}},
)
async def get_campaign(
    campaign_id: UUID,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> CampaignResponse:
    """Get a single campaign."""
    try:
        campaign = await service.get_campaign(campaign_id)
    except CampaignNotFoundError as e:
        raise _not_found(e)
    return CampaignResponse.model_validate(campaign)


@router.patch(
    "/{campaign_id}",
    response_model=CampaignResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Campaign not found"},
        409: {"model": ErrorResponse, "description": "Invalid status transition or campaign not editable"},
    },
)
async def update_campaign(
    campaign_id: UUID,
    data: CampaignUpdate,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> CampaignResponse:
    """Write a checkpoint, rename and/or change status."""
    try:
        campaign = await service.update_campaign(campaign_id, data)
    except CampaignNotFoundError as e:
        raise _not_found(e)
    except (InvalidStatusTransitionError, CampaignNotEditableError) as e:
        logger.warning(
            "Rejected campaign update",
            extra={"campaign_id": str(campaign_id), "code": e.code, "error": e.message},
        )
        raise _conflict(e)
    return CampaignResponse.model_validate(campaign)


@router.delete(
    "/{campaign_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Campaign not found"}},
)
async def delete_campaign(
    campaign_id: UUID,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> Response:
    """Delete a campaign."""
    try:
        await service.delete_campaign(campaign_id)
    except CampaignNotFoundError as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{campaign_id}/candidates",
    response_model=CandidateListResponse,
    responses={404: {"model": ErrorResponse, "description": "Campaign not found"}},
)
async def list_candidates(
    campaign_id: UUID,
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> CandidateListResponse:
    """Candidates stored in the campaign's source stage."""
    try:
        campaign = await service.get_campaign(campaign_id)
    except CampaignNotFoundError as e:
        raise _not_found(e)
    source = (campaign.config or {}).get("source") or []
    return CandidateListResponse(candidates=list(source))
