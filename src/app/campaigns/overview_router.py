"""
Cross-campaign read endpoints used by the dashboard pages.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.campaigns.router import get_campaign_service
from app.campaigns.schemas import AllCandidatesResponse, CandidateOverview, DashboardStatsResponse
from app.campaigns.service import CampaignService

router = APIRouter(prefix="/api", tags=["overview"])


@router.get("/candidates/all", response_model=AllCandidatesResponse)
async def list_all_candidates(
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> AllCandidatesResponse:
    """Every candidate with the campaign it belongs to and its interview status."""
    rows = await service.list_all_candidates()
    return AllCandidatesResponse(candidates=[CandidateOverview(**row) for row in rows])


@router.get("/dashboard-stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    service: Annotated[CampaignService, Depends(get_campaign_service)],
) -> DashboardStatsResponse:
    return DashboardStatsResponse(**await service.dashboard_stats())
