"""
Campaign repository for database operations.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.campaigns.enums import CampaignStatus, CampaignType
from app.campaigns.models import Campaign
from app.shared.logging import get_logger

logger = get_logger(__name__)


class CampaignRepository:
    """Repository for campaign database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self._session = session

    async def create(
        self,
        name: str,
        type: CampaignType,
        status: CampaignStatus,
        config: dict[str, Any],
    ) -> Campaign:
        """Create a new campaign."""
        campaign = Campaign(name=name, type=type, status=status, config=dict(config))
        self._session.add(campaign)
        await self._session.flush()
        await self._session.refresh(campaign)
        logger.info("Created campaign", extra={"campaign_id": str(campaign.id)})
        return campaign

    async def get_by_id(self, campaign_id: UUID) -> Campaign | None:
        """Get campaign by ID."""
        result = await self._session.execute(
            select(Campaign).where(Campaign.id == campaign_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Campaign]:
        """List every campaign, oldest first (duplicate-name lookup relies on this order)."""
        result = await self._session.execute(
            select(Campaign).order_by(Campaign.created_at.asc(), Campaign.id.asc())
        )
        return list(result.scalars().all())

    async def update(
        self,
        campaign: Campaign,
        name: str | None = None,
        config: dict[str, Any] | None = None,
        status: CampaignStatus | None = None,
    ) -> Campaign:
        """Apply a partial update; ``config`` replaces the stored document."""
        if name is not None:
            campaign.name = name
        if config is not None:
            # Reassign so the JSON column is flagged dirty.
            campaign.config = dict(config)
        if status is not None:
            campaign.status = status
        await self._session.flush()
        await self._session.refresh(campaign)
        logger.info(
            "Updated campaign",
            extra={"campaign_id": str(campaign.id), "status": campaign.status.value},
        )
        return campaign

    async def delete(self, campaign: Campaign) -> None:
        """Hard delete a campaign row."""
        await self._session.delete(campaign)
        await self._session.flush()
        logger.info("Deleted campaign", extra={"campaign_id": str(campaign.id)})
