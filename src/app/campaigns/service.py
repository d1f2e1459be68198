"""
Campaign service for business logic.

Implements the draft store operations with status transition validation.
"""

from typing import Any
from uuid import UUID

from app.campaigns.enums import CampaignStatus, CandidateStatus
from app.campaigns.models import Campaign
from app.campaigns.repository import CampaignRepository
from app.campaigns.schemas import CampaignCreate, CampaignUpdate, LaunchCampaignRequest
from app.shared.exceptions import (
    CampaignNotEditableError,
    CampaignNotFoundError,
    InvalidStatusTransitionError,
)
from app.shared.logging import get_logger

logger = get_logger(__name__)


class CampaignService:
    """Service for campaign business logic."""

    def __init__(self, repository: CampaignRepository) -> None:
        """Initialize service with repository."""
        self._repository = repository

    async def list_campaigns(self) -> list[Campaign]:
        """List all campaigns in creation order."""
        return await self._repository.list_all()

    async def create_campaign(self, data: CampaignCreate) -> Campaign:
        """Create a campaign; the store never merges by name."""
        campaign = await self._repository.create(
            name=data.name,
            type=data.type,
            status=data.status,
            config=data.config,
        )
        logger.info(
            "Campaign created",
            extra={"campaign_id": str(campaign.id), "campaign_name": campaign.name},
        )
        return campaign

    async def get_campaign(self, campaign_id: UUID) -> Campaign:
        """Get campaign by ID."""
        campaign = await self._repository.get_by_id(campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(campaign_id)
        return campaign

    async def update_campaign(self, campaign_id: UUID, data: CampaignUpdate) -> Campaign:
        """Apply a checkpoint write, a rename and/or a status change.

        Raises:
            CampaignNotFoundError: Unknown id.
            CampaignNotEditableError: Name or config sent for a campaign that
                is no longer InDesign.
            InvalidStatusTransitionError: Status change not allowed.
        """
        campaign = await self.get_campaign(campaign_id)

        edits_draft = data.config is not None or data.name is not None
        if edits_draft and campaign.status != CampaignStatus.IN_DESIGN:
            raise CampaignNotEditableError(campaign_id)

        target_status = data.status
        if target_status is not None:
            self._check_transition(campaign, target_status)
            if target_status == campaign.status:
                # Re-marking Active is the launch fallback path; treat as no-op.
                target_status = None

        campaign = await self._repository.update(
            campaign,
            name=data.name,
            config=data.config,
            status=target_status,
        )
        logger.info(
            "Campaign updated",
            extra={
                "campaign_id": str(campaign.id),
                "config_written": data.config is not None,
                "renamed": data.name is not None,
                "status": campaign.status.value,
            },
        )
        return campaign

    async def delete_campaign(self, campaign_id: UUID) -> None:
        """Delete a campaign; its id is never handed out again."""
        campaign = await self.get_campaign(campaign_id)
        await self._repository.delete(campaign)

    async def list_all_candidates(self) -> list[dict[str, Any]]:
        """Flatten every campaign's ``config.source`` with campaign and status."""
        rows: list[dict[str, Any]] = []
        for campaign in await self._repository.list_all():
            for candidate in _source(campaign):
                rows.append(
                    {
                        "name": candidate["name"],
                        "phone": candidate.get("phone") or "",
                        "email": candidate.get("email") or None,
                        "campaign_id": campaign.id,
                        "campaign_name": campaign.name,
                        "status": _candidate_status(campaign, candidate),
                    }
                )
        return rows

    async def dashboard_stats(self) -> dict[str, int]:
        """Count candidates overall, still to interview in Active campaigns, and done."""
        total = active = done = 0
        for campaign in await self._repository.list_all():
            for candidate in _source(campaign):
                total += 1
                if _candidate_status(campaign, candidate) == CandidateStatus.COMPLETED.value:
                    done += 1
                elif campaign.status == CampaignStatus.ACTIVE:
                    active += 1
        return {
            "total_candidates": total,
            "active_candidates": active,
            "interviews_done": done,
        }

    async def launch_campaign(
        self,
        campaign_id: UUID,
        request: LaunchCampaignRequest,
    ) -> Campaign:
        """Store the finalized launch settings and flip the campaign to Active."""
        campaign = await self.get_campaign(campaign_id)
        if campaign.status != CampaignStatus.IN_DESIGN:
            raise InvalidStatusTransitionError(campaign.status, CampaignStatus.ACTIVE)

        config: dict[str, Any] = dict(campaign.config or {})
        config.update(
            {
                "agent": request.agent_id,
                "voice": request.voice_id,
                "strict": request.strictness.value,
                "mode": request.mode.value,
                "systemPrompt": request.system_prompt,
            }
        )
        campaign = await self._repository.update(
            campaign,
            config=config,
            status=CampaignStatus.ACTIVE,
        )
        logger.info(
            "Campaign launch dispatched",
            extra={
                "campaign_id": str(campaign.id),
                "agent_id": request.agent_id,
                "voice_id": request.voice_id,
                "mode": request.mode.value,
            },
        )
        return campaign

    @staticmethod
    def _check_transition(campaign: Campaign, target: CampaignStatus) -> None:
        if target == campaign.status:
            return
        if not campaign.can_transition_to(target):
            raise InvalidStatusTransitionError(campaign.status, target)


def _source(campaign: Campaign) -> list[dict[str, Any]]:
    """Candidates stored in the campaign config; malformed entries are skipped."""
    source = (campaign.config or {}).get("source") or []
    if not isinstance(source, list):
        return []
    return [c for c in source if isinstance(c, dict) and str(c.get("name") or "").strip()]


def _candidate_status(campaign: Campaign, candidate: dict[str, Any]) -> str:
    stored = str(candidate.get("status") or "").strip()
    if stored:
        if stored.casefold() == CandidateStatus.COMPLETED.value.casefold():
            return CandidateStatus.COMPLETED.value
        return stored
    if campaign.status == CampaignStatus.ACTIVE:
        return CandidateStatus.PENDING.value
    return CandidateStatus.DRAFT.value
