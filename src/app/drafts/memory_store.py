"""
In-memory draft store for testing and offline use.
"""

import copy
from typing import Any
from uuid import uuid4

from app.campaigns.enums import CampaignStatus, CampaignType
from app.drafts.interface import DraftStore, StoredCampaign
from app.shared.exceptions import CampaignNotFoundError, DraftStoreError
from app.shared.logging import get_logger

logger = get_logger(__name__)

_OPERATIONS = ("list", "create", "update", "delete")


class InMemoryDraftStore(DraftStore):
    """Draft store that keeps campaigns in a dict, with injectable failures."""

    def __init__(self, campaigns: list[StoredCampaign] | None = None) -> None:
        self._campaigns: dict[str, StoredCampaign] = {}
        self._calls: list[tuple[str, dict[str, Any]]] = []
        self._failures: dict[str, str] = {}
        for campaign in campaigns or []:
            self._campaigns[campaign.id] = campaign.model_copy(deep=True)

    def reset(self) -> None:
        self._campaigns.clear()
        self._calls.clear()
        self._failures.clear()

    def configure_failure(
        self,
        operation: str,
        should_fail: bool = True,
        error_message: str = "Mock draft store failure",
    ) -> None:
        if operation not in _OPERATIONS:
            raise ValueError(f"Unknown draft store operation: {operation}")
        if should_fail:
            self._failures[operation] = error_message
        else:
            self._failures.pop(operation, None)

    @property
    def calls(self) -> list[tuple[str, dict[str, Any]]]:
        return self._calls.copy()

    def calls_to(self, operation: str) -> list[dict[str, Any]]:
        return [kwargs for op, kwargs in self._calls if op == operation]

    def get(self, campaign_id: str) -> StoredCampaign | None:
        campaign = self._campaigns.get(campaign_id)
        return campaign.model_copy(deep=True) if campaign else None

    def _maybe_fail(self, operation: str) -> None:
        message = self._failures.get(operation)
        if message is not None:
            raise DraftStoreError(message, status_code=503)

    async def list_campaigns(self) -> list[StoredCampaign]:
        self._calls.append(("list", {}))
        self._maybe_fail("list")
        return [c.model_copy(deep=True) for c in self._campaigns.values()]

    async def create_campaign(
        self,
        name: str,
        type: CampaignType = CampaignType.AUDIO,
        status: CampaignStatus = CampaignStatus.IN_DESIGN,
        config: dict[str, Any] | None = None,
    ) -> StoredCampaign:
        self._calls.append(
            ("create", {"name": name, "type": type, "status": status, "config": copy.deepcopy(config)})
        )
        self._maybe_fail("create")

        campaign = StoredCampaign(
            id=str(uuid4()),
            name=name,
            type=type,
            status=status,
            config=copy.deepcopy(config or {}),
        )
        self._campaigns[campaign.id] = campaign
        logger.info("Mock: created campaign", extra={"campaign_id": campaign.id})
        return campaign.model_copy(deep=True)

    async def update_campaign(
        self,
        campaign_id: str,
        config: dict[str, Any] | None = None,
        status: CampaignStatus | None = None,
        name: str | None = None,
    ) -> None:
        self._calls.append(
            (
                "update",
                {
                    "campaign_id": campaign_id,
                    "config": copy.deepcopy(config),
                    "status": status,
                    "name": name,
                },
            )
        )
        self._maybe_fail("update")

        campaign = self._campaigns.get(campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(campaign_id)
        if (config is not None or name is not None) and not campaign.is_draft:
            raise DraftStoreError(
                f"Campaign {campaign_id} is active and can no longer be edited",
                status_code=409,
                code="CAMPAIGN_NOT_EDITABLE",
            )
        if name is not None:
            campaign.name = name
        if config is not None:
            campaign.config = copy.deepcopy(config)
        if status is not None:
            campaign.status = status

    async def delete_campaign(self, campaign_id: str) -> None:
        self._calls.append(("delete", {"campaign_id": campaign_id}))
        self._maybe_fail("delete")

        if self._campaigns.pop(campaign_id, None) is None:
            raise CampaignNotFoundError(campaign_id)
