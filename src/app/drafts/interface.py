"""
Draft store interface definition.

The wizard only sees campaigns through this interface; the transport behind it
(HTTP API, in-memory fake) is an adapter choice.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.campaigns.enums import CampaignStatus, CampaignType


class StoredCampaign(BaseModel):
    """A campaign as returned by the draft store."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    type: CampaignType = CampaignType.AUDIO
    status: CampaignStatus = CampaignStatus.IN_DESIGN
    config: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v: Any) -> str:
        return str(v)

    @field_validator("config", mode="before")
    @classmethod
    def none_config_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def is_draft(self) -> bool:
        return self.status == CampaignStatus.IN_DESIGN


class DraftStore(ABC):
    """Abstract interface for campaign draft persistence.

    Every method raises ``DraftStoreError`` (or ``CampaignNotFoundError`` for
    unknown ids) on failure; transport exceptions never leak out.
    """

    @abstractmethod
    async def list_campaigns(self) -> list[StoredCampaign]:
        """List campaigns in creation order."""
        ...

    @abstractmethod
    async def create_campaign(
        self,
        name: str,
        type: CampaignType = CampaignType.AUDIO,
        status: CampaignStatus = CampaignStatus.IN_DESIGN,
        config: dict[str, Any] | None = None,
    ) -> StoredCampaign:
        """Create a campaign; the store assigns the id."""
        ...

    @abstractmethod
    async def update_campaign(
        self,
        campaign_id: str,
        config: dict[str, Any] | None = None,
        status: CampaignStatus | None = None,
        name: str | None = None,
    ) -> None:
        """Partially update a campaign.

        Name and config are only writable while the campaign is InDesign;
        stores reject such writes to an Active campaign.
        """
        ...

    @abstractmethod
    async def delete_campaign(self, campaign_id: str) -> None:
        """Delete a campaign."""
        ...

    async def aclose(self) -> None:
        """Release transport resources. No-op unless the adapter owns any."""
        return None
