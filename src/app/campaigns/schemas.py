"""
Pydantic schemas for the campaign draft store API.

Wire format follows the dashboard: camelCase keys for request bodies that the
wizard sends, campaign ``config`` passed through as an opaque mapping.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.campaigns.enums import CampaignStatus, CampaignType, InterviewMode, Strictness


class CampaignCreate(BaseModel):
    """Schema for creating a new campaign."""

    name: str = Field(..., min_length=1, max_length=255, description="Campaign name")
    type: CampaignType = Field(default=CampaignType.AUDIO, description="Interview channel")
    status: CampaignStatus = Field(
        default=CampaignStatus.IN_DESIGN,
        description="Initial status (drafts are created InDesign)",
    )
    config: dict[str, Any] = Field(default_factory=dict, description="Wizard configuration")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


class CampaignUpdate(BaseModel):
    """Schema for a partial campaign update (checkpoint, rename or status change)."""

    name: str | None = Field(None, min_length=1, max_length=255, description="New campaign name")
    config: dict[str, Any] | None = Field(None, description="Replacement wizard configuration")
    status: CampaignStatus | None = Field(None, description="Target status")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("name must not be blank")
        return v


class CampaignResponse(BaseModel):
    """Schema for campaign response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Campaign ID")
    name: str = Field(..., description="Campaign name")
    type: CampaignType = Field(..., description="Interview channel")
    status: CampaignStatus = Field(..., description="Current campaign status")
    config: dict[str, Any] = Field(default_factory=dict, description="Wizard configuration")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class CampaignListResponse(BaseModel):
    """Schema for the campaign list."""

    campaigns: list[CampaignResponse] = Field(..., description="Campaigns, oldest first")


class CandidateListResponse(BaseModel):
    """Candidates collected in a campaign's source stage."""

    candidates: list[dict[str, Any]] = Field(default_factory=list)


class CamelModel(BaseModel):
    """Base for request bodies that arrive with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LaunchCampaignRequest(CamelModel):
    """Body of the launch call issued after the blueprint is confirmed."""

    campaign_id: UUID = Field(..., description="Campaign to launch")
    agent_id: str = Field(..., min_length=1, description="AI persona id")
    voice_id: str = Field(..., min_length=1, description="Voice model id")
    system_prompt: str = Field(..., min_length=1, description="Finalized system prompt")
    strictness: Strictness = Field(default=Strictness.BALANCED)
    mode: InterviewMode = Field(default=InterviewMode.TECHNICAL)


class GenerateBlueprintBody(CamelModel):
    """Body of the blueprint generation call."""

    job_role: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    candidate_count: int = Field(default=0, ge=0)
    persona: str = Field(..., min_length=1)
    strictness: Strictness = Field(default=Strictness.BALANCED)
    mode: InterviewMode = Field(default=InterviewMode.TECHNICAL)
    duration: int = Field(default=15, ge=1, le=120)
    company: str = ""
    industry: str = ""


class BlueprintResponseBody(CamelModel):
    """Generated system prompt and duration estimate."""

    system_prompt: str
    estimated_duration: int


class ErrorDetail(BaseModel):
    """Schema for error detail."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: ErrorDetail = Field(..., description="Error details")


class CandidateOverview(BaseModel):
    """A candidate listed across all campaigns."""

    name: str
    phone: str = ""
    email: str | None = None
    campaign_id: UUID
    campaign_name: str
    status: str


class AllCandidatesResponse(BaseModel):
    """Every candidate of every campaign, in campaign creation order."""

    candidates: list[CandidateOverview] = Field(default_factory=list)


class DashboardStatsResponse(BaseModel):
    """Headline counts for the dashboard."""

    total_candidates: int = Field(..., ge=0)
    active_candidates: int = Field(..., ge=0, description="Candidates of Active campaigns not yet interviewed")
    interviews_done: int = Field(..., ge=0)
