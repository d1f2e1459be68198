"""
Unit tests for campaign schemas, model and service.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.campaigns.enums import CampaignStatus, CampaignType, InterviewMode, Strictness
from app.campaigns.models import Campaign
from app.campaigns.schemas import (
    CampaignCreate,
    CampaignUpdate,
    GenerateBlueprintBody,
    LaunchCampaignRequest,
)
from app.campaigns.service import CampaignService
from app.shared.exceptions import (
    CampaignNotEditableError,
    CampaignNotFoundError,
    InvalidStatusTransitionError,
)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def sample_campaign() -> Campaign:
    """Create an InDesign campaign saved after stage 2."""
    now = datetime.now(timezone.utc)
    return Campaign(
        id=uuid4(),
        name="QA Engineer",
        type=CampaignType.AUDIO,
        status=CampaignStatus.IN_DESIGN,
        config={"currentStep": 3, "source": [{"name": "Jo", "phone": "555-0100"}]},
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def mock_repository() -> AsyncMock:
    """Create mock repository."""
    return AsyncMock()


@pytest.fixture
def campaign_service(mock_repository: AsyncMock) -> CampaignService:
    """Create campaign service with mock repository."""
    return CampaignService(mock_repository)


@pytest.fixture
def launch_request(sample_campaign: Campaign) -> LaunchCampaignRequest:
    return LaunchCampaignRequest(
        campaign_id=sample_campaign.id,
        agent_id="rohan",
        voice_id="sarah",
        system_prompt="You are Rohan, a tech lead.",
        strictness=Strictness.STRICT,
        mode=InterviewMode.MIXED,
    )


# ============================================================================
# Schema Tests
# ============================================================================


class TestCampaignSchemas:
    """Tests for request/response schemas."""

    def test_create_defaults(self) -> None:
        data = CampaignCreate(name="QA Engineer")
        assert data.type == CampaignType.AUDIO
        assert data.status == CampaignStatus.IN_DESIGN
        assert data.config == {}

    def test_create_rejects_blank_name(self) -> None:
        with pytest.raises(ValidationError):
            CampaignCreate(name="   ")

    def test_update_all_optional(self) -> None:
        data = CampaignUpdate()
        assert data.config is None
        assert data.status is None

    def test_status_uses_wire_values(self) -> None:
        assert CampaignUpdate(status="Active").status == CampaignStatus.ACTIVE
        with pytest.raises(ValidationError):
            CampaignUpdate(status="active")

    def test_launch_request_accepts_camel_case(self) -> None:
        campaign_id = uuid4()
        request = LaunchCampaignRequest.model_validate(
            {
                "campaignId": str(campaign_id),
                "agentId": "aanya",
                "voiceId": "raju",
                "systemPrompt": "prompt",
                "strictness": "friendly",
                "mode": "hr",
            }
        )
        assert request.campaign_id == campaign_id
        assert request.strictness == Strictness.FRIENDLY

    def test_generate_body_bounds(self) -> None:
        with pytest.raises(ValidationError):
            GenerateBlueprintBody(job_role="QA", description="d", persona="aanya", duration=0)


# ============================================================================
# Model Tests
# ============================================================================


class TestCampaignModel:
    def test_in_design_can_go_active(self, sample_campaign: Campaign) -> None:
        assert sample_campaign.can_transition_to(CampaignStatus.ACTIVE)

    def test_active_is_terminal(self, sample_campaign: Campaign) -> None:
        sample_campaign.status = CampaignStatus.ACTIVE
        assert not sample_campaign.can_transition_to(CampaignStatus.IN_DESIGN)
        assert not sample_campaign.can_transition_to(CampaignStatus.ACTIVE)


# ============================================================================
# Service Tests
# ============================================================================


class TestCampaignService:
    """Tests for CampaignService."""

    @pytest.mark.asyncio
    async def test_get_campaign_not_found(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
    ) -> None:
        """Unknown ids raise CampaignNotFoundError."""
        campaign_id = uuid4()
        mock_repository.get_by_id.return_value = None

        with pytest.raises(CampaignNotFoundError) as exc_info:
            await campaign_service.get_campaign(campaign_id)

        assert exc_info.value.campaign_id == campaign_id

    @pytest.mark.asyncio
    async def test_create_passes_fields_through(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
    ) -> None:
        mock_repository.create.return_value = sample_campaign

        await campaign_service.create_campaign(
            CampaignCreate(name="QA Engineer", config={"currentStep": 2})
        )

        mock_repository.create.assert_called_once_with(
            name="QA Engineer",
            type=CampaignType.AUDIO,
            status=CampaignStatus.IN_DESIGN,
            config={"currentStep": 2},
        )

    @pytest.mark.asyncio
    async def test_checkpoint_update(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
    ) -> None:
        mock_repository.get_by_id.return_value = sample_campaign
        mock_repository.update.return_value = sample_campaign

        await campaign_service.update_campaign(
            sample_campaign.id,
            CampaignUpdate(config={"currentStep": 4}),
        )

        mock_repository.update.assert_called_once_with(
            sample_campaign,
            name=None,
            config={"currentStep": 4},
            status=None,
        )

    @pytest.mark.asyncio
    async def test_remarking_active_is_a_no_op(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
    ) -> None:
        """The launch fallback may re-send Active; that must not fail."""
        sample_campaign.status = CampaignStatus.ACTIVE
        mock_repository.get_by_id.return_value = sample_campaign
        mock_repository.update.return_value = sample_campaign

        await campaign_service.update_campaign(
            sample_campaign.id,
            CampaignUpdate(status=CampaignStatus.ACTIVE),
        )

        mock_repository.update.assert_called_once_with(
            sample_campaign, name=None, config=None, status=None
        )

    @pytest.mark.asyncio
    async def test_reopening_active_rejected(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
    ) -> None:
        sample_campaign.status = CampaignStatus.ACTIVE
        mock_repository.get_by_id.return_value = sample_campaign

        with pytest.raises(InvalidStatusTransitionError):
            await campaign_service.update_campaign(
                sample_campaign.id,
                CampaignUpdate(status=CampaignStatus.IN_DESIGN),
            )
        mock_repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_launch_merges_settings_and_activates(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
        launch_request: LaunchCampaignRequest,
    ) -> None:
        mock_repository.get_by_id.return_value = sample_campaign
        mock_repository.update.return_value = sample_campaign

        await campaign_service.launch_campaign(sample_campaign.id, launch_request)

        _, kwargs = mock_repository.update.call_args
        assert kwargs["status"] == CampaignStatus.ACTIVE
        config = kwargs["config"]
        assert config["currentStep"] == 3
        assert config["source"] == [{"name": "Jo", "phone": "555-0100"}]
        assert config["agent"] == "rohan"
        assert config["voice"] == "sarah"
        assert config["strict"] == "strict"
        assert config["mode"] == "mixed"
        assert config["systemPrompt"] == "You are Rohan, a tech lead."

    @pytest.mark.asyncio
    async def test_launch_twice_rejected(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
        launch_request: LaunchCampaignRequest,
    ) -> None:
        sample_campaign.status = CampaignStatus.ACTIVE
        mock_repository.get_by_id.return_value = sample_campaign

        with pytest.raises(InvalidStatusTransitionError):
            await campaign_service.launch_campaign(sample_campaign.id, launch_request)

    @pytest.mark.asyncio
    async def test_delete(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
    ) -> None:
        mock_repository.get_by_id.return_value = sample_campaign

        await campaign_service.delete_campaign(sample_campaign.id)

        mock_repository.delete.assert_called_once_with(sample_campaign)

    @pytest.mark.asyncio
    async def test_rename_passed_to_repository(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
    ) -> None:
        mock_repository.get_by_id.return_value = sample_campaign
        mock_repository.update.return_value = sample_campaign

        await campaign_service.update_campaign(
            sample_campaign.id,
            CampaignUpdate(name="Beta", config={"currentStep": 2}),
        )

        _, kwargs = mock_repository.update.call_args
        assert kwargs["name"] == "Beta"
        assert kwargs["config"] == {"currentStep": 2}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "update",
        [
            CampaignUpdate(config={"currentStep": 2, "source": []}),
            CampaignUpdate(name="Renamed"),
        ],
    )
    async def test_active_campaign_not_editable(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        sample_campaign: Campaign,
        update: CampaignUpdate,
    ) -> None:
        """A launched campaign keeps the config (and systemPrompt) it launched with."""
        sample_campaign.status = CampaignStatus.ACTIVE
        sample_campaign.config = {"currentStep": 5, "systemPrompt": "You are Aanya."}
        mock_repository.get_by_id.return_value = sample_campaign

        with pytest.raises(CampaignNotEditableError):
            await campaign_service.update_campaign(sample_campaign.id, update)
        mock_repository.update.assert_not_called()


class TestCandidateOverview:
    """Cross-campaign candidate listing and dashboard counts."""

    @staticmethod
    def _campaign(name: str, status: CampaignStatus, source: object) -> Campaign:
        now = datetime.now(timezone.utc)
        return Campaign(
            id=uuid4(),
            name=name,
            type=CampaignType.AUDIO,
            status=status,
            config={"source": source},
            created_at=now,
            updated_at=now,
        )

    @pytest.fixture
    def campaigns(self) -> list[Campaign]:
        return [
            self._campaign(
                "QA Engineer",
                CampaignStatus.ACTIVE,
                [
                    {"name": "Jo", "phone": "555-0100"},
                    {"name": "Ann", "phone": "555-0101", "status": "completed"},
                    {"name": "Raj", "phone": "555-0102", "email": "raj@example.com"},
                ],
            ),
            self._campaign("Draft", CampaignStatus.IN_DESIGN, [{"name": "Kim", "phone": "555-0103"}]),
            self._campaign("Broken", CampaignStatus.IN_DESIGN, [{"phone": "no name"}, "junk"]),
            self._campaign("Odd", CampaignStatus.IN_DESIGN, "not a list"),
        ]

    @pytest.mark.asyncio
    async def test_list_all_candidates(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        campaigns: list[Campaign],
    ) -> None:
        mock_repository.list_all.return_value = campaigns

        rows = await campaign_service.list_all_candidates()

        assert [(r["name"], r["campaign_name"], r["status"]) for r in rows] == [
            ("Jo", "QA Engineer", "Pending"),
            ("Ann", "QA Engineer", "Completed"),
            ("Raj", "QA Engineer", "Pending"),
            ("Kim", "Draft", "Draft"),
        ]
        assert rows[0]["campaign_id"] == campaigns[0].id
        assert rows[0]["email"] is None
        assert rows[2]["email"] == "raj@example.com"

    @pytest.mark.asyncio
    async def test_dashboard_stats(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
        campaigns: list[Campaign],
    ) -> None:
        mock_repository.list_all.return_value = campaigns

        stats = await campaign_service.dashboard_stats()

        assert stats == {"total_candidates": 4, "active_candidates": 2, "interviews_done": 1}

    @pytest.mark.asyncio
    async def test_dashboard_stats_empty(
        self,
        campaign_service: CampaignService,
        mock_repository: AsyncMock,
    ) -> None:
        mock_repository.list_all.return_value = []

        stats = await campaign_service.dashboard_stats()

        assert stats == {"total_candidates": 0, "active_candidates": 0, "interviews_done": 0}
