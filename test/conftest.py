"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.blueprint.interface import BlueprintGenerator
from app.blueprint.models import Blueprint, BlueprintProvider, BlueprintRequest
from app.campaigns.enums import CampaignStatus, CampaignType
from app.campaigns.models import Campaign
from app.campaigns.router import get_campaign_repository
from app.drafts.interface import StoredCampaign
from app.drafts.memory_store import InMemoryDraftStore
from app.launch.mock_launcher import MockLaunchService
from app.main import app
from app.shared.exceptions import BlueprintGenerationError
from app.wizard.controller import WizardController
from app.wizard.notifier import RecordingNotifier


# ============================================================================
# Fakes
# ============================================================================


class InMemoryCampaignRepository:
    """Stands in for CampaignRepository behind the FastAPI dependency."""

    _EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __init__(self) -> None:
        self.rows: dict[UUID, Campaign] = {}
        self._tick = 0

    def _now(self) -> datetime:
        self._tick += 1
        return self._EPOCH + timedelta(seconds=self._tick)

    async def create(
        self,
        name: str,
        type: CampaignType,
        status: CampaignStatus,
        config: dict[str, Any],
    ) -> Campaign:
        now = self._now()
        campaign = Campaign(
            id=uuid4(),
            name=name,
            type=type,
            status=status,
            config=dict(config),
            created_at=now,
            updated_at=now,
        )
        self.rows[campaign.id] = campaign
        return campaign

    async def get_by_id(self, campaign_id: UUID) -> Campaign | None:
        return self.rows.get(campaign_id)

    async def list_all(self) -> list[Campaign]:
        return sorted(self.rows.values(), key=lambda c: (c.created_at, str(c.id)))

    async def update(
        self,
        campaign: Campaign,
        name: str | None = None,
        config: dict[str, Any] | None = None,
        status: CampaignStatus | None = None,
    ) -> Campaign:
        if name is not None:
            campaign.name = name
        if config is not None:
            campaign.config = dict(config)
        if status is not None:
            campaign.status = status
        campaign.updated_at = self._now()
        return campaign

    async def delete(self, campaign: Campaign) -> None:
        self.rows.pop(campaign.id, None)


class StubBlueprintGenerator(BlueprintGenerator):
    """Returns a canned blueprint or raises; records every request."""

    def __init__(
        self,
        system_prompt: str = "You are Aanya, interviewing for Acme.",
        estimated_duration: int = 20,
    ) -> None:
        self.requests: list[BlueprintRequest] = []
        self.system_prompt = system_prompt
        self.estimated_duration = estimated_duration
        self.error: Exception | None = None

    @property
    def provider(self) -> BlueprintProvider:
        return BlueprintProvider.TEMPLATE

    def fail_with(self, error: Exception | None = None) -> None:
        self.error = error or BlueprintGenerationError("generator down")

    async def generate_blueprint(self, request: BlueprintRequest) -> Blueprint:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return Blueprint(
            system_prompt=self.system_prompt,
            estimated_duration=self.estimated_duration,
        )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def draft_store() -> InMemoryDraftStore:
    return InMemoryDraftStore()


@pytest.fixture
def generator() -> StubBlueprintGenerator:
    return StubBlueprintGenerator()


@pytest.fixture
def launcher() -> MockLaunchService:
    return MockLaunchService()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def controller(
    draft_store: InMemoryDraftStore,
    generator: StubBlueprintGenerator,
    launcher: MockLaunchService,
    notifier: RecordingNotifier,
) -> WizardController:
    return WizardController(
        draft_store=draft_store,
        generator=generator,
        launcher=launcher,
        notifier=notifier,
        generation_timeout_seconds=0.5,
        fallback_duration_minutes=15,
    )


@pytest.fixture
def stored_draft() -> StoredCampaign:
    """An InDesign campaign saved after stage 3."""
    return StoredCampaign(
        id=str(uuid4()),
        name="Backend Q1",
        type=CampaignType.AUDIO,
        status=CampaignStatus.IN_DESIGN,
        config={
            "currentStep": 4,
            "source": [{"name": "Jo", "phone": "555-0100", "email": "jo@example.com"}],
            "mode": "hr",
            "duration": 25,
            "agent": "rohan",
            "voice": "sarah",
            "lang": "en",
            "strict": "strict",
            "script": "",
            "company": "Acme",
            "industry": "Fintech",
            "jobTitle": "Backend Engineer",
        },
    )


@pytest.fixture
def campaign_repository() -> InMemoryCampaignRepository:
    return InMemoryCampaignRepository()


@pytest_asyncio.fixture
async def async_client(
    campaign_repository: InMemoryCampaignRepository,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, with the database swapped for memory."""
    app.dependency_overrides[get_campaign_repository] = lambda: campaign_repository
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
