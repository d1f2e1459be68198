"""
Campaign creation wizard controller.

The controller is an explicit state machine over five stages (details, source,
flow, persona, script) plus ``NOT_STARTED``, ``CONFIRMING`` and ``LAUNCHED``.
It owns the single in-memory draft and talks to three collaborators:

- DraftStore: campaign records and per-stage checkpoints
- BlueprintGenerator: system prompt + duration estimate before launch
- LaunchService: starts execution; a plain status update is the fallback

Every failure is caught at the operation boundary and turned into a
notification or a log line. Operations never raise for a bad state or a
collaborator error; they return ``False`` (or ``LaunchOutcome.FAILED``).

Each collaborator call runs under an ``OperationToken``. Navigation (start,
resume, back, cancel_confirm, select_campaign) cancels outstanding tokens, and
a response arriving for a cancelled token is dropped without touching state.
"""

import asyncio
from enum import Enum
from typing import Any

from app.blueprint.interface import BlueprintGenerator
from app.blueprint.models import Blueprint, BlueprintRequest
from app.campaigns.enums import CampaignStatus, CampaignType, InterviewMode
from app.drafts.interface import DraftStore, StoredCampaign
from app.launch.interface import LaunchRequest, LaunchService
from app.shared.exceptions import AppError
from app.shared.logging import bind_correlation_id, get_logger
from app.wizard.catalog import DEFAULT_PERSONA, DEFAULT_VOICE
from app.wizard.draft import FIRST_STAGE, LAST_STAGE, Candidate, WizardDraft
from app.wizard.notifier import Notifier, Severity
from app.wizard.resume import find_campaign_by_name, pick_campaign_on_load, resume_stage
from app.wizard.validators import validate_stage

logger = get_logger(__name__)


class WizardState(str, Enum):
    NOT_STARTED = "not_started"
    DETAILS = "details"
    SOURCE = "source"
    FLOW = "flow"
    PERSONA = "persona"
    SCRIPT = "script"
    CONFIRMING = "confirming"
    LAUNCHED = "launched"

    @property
    def stage(self) -> int | None:
        """Stage number (1-5) for stage states, None for pseudo-states."""
        return _STAGE_NUMBERS.get(self)

    @classmethod
    def for_stage(cls, stage: int) -> "WizardState":
        for state, number in _STAGE_NUMBERS.items():
            if number == stage:
                return state
        raise ValueError(f"No wizard stage {stage}")


_STAGE_NUMBERS = {
    WizardState.DETAILS: 1,
    WizardState.SOURCE: 2,
    WizardState.FLOW: 3,
    WizardState.PERSONA: 4,
    WizardState.SCRIPT: 5,
}


class LaunchOutcome(str, Enum):
    LAUNCHED = "launched"
    MARKED_ACTIVE = "marked_active"
    FAILED = "failed"


class OperationToken:
    """Cancellation handle for one in-flight controller operation."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        return f"<OperationToken {self.name} cancelled={self._cancelled}>"


class WizardController:
    """State machine driving campaign creation from name entry to launch."""

    def __init__(
        self,
        draft_store: DraftStore,
        generator: BlueprintGenerator,
        launcher: LaunchService,
        notifier: Notifier,
        generation_timeout_seconds: float = 30.0,
        fallback_duration_minutes: int = 15,
    ) -> None:
        self._store = draft_store
        self._generator = generator
        self._launcher = launcher
        self._notifier = notifier
        self._generation_timeout = generation_timeout_seconds
        self._fallback_duration = fallback_duration_minutes

        self._state = WizardState.NOT_STARTED
        self._draft = WizardDraft()
        self._campaign_id: str | None = None
        self._blueprint: Blueprint | None = None
        self._campaigns: list[StoredCampaign] = []
        self._selected_id: str | None = None

        self._pending: set[OperationToken] = set()
        self._forward: OperationToken | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def stage(self) -> int | None:
        return self._state.stage

    @property
    def draft(self) -> WizardDraft:
        return self._draft.model_copy(deep=True)

    @property
    def campaign_id(self) -> str | None:
        return self._campaign_id

    @property
    def blueprint(self) -> Blueprint | None:
        return self._blueprint

    @property
    def campaigns(self) -> list[StoredCampaign]:
        return [c.model_copy(deep=True) for c in self._campaigns]

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected_campaign(self) -> StoredCampaign | None:
        cached = self._cached(self._selected_id)
        return cached.model_copy(deep=True) if cached else None

    @property
    def in_wizard(self) -> bool:
        return self._state.stage is not None or self._state == WizardState.CONFIRMING

    @property
    def is_busy(self) -> bool:
        return self._forward is not None and not self._forward.cancelled

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Open a fresh draft at the details stage."""
        if self._state not in (WizardState.NOT_STARTED, WizardState.LAUNCHED):
            return self._ignored("start")

        self._cancel_pending()
        self._reset_draft()
        self._state = WizardState.DETAILS
        logger.info("Wizard started")
        return True

    def resume(self, campaign: StoredCampaign) -> bool:
        """Re-enter the wizard for a stored draft at its recorded stage."""
        if not campaign.is_draft:
            logger.info(
                "Resume refused for non-draft campaign",
                extra={"campaign_id": campaign.id, "status": campaign.status.value},
            )
            return False

        self._cancel_pending()
        stage = resume_stage(campaign.config)
        draft = WizardDraft.from_campaign(campaign.name, campaign.config)
        if draft.current_step < stage:
            draft.current_step = stage

        self._draft = draft
        self._campaign_id = campaign.id
        self._selected_id = campaign.id
        self._blueprint = None
        self._state = WizardState.for_stage(stage)
        logger.info(
            "Wizard resumed",
            extra={"campaign_id": campaign.id, "stage": stage},
        )
        return True

    def back(self) -> bool:
        """Step back one stage without validating or persisting anything."""
        if self._state == WizardState.CONFIRMING:
            return self.cancel_confirm()

        stage = self._state.stage
        if stage is None:
            return self._ignored("back")

        self._cancel_pending()
        if stage == FIRST_STAGE:
            self._reset_draft()
            self._selected_id = None
            self._state = WizardState.NOT_STARTED
            logger.info("Wizard cancelled")
        else:
            self._state = WizardState.for_stage(stage - 1)
        return True

    def cancel_confirm(self) -> bool:
        if self._state != WizardState.CONFIRMING:
            return self._ignored("cancel_confirm")

        self._cancel_pending()
        self._blueprint = None
        self._state = WizardState.SCRIPT
        return True

    # ------------------------------------------------------------------
    # Draft editing
    # ------------------------------------------------------------------

    def update_draft(self, **fields: Any) -> bool:
        """Set draft fields by attribute name (``job_title=...``)."""
        if self._state.stage is None:
            return self._ignored("update_draft")

        unknown = sorted(set(fields) - set(WizardDraft.model_fields))
        if unknown:
            self._notifier.notify(f"Unknown draft fields: {', '.join(unknown)}", Severity.WARNING)
            return False

        data = self._draft.model_dump()
        data.update(fields)
        try:
            self._draft = WizardDraft.model_validate(data)
        except ValueError as e:
            logger.info("Draft update rejected", extra={"fields": sorted(fields), "error": str(e)})
            self._notifier.notify("Some of the entered values are invalid", Severity.WARNING)
            return False
        return True

    def add_candidate(self, name: str, phone: str, email: str | None = None) -> bool:
        if self._state.stage is None:
            return self._ignored("add_candidate")

        if not (name or "").strip() or not (phone or "").strip():
            self._notifier.notify("Name and phone are required", Severity.WARNING)
            return False

        candidate = Candidate(name=name, phone=phone, email=email)
        self._draft.source = [*self._draft.source, candidate]
        return True

    def remove_candidate(self, index: int) -> bool:
        if self._state.stage is None:
            return self._ignored("remove_candidate")

        source = list(self._draft.source)
        if not 0 <= index < len(source):
            logger.info("Candidate index out of range", extra={"index": index, "count": len(source)})
            return False
        del source[index]
        self._draft.source = source
        return True

    # ------------------------------------------------------------------
    # Forward transitions
    # ------------------------------------------------------------------

    async def advance(self) -> bool:
        """Validate the current stage and move forward."""
        stage = self._state.stage
        if stage is None:
            return self._ignored("advance")
        if self.is_busy:
            return self._ignored("advance", reason="busy")

        result = validate_stage(stage, self._draft)
        if not result.is_valid:
            self._notifier.notify(result.message, Severity.WARNING)
            return False

        token = self._begin(f"advance:{stage}", forward=True)
        try:
            if stage == FIRST_STAGE:
                return await self._advance_from_details(token)
            if stage == LAST_STAGE:
                return await self._advance_from_script(token)
            return await self._advance_to(stage + 1, token)
        finally:
            self._finish(token)

    async def _advance_from_details(self, token: OperationToken) -> bool:
        name = self._draft.name
        listed = True
        try:
            campaigns = await self._store.list_campaigns()
        except AppError as e:
            logger.warning(
                "Campaign list unavailable, matching against cached list",
                extra={"error": e.message},
            )
            campaigns = self._campaigns
            listed = False
        if token.cancelled:
            return False
        self._campaigns = campaigns

        match = find_campaign_by_name(campaigns, name)
        if match is not None:
            if not match.is_draft:
                logger.info(
                    "Name taken by a launched campaign",
                    extra={"campaign_id": match.id, "status": match.status.value},
                )
                self._notifier.notify(
                    f"A campaign named '{match.name}' is already active; choose another name",
                    Severity.WARNING,
                )
                return False
            self._adopt_existing(match)
            self._notifier.notify(
                f"A campaign named '{match.name}' already exists; continuing that draft",
                Severity.INFO,
            )
        else:
            adopted = self._cached(self._campaign_id)
            # A fresh listing without the adopted id means it was deleted meanwhile.
            if self._campaign_id is None or (listed and adopted is None):
                if await self._create_draft(name.strip(), token) is None:
                    return False
            elif not await self._rename_draft(self._campaign_id, name.strip(), token):
                return False

        self._state = WizardState.SOURCE
        return True

    async def _create_draft(self, name: str, token: OperationToken) -> StoredCampaign | None:
        config = self._draft.to_config(current_step=FIRST_STAGE + 1)
        try:
            created = await self._store.create_campaign(
                name=name,
                type=CampaignType.AUDIO,
                status=CampaignStatus.IN_DESIGN,
                config=config,
            )
        except AppError as e:
            if not token.cancelled:
                logger.warning("Campaign creation failed", extra={"error": e.message})
                self._notifier.notify(f"Could not create campaign: {e.message}", Severity.ERROR)
            return None
        if token.cancelled:
            return None

        self._campaigns = [*self._campaigns, created]
        self._campaign_id = created.id
        self._selected_id = created.id
        self._draft.current_step = max(self._draft.current_step, FIRST_STAGE + 1)
        logger.info("Campaign draft created", extra={"campaign_id": created.id})
        return created

    async def _rename_draft(self, campaign_id: str, name: str, token: OperationToken) -> bool:
        """Persist a new name typed after coming back to the details stage."""
        pointer = max(FIRST_STAGE + 1, self._draft.current_step)
        try:
            await self._store.update_campaign(
                campaign_id,
                name=name,
                config=self._draft.to_config(current_step=pointer),
            )
        except AppError as e:
            if not token.cancelled:
                logger.warning(
                    "Campaign rename failed",
                    extra={"campaign_id": campaign_id, "error": e.message},
                )
                self._notifier.notify(f"Could not rename campaign: {e.message}", Severity.ERROR)
            return False
        if token.cancelled:
            return False

        cached = self._cached(campaign_id)
        if cached is not None:
            cached.name = name
        self._draft.current_step = pointer
        logger.info("Campaign draft renamed", extra={"campaign_id": campaign_id, "campaign_name": name})
        return True

    def _adopt_existing(self, match: StoredCampaign) -> None:
        if match.id != self._campaign_id:
            self._draft = self._draft.merged_with(match.config)
            self._campaign_id = match.id
        self._selected_id = match.id
        logger.info("Existing campaign adopted by name", extra={"campaign_id": match.id})

    async def _advance_to(self, next_stage: int, token: OperationToken) -> bool:
        pointer = max(next_stage, self._draft.current_step)
        await self._checkpoint(pointer)
        if token.cancelled:
            return False

        self._draft.current_step = pointer
        self._state = WizardState.for_stage(next_stage)
        return True

    async def _advance_from_script(self, token: OperationToken) -> bool:
        await self._checkpoint(LAST_STAGE)
        if token.cancelled:
            return False
        self._draft.current_step = LAST_STAGE

        request = self._blueprint_request()
        with bind_correlation_id(request.correlation_id):
            try:
                blueprint = await asyncio.wait_for(
                    self._generator.generate_blueprint(request),
                    timeout=self._generation_timeout,
                )
            except Exception as e:
                # Generation failure never blocks progress.
                if token.cancelled:
                    return False
                logger.warning(
                    "Blueprint generation failed, using raw script",
                    extra={
                        "campaign_id": self._campaign_id,
                        "error_type": type(e).__name__,
                        "error": str(e),
                    },
                )
                blueprint = Blueprint(
                    system_prompt=self._draft.script,
                    estimated_duration=self._fallback_duration,
                    degraded=True,
                )
            if token.cancelled:
                return False

            self._blueprint = blueprint
            self._state = WizardState.CONFIRMING
            logger.info(
                "Blueprint ready",
                extra={
                    "campaign_id": self._campaign_id,
                    "degraded": blueprint.degraded,
                    "estimated_duration": blueprint.estimated_duration,
                },
            )
        return True

    async def _checkpoint(self, current_step: int) -> None:
        """Best-effort save of the draft; failures are only logged."""
        if self._campaign_id is None:
            logger.warning("Checkpoint skipped: no campaign adopted", extra={"step": current_step})
            return
        try:
            await self._store.update_campaign(
                self._campaign_id,
                config=self._draft.to_config(current_step=current_step),
            )
        except AppError as e:
            logger.warning(
                "Checkpoint write failed",
                extra={"campaign_id": self._campaign_id, "step": current_step, "error": e.message},
            )

    def _blueprint_request(self) -> BlueprintRequest:
        draft = self._draft
        return BlueprintRequest(
            job_role=draft.job_title,
            description=draft.script,
            candidate_count=len(draft.source),
            persona=draft.agent or DEFAULT_PERSONA,
            strictness=draft.strict,
            mode=draft.mode or InterviewMode.TECHNICAL,
            duration=draft.duration,
            company=draft.company,
            industry=draft.industry,
        )

    # ------------------------------------------------------------------
    # Launch
    # ------------------------------------------------------------------

    async def confirm_launch(self) -> LaunchOutcome:
        """Launch the confirmed campaign, falling back to a status update."""
        if self._state != WizardState.CONFIRMING or self._blueprint is None:
            self._ignored("confirm_launch")
            return LaunchOutcome.FAILED
        if self.is_busy:
            self._ignored("confirm_launch", reason="busy")
            return LaunchOutcome.FAILED

        campaign_id = self._campaign_id
        if campaign_id is None:
            self._ignored("confirm_launch", reason="no campaign adopted")
            return LaunchOutcome.FAILED

        draft = self._draft
        request = LaunchRequest(
            campaign_id=campaign_id,
            agent_id=draft.agent or DEFAULT_PERSONA,
            voice_id=draft.voice or DEFAULT_VOICE,
            system_prompt=self._blueprint.system_prompt,
            strictness=draft.strict,
            mode=draft.mode or InterviewMode.TECHNICAL,
        )

        token = self._begin("confirm_launch", forward=True)
        try:
            try:
                await self._launcher.launch_campaign(request)
            except AppError as e:
                if token.cancelled:
                    return LaunchOutcome.FAILED
                logger.warning(
                    "Launch failed, marking campaign active directly",
                    extra={"campaign_id": campaign_id, "error": e.message},
                )
                return await self._mark_active_fallback(campaign_id, token)

            if token.cancelled:
                return LaunchOutcome.FAILED
            self._mark_launched(campaign_id)
            self._notifier.notify(f"Campaign '{draft.name.strip()}' launched", Severity.SUCCESS)
            return LaunchOutcome.LAUNCHED
        finally:
            self._finish(token)

    async def _mark_active_fallback(self, campaign_id: str, token: OperationToken) -> LaunchOutcome:
        name = self._draft.name.strip()
        try:
            await self._store.update_campaign(campaign_id, status=CampaignStatus.ACTIVE)
        except AppError as e:
            if token.cancelled:
                return LaunchOutcome.FAILED
            logger.error(
                "Fallback status update failed",
                extra={"campaign_id": campaign_id, "error": e.message},
            )
            self._notifier.notify(f"Could not launch campaign '{name}'", Severity.ERROR)
            return LaunchOutcome.FAILED

        if token.cancelled:
            return LaunchOutcome.FAILED
        self._mark_launched(campaign_id)
        self._notifier.notify(
            f"Campaign '{name}' marked active, launch unconfirmed",
            Severity.WARNING,
        )
        return LaunchOutcome.MARKED_ACTIVE

    def _mark_launched(self, campaign_id: str) -> None:
        cached = self._cached(campaign_id)
        if cached is not None:
            cached.status = CampaignStatus.ACTIVE
            cached.config = self._draft.to_config()
        self._state = WizardState.LAUNCHED
        logger.info("Campaign active", extra={"campaign_id": campaign_id})

    # ------------------------------------------------------------------
    # Campaign list
    # ------------------------------------------------------------------

    async def load_campaigns(self) -> list[StoredCampaign]:
        """Refresh the campaign list and auto-resume the selected draft."""
        token = self._begin("load_campaigns")
        try:
            try:
                campaigns = await self._store.list_campaigns()
            except AppError as e:
                if not token.cancelled:
                    logger.warning("Failed to fetch campaigns", extra={"error": e.message})
                    self._notifier.notify("Failed to load campaigns", Severity.ERROR)
                return self.campaigns
            if token.cancelled:
                return self.campaigns

            self._campaigns = campaigns
            picked = pick_campaign_on_load(campaigns, self._selected_id)
            self._selected_id = picked.id if picked else None
            if picked is not None and picked.is_draft and not self.in_wizard:
                self.resume(picked)
            return self.campaigns
        finally:
            self._finish(token)

    def select_campaign(self, campaign: StoredCampaign) -> bool:
        """Select a campaign; drafts open in the wizard, others close it."""
        self._cancel_pending()
        self._selected_id = campaign.id
        if campaign.is_draft:
            return self.resume(campaign)

        self._draft = WizardDraft()
        self._campaign_id = None
        self._blueprint = None
        self._state = WizardState.NOT_STARTED
        return True

    async def delete_campaign(self, campaign_id: str) -> bool:
        try:
            await self._store.delete_campaign(campaign_id)
        except AppError as e:
            logger.warning(
                "Campaign deletion failed",
                extra={"campaign_id": campaign_id, "error": e.message},
            )
            self._notifier.notify(f"Could not delete campaign: {e.message}", Severity.ERROR)
            return False

        self._campaigns = [c for c in self._campaigns if c.id != campaign_id]
        if self._selected_id == campaign_id:
            self._selected_id = None
        if self._campaign_id == campaign_id:
            self._cancel_pending()
            self._reset_draft()
            self._state = WizardState.NOT_STARTED
        self._notifier.notify("Campaign deleted", Severity.SUCCESS)
        logger.info("Campaign deleted", extra={"campaign_id": campaign_id})
        return True

    async def aclose(self) -> None:
        self._cancel_pending()
        await self._store.aclose()
        await self._generator.aclose()
        await self._launcher.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin(self, name: str, forward: bool = False) -> OperationToken:
        token = OperationToken(name)
        self._pending.add(token)
        if forward:
            self._forward = token
        return token

    def _finish(self, token: OperationToken) -> None:
        self._pending.discard(token)
        if self._forward is token:
            self._forward = None

    def _cancel_pending(self) -> None:
        for token in self._pending:
            token.cancel()
        self._pending.clear()
        self._forward = None

    def _reset_draft(self) -> None:
        self._draft = WizardDraft()
        self._campaign_id = None
        self._blueprint = None

    def _cached(self, campaign_id: str | None) -> StoredCampaign | None:
        if campaign_id is None:
            return None
        for campaign in self._campaigns:
            if campaign.id == campaign_id:
                return campaign
        return None

    def _ignored(self, operation: str, reason: str | None = None) -> bool:
        logger.info(
            "Wizard operation ignored",
            extra={
                "operation": operation,
                "state": self._state.value,
                "reason": reason or "invalid state",
            },
        )
        return False
