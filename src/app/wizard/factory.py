"""
Wizard controller wiring from application settings.
"""

from app.blueprint.config import BlueprintConfig
from app.blueprint.factory import create_blueprint_generator, get_blueprint_config
from app.blueprint.interface import BlueprintGenerator
from app.config import Settings, get_settings
from app.drafts.http_store import HttpDraftStore
from app.drafts.interface import DraftStore
from app.launch.http_launcher import HttpLaunchService
from app.launch.interface import LaunchService
from app.shared.logging import get_logger
from app.wizard.controller import WizardController
from app.wizard.notifier import LoggingNotifier, Notifier

logger = get_logger(__name__)


def create_wizard_controller(
    settings: Settings | None = None,
    blueprint_config: BlueprintConfig | None = None,
    draft_store: DraftStore | None = None,
    generator: BlueprintGenerator | None = None,
    launcher: LaunchService | None = None,
    notifier: Notifier | None = None,
) -> WizardController:
    """Build a controller; any collaborator passed in replaces the default.

    Defaults talk HTTP to ``settings.draft_store_base_url`` for drafts and
    launch, pick the blueprint generator from ``BlueprintConfig`` and log
    notifications.
    """
    settings = settings or get_settings()

    if draft_store is None:
        draft_store = HttpDraftStore(
            base_url=settings.draft_store_base_url,
            timeout_seconds=settings.draft_store_timeout_seconds,
        )
    if launcher is None:
        launcher = HttpLaunchService(
            base_url=settings.draft_store_base_url,
            timeout_seconds=settings.draft_store_timeout_seconds,
        )
    if generator is None:
        generator = create_blueprint_generator(blueprint_config or get_blueprint_config())

    logger.info(
        "Wizard controller configured",
        extra={
            "draft_store": type(draft_store).__name__,
            "generator": generator.provider.value,
            "launcher": type(launcher).__name__,
            "generation_timeout_seconds": settings.generation_timeout_seconds,
        },
    )

    return WizardController(
        draft_store=draft_store,
        generator=generator,
        launcher=launcher,
        notifier=notifier or LoggingNotifier(),
        generation_timeout_seconds=settings.generation_timeout_seconds,
        fallback_duration_minutes=settings.fallback_duration_minutes,
    )
