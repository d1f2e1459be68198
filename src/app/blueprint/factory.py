"""
Blueprint generator factory.

Configuration comes from BlueprintConfig (env + .env); nothing here reads
os.environ directly.
"""

from functools import lru_cache

from app.blueprint.config import BlueprintConfig
from app.blueprint.config import get_blueprint_config as _load_blueprint_config
from app.blueprint.http_generator import HttpBlueprintGenerator
from app.blueprint.interface import BlueprintGenerator
from app.blueprint.models import BlueprintProvider
from app.blueprint.openai_generator import OpenAIBlueprintGenerator
from app.blueprint.template_generator import TemplateBlueprintGenerator
from app.shared.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_blueprint_config() -> BlueprintConfig:
    """Return the cached BlueprintConfig."""
    return _load_blueprint_config()


def create_blueprint_generator(config: BlueprintConfig | None = None) -> BlueprintGenerator:
    """Build a generator for ``config`` (the cached config when omitted).

    Raises:
        ValueError: If the provider type is not supported.
    """
    cfg = config or get_blueprint_config()

    logger.info(
        "Blueprint generator config resolved",
        extra={
            "provider_type": cfg.provider_type.value,
            "model": cfg.model,
            "has_api_key": bool(cfg.openai_api_key),
            "timeout_seconds": cfg.timeout_seconds,
        },
    )

    if cfg.provider_type == BlueprintProvider.TEMPLATE:
        return TemplateBlueprintGenerator()

    if cfg.provider_type == BlueprintProvider.OPENAI:
        return OpenAIBlueprintGenerator(
            api_key=cfg.openai_api_key,
            default_model=cfg.model,
            timeout_seconds=cfg.timeout_seconds,
            base_url=cfg.base_url,
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
        )

    if cfg.provider_type == BlueprintProvider.HTTP:
        return HttpBlueprintGenerator(
            base_url=cfg.service_base_url,
            timeout_seconds=cfg.timeout_seconds,
        )

    raise ValueError(f"Unsupported blueprint provider_type: {cfg.provider_type}")


@lru_cache(maxsize=1)
def get_blueprint_generator() -> BlueprintGenerator:
    """Create and cache the generator used by the HTTP endpoint."""
    return create_blueprint_generator()
