"""
Blueprint generator configuration.

The wizard and the ``/api/blueprints/generate`` endpoint both pick their
generator backend from these settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.blueprint.models import BlueprintProvider


class BlueprintConfig(BaseSettings):
    """Blueprint generator configuration from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BLUEPRINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider selection
    provider_type: BlueprintProvider = Field(default=BlueprintProvider.TEMPLATE)

    # OpenAI-compatible chat completion
    openai_api_key: str = Field(default="")
    model: str = Field(default="gpt-4.1-mini")
    base_url: str = Field(default="https://api.openai.com/v1")
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1200, ge=64, le=8192)

    # Remote generator service (provider_type=http)
    service_base_url: str = Field(default="http://localhost:8000")

    timeout_seconds: float = Field(default=30.0, gt=0, le=300)


def get_blueprint_config() -> BlueprintConfig:
    return BlueprintConfig()
