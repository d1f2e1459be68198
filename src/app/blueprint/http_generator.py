"""
Blueprint generator client for the ``/api/blueprints/generate`` endpoint.
"""

from typing import Any

import httpx

from app.blueprint.interface import BlueprintGenerator
from app.blueprint.models import Blueprint, BlueprintProvider, BlueprintRequest
from app.shared.exceptions import BlueprintGenerationError, BlueprintTimeoutError
from app.shared.logging import get_logger

logger = get_logger(__name__)


class HttpBlueprintGenerator(BlueprintGenerator):
    """Calls the backend generator; an injected client must carry the base URL."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
        )

    @property
    def provider(self) -> BlueprintProvider:
        return BlueprintProvider.HTTP

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def generate_blueprint(self, request: BlueprintRequest) -> Blueprint:
        payload: dict[str, Any] = {
            "jobRole": request.job_role,
            "description": request.description,
            "candidateCount": request.candidate_count,
            "persona": request.persona,
            "strictness": request.strictness.value,
            "mode": request.mode.value,
            "duration": request.duration,
            "company": request.company,
            "industry": request.industry,
        }
        try:
            response = await self._client.post(
                "/api/blueprints/generate",
                json=payload,
                headers={"X-Correlation-ID": request.correlation_id},
            )
        except httpx.TimeoutException as e:
            raise BlueprintTimeoutError(self._timeout_seconds) from e
        except httpx.HTTPError as e:
            raise BlueprintGenerationError(f"Blueprint service unreachable: {e}") from e

        if response.status_code != 200:
            logger.warning(
                "Blueprint service returned an error",
                extra={"status_code": response.status_code},
            )
            raise BlueprintGenerationError(f"Blueprint service error {response.status_code}")

        try:
            data = response.json()
            return Blueprint(
                system_prompt=data["systemPrompt"],
                estimated_duration=int(data["estimatedDuration"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise BlueprintGenerationError("Blueprint service returned an unexpected payload") from e
