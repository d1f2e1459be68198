"""
OpenAI-compatible chat completion blueprint generator.
"""

import time

import anyio
import httpx

from app.blueprint.interface import BlueprintGenerator
from app.blueprint.models import Blueprint, BlueprintProvider, BlueprintRequest
from app.blueprint.prompts import build_generation_messages
from app.blueprint.response_parser import parse_blueprint_response
from app.shared.exceptions import BlueprintGenerationError, BlueprintTimeoutError
from app.shared.logging import get_logger

logger = get_logger(__name__)


class OpenAIBlueprintGenerator(BlueprintGenerator):
    """
    Chat completion over HTTP (sync client run in a worker thread).
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = "gpt-4.1-mini",
        timeout_seconds: float = 30.0,
        base_url: str = "https://api.openai.com/v1",
        temperature: float = 0.4,
        max_tokens: int = 1200,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise BlueprintGenerationError(
                "API key required for the openai blueprint provider",
                code="BLUEPRINT_MISCONFIGURED",
            )
        self._api_key = api_key
        self._default_model = default_model
        self._timeout_seconds = timeout_seconds
        self._chat_endpoint = f"{base_url.rstrip('/')}/chat/completions"
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._transport = transport

    @property
    def provider(self) -> BlueprintProvider:
        return BlueprintProvider.OPENAI

    def generate_blueprint_sync(self, request: BlueprintRequest) -> Blueprint:
        payload = {
            "model": self._default_model,
            "messages": [
                {"role": m.role.value, "content": m.content}
                for m in build_generation_messages(request)
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        started = time.monotonic()
        try:
            with httpx.Client(timeout=self._timeout_seconds, transport=self._transport) as client:
                r = client.post(self._chat_endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise BlueprintTimeoutError(self._timeout_seconds) from e
        except httpx.HTTPError as e:
            raise BlueprintGenerationError(f"OpenAI request failed: {e}") from e

        if r.status_code != 200:
            raise BlueprintGenerationError(f"OpenAI error {r.status_code}")

        try:
            content = r.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise BlueprintGenerationError("OpenAI returned an unexpected payload") from e

        parsed = parse_blueprint_response(content or "")
        logger.info(
            "OpenAI blueprint generated",
            extra={
                "model": payload["model"],
                "latency_ms": round((time.monotonic() - started) * 1000, 1),
                "model_estimate": parsed.estimated_duration,
            },
        )
        return Blueprint(
            system_prompt=parsed.system_prompt,
            estimated_duration=parsed.estimated_duration or request.duration,
        )

    async def generate_blueprint(self, request: BlueprintRequest) -> Blueprint:
        return await anyio.to_thread.run_sync(self.generate_blueprint_sync, request)
