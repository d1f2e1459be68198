"""
HTTP launch adapter for ``POST /api/campaigns/{id}/launch``.
"""

import httpx

from app.launch.interface import LaunchRequest, LaunchService
from app.shared.exceptions import LaunchError
from app.shared.logging import get_logger

logger = get_logger(__name__)


class HttpLaunchService(LaunchService):
    """Launches campaigns through the campaign API."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def launch_campaign(self, request: LaunchRequest) -> None:
        payload = {
            "campaignId": request.campaign_id,
            "agentId": request.agent_id,
            "voiceId": request.voice_id,
            "systemPrompt": request.system_prompt,
            "strictness": request.strictness.value,
            "mode": request.mode.value,
        }
        path = f"/api/campaigns/{request.campaign_id}/launch"

        try:
            response = await self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.warning(
                "Launch request failed",
                extra={"campaign_id": request.campaign_id, "error": str(e)},
            )
            raise LaunchError(f"Launch service unreachable: {e}") from e

        if response.status_code >= 400:
            logger.warning(
                "Launch rejected",
                extra={"campaign_id": request.campaign_id, "status_code": response.status_code},
            )
            raise LaunchError(
                f"Launch failed with status {response.status_code}",
                status_code=response.status_code,
            )

        logger.info("Launch accepted", extra={"campaign_id": request.campaign_id})
