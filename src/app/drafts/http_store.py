"""
HTTP draft store adapter talking to the campaign API.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.campaigns.enums import CampaignStatus, CampaignType
from app.drafts.interface import DraftStore, StoredCampaign
from app.shared.exceptions import CampaignNotFoundError, DraftStoreError
from app.shared.logging import get_logger

logger = get_logger(__name__)


class HttpDraftStore(DraftStore):
    """Draft store backed by ``/api/campaigns`` endpoints.

    Pass ``client`` to share a connection pool or to inject a test transport;
    an injected client must already carry the API base URL.
    """

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

    async def __aenter__(self) -> "HttpDraftStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        campaign_id: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning(
                "Draft store request failed",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise DraftStoreError(f"Draft store unreachable: {e}") from e

        if response.status_code == 404 and campaign_id is not None:
            raise CampaignNotFoundError(campaign_id)
        if response.status_code >= 400:
            logger.warning(
                "Draft store returned an error",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise DraftStoreError(
                f"Draft store error {response.status_code} on {method} {path}",
                status_code=response.status_code,
                code=self._error_code(response),
            )
        return response

    @staticmethod
    def _error_code(response: httpx.Response) -> str:
        """Server error code from the ``{"detail": {"code": ...}}`` envelope."""
        try:
            code = response.json()["detail"]["code"]
        except (ValueError, KeyError, TypeError):
            return "DRAFT_STORE_ERROR"
        return code if isinstance(code, str) else "DRAFT_STORE_ERROR"

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DraftStoreError("Draft store returned invalid JSON") from e

    async def list_campaigns(self) -> list[StoredCampaign]:
        response = await self._request("GET", "/api/campaigns")
        data = self._decode(response)
        try:
            return [StoredCampaign.model_validate(item) for item in data.get("campaigns") or []]
        except (AttributeError, PydanticValidationError) as e:
            raise DraftStoreError("Draft store returned a malformed campaign list") from e

    async def create_campaign(
        self,
        name: str,
        type: CampaignType = CampaignType.AUDIO,
        status: CampaignStatus = CampaignStatus.IN_DESIGN,
        config: dict[str, Any] | None = None,
    ) -> StoredCampaign:
        payload = {
            "name": name,
            "type": type.value,
            "status": status.value,
            "config": config or {},
        }
        response = await self._request("POST", "/api/campaigns/create", json=payload)
        try:
            return StoredCampaign.model_validate(self._decode(response))
        except PydanticValidationError as e:
            raise DraftStoreError("Draft store returned a malformed campaign") from e

    async def update_campaign(
        self,
        campaign_id: str,
        config: dict[str, Any] | None = None,
        status: CampaignStatus | None = None,
        name: str | None = None,
    ) -> None:
        payload: dict[str, Any] = {}
        if name is not None:
            payload["name"] = name
        if config is not None:
            payload["config"] = config
        if status is not None:
            payload["status"] = status.value
        await self._request(
            "PATCH",
            f"/api/campaigns/{campaign_id}",
            campaign_id=campaign_id,
            json=payload,
        )

    async def delete_campaign(self, campaign_id: str) -> None:
        await self._request(
            "DELETE",
            f"/api/campaigns/{campaign_id}",
            campaign_id=campaign_id,
        )
