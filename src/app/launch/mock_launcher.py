"""
Mock launch service for testing.
"""

from app.launch.interface import LaunchRequest, LaunchService
from app.shared.exceptions import LaunchError
from app.shared.logging import get_logger

logger = get_logger(__name__)


class MockLaunchService(LaunchService):
    """Records launch requests; can be told to fail."""

    def __init__(self) -> None:
        self._requests: list[LaunchRequest] = []
        self._should_fail: bool = False
        self._fail_error: str = "Mock launch failure"
        self._fail_status: int | None = 500

    def reset(self) -> None:
        self._requests.clear()
        self._should_fail = False
        self._fail_error = "Mock launch failure"
        self._fail_status = 500

    def configure_failure(
        self,
        should_fail: bool = True,
        error_message: str = "Mock launch failure",
        status_code: int | None = 500,
    ) -> None:
        self._should_fail = should_fail
        self._fail_error = error_message
        self._fail_status = status_code

    @property
    def requests(self) -> list[LaunchRequest]:
        return self._requests.copy()

    def get_last_request(self) -> LaunchRequest | None:
        return self._requests[-1] if self._requests else None

    async def launch_campaign(self, request: LaunchRequest) -> None:
        logger.info("Mock: launching campaign", extra={"campaign_id": request.campaign_id})
        self._requests.append(request)
        if self._should_fail:
            raise LaunchError(self._fail_error, status_code=self._fail_status)
