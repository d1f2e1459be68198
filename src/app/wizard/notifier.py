"""
Operator notifications.

The controller never renders anything; it hands short messages to an injected
Notifier and moves on. Nothing the notifier returns is used.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from app.shared.logging import get_logger

logger = get_logger(__name__)


class Severity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity


class Notifier(ABC):
    """Fire-and-forget message sink."""

    @abstractmethod
    def notify(self, message: str, severity: Severity) -> None:
        ...


_LEVELS = {
    Severity.SUCCESS: "info",
    Severity.INFO: "info",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}


class LoggingNotifier(Notifier):
    """Writes notifications to the application log."""

    def notify(self, message: str, severity: Severity) -> None:
        log = getattr(logger, _LEVELS[severity])
        log(message, extra={"severity": severity.value})


class RecordingNotifier(Notifier):
    """Keeps every notification in memory, for tests and scripted runs."""

    def __init__(self) -> None:
        self._notifications: list[Notification] = []

    def notify(self, message: str, severity: Severity) -> None:
        self._notifications.append(Notification(message=message, severity=severity))

    @property
    def notifications(self) -> list[Notification]:
        return self._notifications.copy()

    def messages(self, severity: Severity | None = None) -> list[str]:
        return [
            n.message
            for n in self._notifications
            if severity is None or n.severity == severity
        ]

    @property
    def last(self) -> Notification | None:
        return self._notifications[-1] if self._notifications else None

    def clear(self) -> None:
        self._notifications.clear()
