"""
Custom exceptions for the application.

Collaborator adapters translate transport failures into these types so the
wizard controller only ever has to handle ``AppError`` subclasses.
"""

from typing import Any


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Validation error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR")
        self.details = details or {}


# Campaign errors
class CampaignNotFoundError(AppError):
    """Campaign not found."""

    def __init__(self, campaign_id: Any) -> None:
        super().__init__(
            f"Campaign with ID {campaign_id} not found",
            "CAMPAIGN_NOT_FOUND",
        )
        self.campaign_id = campaign_id


class InvalidStatusTransitionError(AppError):
    """Invalid campaign status transition."""

    def __init__(self, current_status: Any, target_status: Any) -> None:
        super().__init__(
            f"Cannot transition from '{current_status.value}' to '{target_status.value}'",
            "INVALID_STATUS_TRANSITION",
        )
        self.current_status = current_status
        self.target_status = target_status


class CampaignNotEditableError(AppError):
    """Campaign has left InDesign; its name and config are frozen."""

    def __init__(self, campaign_id: Any) -> None:
        super().__init__(
            f"Campaign with ID {campaign_id} is active and can no longer be edited",
            "CAMPAIGN_NOT_EDITABLE",
        )
        self.campaign_id = campaign_id


# Collaborator errors
class DraftStoreError(AppError):
    """Draft store call failed (network, server or decoding error)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str = "DRAFT_STORE_ERROR",
    ) -> None:
        super().__init__(message, code)
        self.status_code = status_code


class BlueprintGenerationError(AppError):
    """Blueprint generator failed or returned an unusable answer."""

    def __init__(self, message: str, code: str = "BLUEPRINT_GENERATION_FAILED") -> None:
        super().__init__(message, code)


class BlueprintTimeoutError(BlueprintGenerationError):
    """Blueprint generator did not answer in time."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(
            f"Blueprint generation timed out after {timeout_seconds:g}s",
            "BLUEPRINT_TIMEOUT",
        )
        self.timeout_seconds = timeout_seconds


class LaunchError(AppError):
    """Launch collaborator failed to start campaign execution."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, "LAUNCH_FAILED")
        self.status_code = status_code
