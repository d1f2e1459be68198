"""
Blueprint generator interface definition.
"""

from abc import ABC, abstractmethod

from app.blueprint.models import Blueprint, BlueprintProvider, BlueprintRequest


class BlueprintGenerator(ABC):
    """Turns finalized wizard data into a system prompt and duration estimate.

    Implementations raise ``BlueprintGenerationError`` on any failure. They do
    not enforce a deadline themselves; callers wrap the call in a timeout.
    """

    @property
    @abstractmethod
    def provider(self) -> BlueprintProvider:
        """Backend identifier, used in logs."""
        ...

    @abstractmethod
    async def generate_blueprint(self, request: BlueprintRequest) -> Blueprint:
        """Generate a blueprint for ``request``."""
        ...

    async def aclose(self) -> None:
        return None
