"""
Launch service interface definition.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from app.campaigns.enums import InterviewMode, Strictness


class LaunchRequest(BaseModel):
    """Confirmed settings sent when a campaign goes live."""

    campaign_id: str = Field(..., min_length=1)
    agent_id: str = Field(..., min_length=1)
    voice_id: str = Field(..., min_length=1)
    system_prompt: str = Field(..., min_length=1)
    strictness: Strictness = Strictness.BALANCED
    mode: InterviewMode = InterviewMode.TECHNICAL

    model_config = {"frozen": True}


class LaunchService(ABC):
    """Starts campaign execution.

    Implementations raise ``LaunchError`` when execution could not be started.
    A successful return means the campaign is now Active on the server.
    """

    @abstractmethod
    async def launch_campaign(self, request: LaunchRequest) -> None:
        """Launch the campaign described by ``request``."""
        ...

    async def aclose(self) -> None:
        return None
