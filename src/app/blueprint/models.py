"""
Data models for blueprint generation.
"""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from app.campaigns.enums import InterviewMode, Strictness
from app.shared.logging import correlation_id_var


class BlueprintProvider(str, Enum):
    """Supported blueprint generator backends."""

    TEMPLATE = "template"
    OPENAI = "openai"
    HTTP = "http"


class MessageRole(str, Enum):
    """Message roles in a chat completion."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in a chat conversation."""

    role: MessageRole
    content: str

    model_config = {"frozen": True}


class BlueprintRequest(BaseModel):
    """Finalized wizard data handed to the generator."""

    job_role: str
    description: str
    candidate_count: int = Field(default=0, ge=0)
    persona: str
    strictness: Strictness = Strictness.BALANCED
    mode: InterviewMode = InterviewMode.TECHNICAL
    duration: int = Field(default=15, ge=1, le=120)
    company: str = ""
    industry: str = ""
    # Inherits the id bound to the current request, if any.
    correlation_id: str = Field(default_factory=lambda: correlation_id_var.get() or str(uuid4()))

    model_config = {"frozen": True}


class Blueprint(BaseModel):
    """Launch-ready interview configuration.

    ``degraded`` marks a blueprint built from the raw script after the
    generator failed.
    """

    system_prompt: str
    estimated_duration: int = Field(..., ge=1, description="Minutes")
    degraded: bool = False

    model_config = {"frozen": True}
