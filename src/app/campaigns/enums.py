"""
Enumerations shared by the campaign store and the creation wizard.
"""

from enum import Enum

class CampaignStatus(str, Enum):
    """Campaign lifecycle status.

    Stopped/archived states exist in the dashboard but are not driven from here.
    """

    IN_DESIGN = "InDesign"
    ACTIVE = "Active"

class CampaignType(str, Enum):
    """Interview channel of a campaign."""

    AUDIO = "audio"
    VIDEO = "video"

class InterviewMode(str, Enum):
    """Interview flow selected in stage 3."""

    TECHNICAL = "technical"
    HR = "hr"
    MIXED = "mixed"

class Strictness(str, Enum):
    """How hard the agent presses on candidate answers."""

    FRIENDLY = "friendly"
    BALANCED = "balanced"
    STRICT = "strict"


class CandidateStatus(str, Enum):
    """Interview progress of one candidate, as listed across campaigns.

    Candidates carry no status until the dialer writes one back; until then
    it follows the campaign: Draft while InDesign, Pending once Active.
    """

    DRAFT = "Draft"
    PENDING = "Pending"
    COMPLETED = "Completed"


# InDesign -> Active happens exactly once; Active is terminal for the wizard.
VALID_STATUS_TRANSITIONS: dict[CampaignStatus, set[CampaignStatus]] = {
    CampaignStatus.IN_DESIGN: {CampaignStatus.ACTIVE},
    CampaignStatus.ACTIVE: set(),
}
