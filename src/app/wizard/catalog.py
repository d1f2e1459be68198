"""
Selectable personas, voices, durations and interview modes.

Ids are what the wizard stores in ``config.agent`` / ``config.voice``.
"""

from dataclasses import dataclass

from app.campaigns.enums import InterviewMode, Strictness


@dataclass(frozen=True)
class Persona:
    id: str
    display_name: str
    description: str


@dataclass(frozen=True)
class Voice:
    id: str
    display_name: str
    languages: str


PERSONAS: dict[str, Persona] = {
    "aanya": Persona(
        id="aanya",
        display_name="Aanya - HR Pro",
        description="Polite & structured. Best for verification & screening.",
    ),
    "rohan": Persona(
        id="rohan",
        display_name="Rohan - Tech Lead",
        description="Direct & technical. Drills down into logic and coding concepts.",
    ),
    "kavya": Persona(
        id="kavya",
        display_name="Kavya - Casual",
        description="Warm, relaxed & conversational.",
    ),
}

VOICES: dict[str, Voice] = {
    "raju": Voice(id="raju", display_name="Raju", languages="Hindi + English"),
    "sarah": Voice(id="sarah", display_name="Sarah", languages="English US"),
}

# Minutes -> label shown on the duration cards
DURATIONS: dict[int, str] = {
    15: "Quick Screen",
    20: "Standard",
    25: "Deep Dive",
    30: "Full Test",
}

MODE_DESCRIPTIONS: dict[InterviewMode, str] = {
    InterviewMode.TECHNICAL: (
        "Technical round (coding & system design): drill down into logic, "
        "syntax errors and code optimization."
    ),
    InterviewMode.HR: (
        "HR round (culture & soft skills): verify background, career gaps "
        "and company culture fit."
    ),
    InterviewMode.MIXED: (
        "Mixed round (50% tech + 50% HR): switch dynamically between coding "
        "questions and behavioral traits."
    ),
}

STRICTNESS_GUIDANCE: dict[Strictness, str] = {
    Strictness.FRIENDLY: "Keep the tone encouraging and accept partial answers.",
    Strictness.BALANCED: "Ask one follow-up when an answer is vague, then move on.",
    Strictness.STRICT: "Challenge every claim and ask for concrete examples before moving on.",
}

DEFAULT_PERSONA = "aanya"
DEFAULT_VOICE = "raju"
DEFAULT_DURATION = 15
