"""
Prompt templates for interview blueprints.

``build_interview_prompt`` renders a complete agent system prompt without any
model call; ``build_generation_messages`` asks a chat model to write one.
"""

from app.blueprint.models import BlueprintRequest, ChatMessage, MessageRole
from app.wizard.catalog import (
    DURATIONS,
    MODE_DESCRIPTIONS,
    PERSONAS,
    STRICTNESS_GUIDANCE,
)

INTERVIEW_SYSTEM_PROMPT_TEMPLATE = """You are {persona_name}, an AI interviewer calling candidates on behalf of {company}.
Persona: {persona_description}

ROLE BEING HIRED:
- Job title: {job_role}
- Company: {company}{industry_line}

INTERVIEW FORMAT:
- {mode_description}
- Planned length: {duration} minutes ({duration_label}).
- Candidates in this campaign: {candidate_count}

EVALUATION CONTEXT & REQUIREMENTS:
{description}

STYLE:
- {strictness_guidance}
- Introduce yourself and the company, confirm the candidate has time to talk, then start.
- Ask one question at a time and keep your turns short; this is a phone call.
- Stay on topic. Do not discuss salary negotiations, politics or religion.
- Close by thanking the candidate and explaining that the recruiting team will follow up."""

GENERATION_SYSTEM_PROMPT = """You design phone interview blueprints for a recruiting team.
Given a role and its requirements, write the complete system prompt that an AI voice interviewer will follow during the call.

The system prompt must:
1. Set the interviewer persona and greeting
2. Cover the requirements with concrete, role-specific questions in a sensible order
3. Match the requested interview mode and strictness
4. Fit the requested duration

RESPONSE FORMAT:
Respond with the system prompt text only. Do not wrap it in quotes or markdown.
On the last line, starting with "ESTIMATED_DURATION:", give your estimate of the interview length in whole minutes."""

GENERATION_USER_TEMPLATE = """Job title: {job_role}
Company: {company}
Industry: {industry}
Interview mode: {mode}
Strictness: {strictness}
Interviewer persona: {persona_name} ({persona_description})
Target duration: {duration} minutes
Candidates: {candidate_count}

Requirements:
{description}"""


def build_interview_prompt(request: BlueprintRequest) -> str:
    """Render the interviewer system prompt for ``request``.

    Args:
        request: Finalized wizard data.

    Returns:
        Formatted system prompt string.
    """
    persona_name, persona_description = _persona_text(request.persona)
    industry_line = f"\n- Industry: {request.industry}" if request.industry.strip() else ""

    return INTERVIEW_SYSTEM_PROMPT_TEMPLATE.format(
        persona_name=persona_name,
        persona_description=persona_description,
        company=request.company.strip() or "the hiring company",
        industry_line=industry_line,
        job_role=request.job_role,
        mode_description=MODE_DESCRIPTIONS[request.mode],
        duration=request.duration,
        duration_label=DURATIONS.get(request.duration, "Custom"),
        candidate_count=request.candidate_count,
        description=request.description.strip(),
        strictness_guidance=STRICTNESS_GUIDANCE[request.strictness],
    )


def build_generation_messages(request: BlueprintRequest) -> list[ChatMessage]:
    """Build the chat messages asking a model to write the blueprint."""
    persona_name, persona_description = _persona_text(request.persona)
    user = GENERATION_USER_TEMPLATE.format(
        job_role=request.job_role,
        company=request.company or "n/a",
        industry=request.industry or "n/a",
        mode=request.mode.value,
        strictness=request.strictness.value,
        persona_name=persona_name,
        persona_description=persona_description,
        duration=request.duration,
        candidate_count=request.candidate_count,
        description=request.description.strip(),
    )
    return [
        ChatMessage(role=MessageRole.SYSTEM, content=GENERATION_SYSTEM_PROMPT),
        ChatMessage(role=MessageRole.USER, content=user),
    ]


def _persona_text(persona_id: str) -> tuple[str, str]:
    persona = PERSONAS.get(persona_id)
    if persona is None:
        return persona_id, "Professional and courteous."
    return persona.display_name, persona.description
