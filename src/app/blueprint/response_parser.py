"""
Parser for blueprint text returned by a chat model.
"""

import re
from typing import NamedTuple

from app.shared.exceptions import BlueprintGenerationError


class ParsedBlueprint(NamedTuple):
    """System prompt text and the model's duration estimate (if any)."""

    system_prompt: str
    estimated_duration: int | None


DURATION_PATTERN = re.compile(
    r"^\s*ESTIMATED_DURATION:\s*(\d+)\s*(?:min(?:ute)?s?)?\s*$",
    re.MULTILINE | re.IGNORECASE,
)

# Models sometimes wrap the whole answer in a fenced block despite instructions.
FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*\n(.*)\n```\s*$", re.DOTALL)


def parse_blueprint_response(raw_response: str) -> ParsedBlueprint:
    """Split a model answer into the prompt text and duration estimate.

    Args:
        raw_response: Raw response text from the model.

    Returns:
        ParsedBlueprint with the cleaned prompt; the duration is the last
        ESTIMATED_DURATION line, or None when the model gave none.

    Raises:
        BlueprintGenerationError: If no prompt text remains.
    """
    matches = DURATION_PATTERN.findall(raw_response)
    duration: int | None = None
    if matches:
        value = int(matches[-1])
        duration = value if value > 0 else None

    content = DURATION_PATTERN.sub("", raw_response).strip()
    fenced = FENCE_PATTERN.match(content)
    if fenced:
        content = fenced.group(1).strip()

    if not content:
        raise BlueprintGenerationError(
            "Model returned an empty blueprint",
            code="BLUEPRINT_EMPTY",
        )

    return ParsedBlueprint(system_prompt=content, estimated_duration=duration)
