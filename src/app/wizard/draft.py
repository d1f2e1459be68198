"""
In-memory wizard draft.

``WizardDraft`` is the single authoritative copy of everything the operator has
entered. It serializes to the camelCase ``config`` document the draft store
keeps (``currentStep``, ``jobTitle``, ...); the campaign ``name`` lives on the
campaign record itself and is never part of the config.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from app.campaigns.enums import InterviewMode, Strictness
from app.shared.logging import get_logger
from app.wizard.catalog import DEFAULT_DURATION, DEFAULT_PERSONA, DEFAULT_VOICE

logger = get_logger(__name__)

FIRST_STAGE = 1
LAST_STAGE = 5


class Candidate(BaseModel):
    """A person to be interviewed. Duplicates within a campaign are allowed."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str | None = None

    @field_validator("name", "phone")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def empty_email_is_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class WizardDraft(BaseModel):
    """All wizard-collected fields plus the campaign name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    name: str = ""
    current_step: int = Field(default=FIRST_STAGE, ge=FIRST_STAGE, le=LAST_STAGE)
    source: list[Candidate] = Field(default_factory=list)
    mode: InterviewMode | None = InterviewMode.TECHNICAL
    duration: int = Field(default=DEFAULT_DURATION, ge=1, le=120)
    agent: str | None = DEFAULT_PERSONA
    voice: str | None = DEFAULT_VOICE
    lang: str = "en"
    strict: Strictness = Strictness.BALANCED
    script: str = ""
    company: str = ""
    industry: str = ""
    job_title: str = ""

    def to_config(self, current_step: int | None = None) -> dict[str, Any]:
        """Serialize to the stored config document.

        Args:
            current_step: Resumption pointer to record instead of ``current_step``.

        Returns:
            JSON-ready mapping with camelCase keys.
        """
        config = self.model_dump(mode="json", by_alias=True, exclude={"name"})
        if current_step is not None:
            config["currentStep"] = current_step
        return config

    def merged_with(self, config: Mapping[str, Any] | None) -> "WizardDraft":
        """Return a copy with stored config values laid over this draft.

        The draft's ``name`` is always kept. Stored values that no longer
        validate are dropped so an old or hand-edited record cannot block a
        resume.
        """
        data = self.to_config()
        data.update(_usable_config(config or {}))
        data["name"] = self.name
        return WizardDraft.model_validate(data)

    @classmethod
    def from_campaign(cls, name: str, config: Mapping[str, Any] | None) -> "WizardDraft":
        """Build a draft from a stored campaign's name and config."""
        return cls(name=name).merged_with(config)


_CONFIG_KEYS = {to_camel(name) for name in WizardDraft.model_fields if name != "name"}


def _usable_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Keep the known config keys whose values validate."""
    data = {k: v for k, v in config.items() if k in _CONFIG_KEYS}
    dropped: list[str] = []

    source = data.get("source")
    if isinstance(source, list):
        kept = [item for item in source if _is_candidate(item)]
        if len(kept) != len(source):
            dropped.append("source[]")
        data["source"] = kept

    while data:
        try:
            WizardDraft.model_validate(data)
            break
        except ValidationError as exc:
            bad = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
            bad &= data.keys()
            if not bad:
                # Nothing attributable to a single key; fall back to defaults.
                dropped.extend(data)
                data = {}
                break
            for key in bad:
                dropped.append(key)
                data.pop(key)

    if dropped:
        logger.warning(
            "Ignoring invalid stored config fields",
            extra={"fields": sorted(dropped)},
        )
    return data


def _is_candidate(item: Any) -> bool:
    try:
        Candidate.model_validate(item)
    except ValidationError:
        return False
    return True
