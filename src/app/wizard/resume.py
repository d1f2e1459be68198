"""
Duplicate-name lookup and resume-on-load selection.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from app.drafts.interface import StoredCampaign
from app.wizard.draft import FIRST_STAGE, LAST_STAGE

# Stage entered when a draft has no usable resumption pointer. Stage 1 was
# already accepted when the record was created.
DEFAULT_RESUME_STAGE = 2


def normalize_name(name: str) -> str:
    return name.strip().casefold()


def find_campaign_by_name(
    campaigns: Sequence[StoredCampaign],
    name: str,
) -> StoredCampaign | None:
    """Return the first campaign whose name matches ``name``.

    Names match when they are equal after trimming surrounding whitespace and
    ignoring case. Later matches are ignored without warning.
    """
    wanted = normalize_name(name)
    if not wanted:
        return None
    for campaign in campaigns:
        if normalize_name(campaign.name) == wanted:
            return campaign
    return None


def pick_campaign_on_load(
    campaigns: Sequence[StoredCampaign],
    selected_id: str | None,
) -> StoredCampaign | None:
    """Previously selected campaign if it still exists, else the first one."""
    if selected_id is not None:
        for campaign in campaigns:
            if campaign.id == selected_id:
                return campaign
    return campaigns[0] if campaigns else None


def resume_stage(config: Mapping[str, Any] | None) -> int:
    """Stage to enter for a stored config (``currentStep`` or the default)."""
    step = (config or {}).get("currentStep")
    if isinstance(step, bool) or not isinstance(step, int):
        return DEFAULT_RESUME_STAGE
    if FIRST_STAGE <= step <= LAST_STAGE:
        return step
    return DEFAULT_RESUME_STAGE
