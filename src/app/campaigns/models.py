"""
SQLAlchemy models for campaigns.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, Enum as SQLEnum, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.campaigns.enums import (
    VALID_STATUS_TRANSITIONS,
    CampaignStatus,
    CampaignType,
)
from app.shared.database import Base


def _enum_values(enum_cls: type) -> list[str]:
    return [member.value for member in enum_cls]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Campaign(Base):
    """Campaign row; wizard fields live in the ``config`` JSON document."""

    __tablename__ = "campaigns"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    type: Mapped[CampaignType] = mapped_column(
        SQLEnum(
            CampaignType,
            name="campaign_type",
            values_callable=_enum_values,
        ),
        nullable=False,
        default=CampaignType.AUDIO,
    )
    status: Mapped[CampaignStatus] = mapped_column(
        SQLEnum(
            CampaignStatus,
            name="campaign_status",
            values_callable=_enum_values,
        ),
        nullable=False,
        default=CampaignStatus.IN_DESIGN,
        index=True,
    )
    config: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )

    # Set client side: list order (and so duplicate-name resolution) needs
    # distinct values for rows created in one transaction.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def can_transition_to(self, new_status: CampaignStatus) -> bool:
        """Check if transition to new status is valid.

        Args:
            new_status: Target status to transition to.

        Returns:
            True if transition is valid, False otherwise.
        """
        return new_status in VALID_STATUS_TRANSITIONS.get(self.status, set())

    def __repr__(self) -> str:
        return f"<Campaign(id={self.id}, name='{self.name}', status={self.status.value})>"
