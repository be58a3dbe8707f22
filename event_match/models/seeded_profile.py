"""Seeded profile model: candidate pool members with JSON attributes."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from event_match.profile.models import ProfileAttributes, SeededProfile

from .base import Base


class SeededProfileRecord(Base):
    __tablename__ = "seeded_profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    event_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    attributes: Mapped[dict] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    def to_seeded_profile(self) -> SeededProfile:
        """Convert DB row to the SeededProfile dataclass."""
        return SeededProfile(
            id=self.id,
            attributes=ProfileAttributes.from_dict(self.attributes or {}),
        )
