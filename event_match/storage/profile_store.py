"""SQL-backed candidate pool."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from event_match.models import SeededProfileRecord, SessionLocal
from event_match.profile.models import SeededProfile

logger = logging.getLogger("event_match.storage")


class SqlProfileStore:
    """Reads seeded profiles from the seeded_profiles table.

    Profile ids are stored as strings.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    def get(self, profile_id) -> Optional[SeededProfile]:
        with self.session_factory() as db:
            row = db.get(SeededProfileRecord, str(profile_id))
            return row.to_seeded_profile() if row else None

    def get_pool(self, event_id: Optional[str] = None) -> list[SeededProfile]:
        """All profiles, or only those seeded for one event, oldest first."""
        stmt = select(SeededProfileRecord).order_by(
            SeededProfileRecord.created_at, SeededProfileRecord.id
        )
        if event_id is not None:
            stmt = stmt.where(SeededProfileRecord.event_id == event_id)

        with self.session_factory() as db:
            rows = db.execute(stmt).scalars().all()
            pool = [row.to_seeded_profile() for row in rows]

        logger.info("Loaded %d profiles (event=%s)", len(pool), event_id or "all")
        return pool

    def add(self, profile: SeededProfile, event_id: Optional[str] = None) -> None:
        """Insert or replace a seeded profile."""
        with self.session_factory() as db:
            db.merge(SeededProfileRecord(
                id=str(profile.id),
                event_id=event_id,
                attributes=profile.attributes.to_dict(),
            ))
            db.commit()
