"""SQL-backed suppression list."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from event_match.models import EmailSuppression, SessionLocal
from event_match.privacy.consent import EmailHasher, SuppressionLookupError

logger = logging.getLogger("event_match.storage")


class SqlSuppressionStore:
    """Keyed lookup over the email_suppression table.

    Only hashes are stored. Database errors surface as SuppressionLookupError.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    def exists(self, email_hash: str) -> bool:
        try:
            with self.session_factory() as db:
                row = db.execute(
                    select(EmailSuppression.id).where(EmailSuppression.email_hash == email_hash)
                ).first()
        except SQLAlchemyError as e:
            raise SuppressionLookupError(email_hash, f"Database error: {e}") from e
        return row is not None

    def add(self, email_hash: str, reason: str = "") -> bool:
        """Insert a suppression record. Returns False if one already exists."""
        try:
            with self.session_factory() as db:
                db.add(EmailSuppression(email_hash=email_hash, reason=reason))
                db.commit()
        except IntegrityError:
            # unique email_hash: already suppressed, possibly by a concurrent writer
            logger.debug("Hash %s already suppressed", email_hash[:12])
            return False
        except SQLAlchemyError as e:
            raise SuppressionLookupError(email_hash, f"Database error: {e}") from e

        logger.info("Suppressed hash %s (%s)", email_hash[:12], reason or "no reason given")
        return True


def record_opt_out(email: str, hasher: EmailHasher, store: SqlSuppressionStore, reason: str = "opt-out") -> str:
    """Add an address to the suppression list by hash and return the hash."""
    email_hash = hasher.hash(email)
    store.add(email_hash, reason=reason)
    return email_hash
