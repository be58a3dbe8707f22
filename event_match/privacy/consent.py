"""Email hashing and suppression-list checks.

Addresses are never stored or compared in the clear: an email is lower-cased,
salted and hashed with SHA-256, and only the hex digest is used as the key
into the suppression store.
"""

import hashlib
import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger("event_match.privacy")

# Changing this invalidates every suppression record hashed with the default.
DEFAULT_EMAIL_SALT = "default-salt"


class SuppressionLookupError(Exception):
    """Raised when the suppression store cannot answer a lookup."""

    def __init__(self, email_hash: str, message: str = "Suppression lookup failed"):
        self.email_hash = email_hash
        super().__init__(f"{message} for hash {email_hash[:12]}")


class SuppressionStatus(str, Enum):
    NOT_SUPPRESSED = "not_suppressed"
    SUPPRESSED = "suppressed"
    LOOKUP_FAILED = "lookup_failed"


class SuppressionLookup(Protocol):
    def exists(self, email_hash: str) -> bool: ...


def hash_email(email: str, salt: str = DEFAULT_EMAIL_SALT) -> str:
    """SHA-256 hex digest of the lower-cased email followed by the salt."""
    return hashlib.sha256((email.lower() + salt).encode("utf-8")).hexdigest()


class EmailHasher:
    """Hashes emails with a salt fixed at construction time."""

    def __init__(self, salt: str = DEFAULT_EMAIL_SALT):
        self.salt = salt

    def hash(self, email: str) -> str:
        return hash_email(email, self.salt)


class SuppressionGate:
    """Answers whether a hashed address is on the suppression list."""

    def __init__(self, store: SuppressionLookup):
        self.store = store

    def is_suppressed(self, email_hash: str) -> bool:
        """Return True iff the store holds a record for this hash.

        Performs exactly one lookup. Store failures are raised as
        SuppressionLookupError.
        """
        try:
            return bool(self.store.exists(email_hash))
        except SuppressionLookupError:
            raise
        except Exception as e:
            raise SuppressionLookupError(email_hash, f"Suppression store error: {e}") from e

    def check(self, email_hash: str) -> SuppressionStatus:
        """Classify a hash as suppressed, not suppressed, or unknown."""
        try:
            suppressed = self.is_suppressed(email_hash)
        except SuppressionLookupError as e:
            logger.warning("%s", e)
            return SuppressionStatus.LOOKUP_FAILED
        return SuppressionStatus.SUPPRESSED if suppressed else SuppressionStatus.NOT_SUPPRESSED

    def may_contact(self, email_hash: str, fail_closed: bool = True) -> bool:
        """Whether an address may be messaged.

        An unknown status counts as suppressed unless ``fail_closed`` is False.
        """
        status = self.check(email_hash)
        if status is SuppressionStatus.LOOKUP_FAILED:
            return not fail_closed
        return status is SuppressionStatus.NOT_SUPPRESSED
