"""ORM models for the suppression list and candidate pools."""

from .base import Base, SessionLocal, engine, make_engine, make_session_factory
from .email_suppression import EmailSuppression
from .seeded_profile import SeededProfileRecord

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "make_engine",
    "make_session_factory",
    "EmailSuppression",
    "SeededProfileRecord",
]
