"""SQLAlchemy engine and session setup."""

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from event_match.config import DEFAULT_DATABASE_URL, normalize_database_url


def make_engine(url: str) -> Engine:
    return create_engine(normalize_database_url(url), pool_pre_ping=True, echo=False)


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


DATABASE_URL = normalize_database_url(os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL))

engine = make_engine(DATABASE_URL)

SessionLocal = make_session_factory(engine)


class Base(DeclarativeBase):
    pass
