"""Invite tokens for teaser links."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from event_match.config import DEFAULT_TOKEN_TTL_MINUTES

TOKEN_LENGTH = 32


def generate_invite_token() -> str:
    """Random URL-safe token of TOKEN_LENGTH characters."""
    return secrets.token_urlsafe(TOKEN_LENGTH)[:TOKEN_LENGTH]


def token_expiry(ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=ttl_minutes)
