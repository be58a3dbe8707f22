"""Invite pipeline: rank a profile's pool, anonymize the matches, send a gated invite."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from event_match.config import AppConfig
from event_match.invites.tokens import generate_invite_token, token_expiry
from event_match.matching.matcher import generate_matches
from event_match.notifications.invites import InviteOutcome, send_invite
from event_match.privacy.anonymizer import anonymize_profile
from event_match.privacy.consent import EmailHasher, SuppressionGate
from event_match.storage.profile_store import SqlProfileStore

logger = logging.getLogger("event_match.pipeline")


@dataclass
class InviteRun:
    outcome: InviteOutcome
    invite_url: str
    token: str
    expires_at: datetime
    matches: int

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "invite_url": self.invite_url,
            "token": self.token,
            "expires_at": self.expires_at.isoformat(),
            "matches": self.matches,
        }


def build_invite_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/invite/{token}"


def run_invite(
    email: str,
    profile_id,
    event_name: str,
    config: AppConfig,
    profile_store: SqlProfileStore,
    gate: SuppressionGate,
    hasher: EmailHasher,
    event_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> InviteRun:
    """Send one invite previewing the top anonymized matches for a seeded profile.

    Raises ValueError if the profile is not in the event's pool.
    """
    pool = profile_store.get_pool(event_id)
    profile = next((p for p in pool if str(p.id) == str(profile_id)), None)
    if profile is None:
        raise ValueError(f"Profile {profile_id} not found (event={event_id or 'all'})")

    matches = generate_matches(
        profile,
        pool,
        limit=config.matching.default_limit if limit is None else limit,
        max_workers=config.matching.max_workers,
        min_score=config.matching.min_score,
    )
    teasers = [(anonymize_profile(m.candidate.attributes), m.score) for m in matches]

    token = generate_invite_token()
    expires_at = token_expiry(config.invites.token_ttl_minutes)
    invite_url = build_invite_url(config.invites.base_url, token)

    outcome = send_invite(email, event_name, invite_url, gate, hasher, config.email, teasers=teasers)
    logger.info(
        "Invite for profile %s: %s (%d teasers, link expires %s)",
        profile.id, outcome.value, len(teasers), expires_at.isoformat(),
    )

    return InviteRun(
        outcome=outcome,
        invite_url=invite_url,
        token=token,
        expires_at=expires_at,
        matches=len(teasers),
    )
