"""Invite delivery gated on the suppression list."""

import logging
from enum import Enum
from typing import Optional, Sequence

from event_match.config import EmailConfig
from event_match.notifications.email_sender import send_email
from event_match.notifications.templates import render_invite_email, render_teaser_email
from event_match.privacy.consent import EmailHasher, SuppressionGate, SuppressionStatus
from event_match.profile.models import SafeTeaserView

logger = logging.getLogger("event_match.notifications")


class InviteOutcome(str, Enum):
    SENT = "sent"
    SUPPRESSED = "suppressed"
    LOOKUP_FAILED = "lookup_failed"
    SEND_FAILED = "send_failed"


def send_invite(
    email: str,
    event_name: str,
    invite_url: str,
    gate: SuppressionGate,
    hasher: EmailHasher,
    config: EmailConfig,
    teasers: Optional[Sequence[tuple[SafeTeaserView, int]]] = None,
) -> InviteOutcome:
    """Send an event invite unless the address is suppressed.

    An unanswered suppression lookup blocks the send.
    """
    email_hash = hasher.hash(email)
    status = gate.check(email_hash)

    if status is SuppressionStatus.SUPPRESSED:
        logger.info("Skipping invite for suppressed hash %s", email_hash[:12])
        return InviteOutcome.SUPPRESSED
    if status is SuppressionStatus.LOOKUP_FAILED:
        logger.warning("Skipping invite for hash %s: suppression status unknown", email_hash[:12])
        return InviteOutcome.LOOKUP_FAILED

    if teasers:
        subject, html = render_teaser_email(event_name, teasers, invite_url)
    else:
        subject, html = render_invite_email(event_name, invite_url)

    if not send_email(config, email, subject, html):
        return InviteOutcome.SEND_FAILED
    return InviteOutcome.SENT
