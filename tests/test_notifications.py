"""Tests for invite tokens, email templates and gated invite delivery."""

from datetime import datetime, timedelta, timezone

import pytest

from event_match.config import EmailConfig
from event_match.invites.tokens import generate_invite_token, token_expiry
from event_match.notifications import invites
from event_match.notifications.email_sender import send_email
from event_match.notifications.invites import InviteOutcome, send_invite
from event_match.notifications.templates import (
    render_invite_email,
    render_opt_out_email,
    render_teaser_email,
)
from event_match.privacy.consent import EmailHasher, SuppressionGate
from event_match.profile.models import SafeTeaserView


class FakeStore:
    def __init__(self, hashes=(), error=None):
        self.hashes = set(hashes)
        self.error = error

    def exists(self, email_hash):
        if self.error:
            raise self.error
        return email_hash in self.hashes


@pytest.fixture
def sent(monkeypatch):
    """Capture outgoing emails instead of talking to SMTP."""
    outbox = []

    def fake_send(config, recipient, subject, html):
        outbox.append((recipient, subject, html))
        return True

    monkeypatch.setattr(invites, "send_email", fake_send)
    return outbox


class TestInviteTokens:
    def test_token_length_and_uniqueness(self):
        tokens = {generate_invite_token() for _ in range(50)}
        assert len(tokens) == 50
        assert all(len(t) == 32 for t in tokens)

    def test_expiry(self):
        now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        expires = token_expiry(30, now=now)
        assert expires == now + timedelta(minutes=30)


class TestTemplates:
    def test_invite_email(self):
        subject, html = render_invite_email("Founders Summit", "https://x.test/t/abc")
        assert subject == "Your top matches from Founders Summit"
        assert "https://x.test/t/abc" in html
        assert "anonymized" in html

    def test_values_are_escaped(self):
        _, html = render_invite_email("<script>", "https://x.test/?a=1&b=2")
        assert "<script>" not in html.split("<style>")[1]
        assert "&lt;script&gt;" in html
        assert "a=1&amp;b=2" in html

    def test_teaser_email(self):
        teaser = SafeTeaserView(
            persona="Investor", industry="Fintech", experience_level="Senior",
            interests=["payments"], seeking=["Invest capital"],
        )
        subject, html = render_teaser_email("Mixer", [(teaser, 85)], "https://x.test")
        assert "Mixer" in subject
        assert "85% match" in html
        assert "score-high" in html
        assert "Invest capital" in html

    def test_opt_out_email(self):
        subject, html = render_opt_out_email("Sam")
        assert "opted out" in subject
        assert "suppression list" in html
        assert "Hi Sam," in html


class TestSendInvite:
    def test_sends_when_not_suppressed(self, sent):
        gate = SuppressionGate(FakeStore())
        outcome = send_invite("a@b.com", "Mixer", "https://x.test", gate, EmailHasher(), EmailConfig())
        assert outcome is InviteOutcome.SENT
        assert sent[0][0] == "a@b.com"

    def test_skips_suppressed(self, sent):
        hasher = EmailHasher("s")
        gate = SuppressionGate(FakeStore([hasher.hash("a@b.com")]))
        outcome = send_invite("A@B.com", "Mixer", "https://x.test", gate, hasher, EmailConfig())
        assert outcome is InviteOutcome.SUPPRESSED
        assert sent == []

    def test_skips_on_lookup_failure(self, sent):
        gate = SuppressionGate(FakeStore(error=ConnectionError("down")))
        outcome = send_invite("a@b.com", "Mixer", "https://x.test", gate, EmailHasher(), EmailConfig())
        assert outcome is InviteOutcome.LOOKUP_FAILED
        assert sent == []

    def test_teaser_variant(self, sent):
        teaser = SafeTeaserView(persona="Founder", industry="AI", experience_level="Executive")
        gate = SuppressionGate(FakeStore())
        send_invite("a@b.com", "Mixer", "https://x.test", gate, EmailHasher(), EmailConfig(), teasers=[(teaser, 40)])
        assert "40% match" in sent[0][2]

    def test_send_failure(self, monkeypatch):
        monkeypatch.setattr(invites, "send_email", lambda *args: False)
        gate = SuppressionGate(FakeStore())
        outcome = send_invite("a@b.com", "Mixer", "https://x.test", gate, EmailHasher(), EmailConfig())
        assert outcome is InviteOutcome.SEND_FAILED


class TestSendEmail:
    def test_missing_credentials(self):
        assert send_email(EmailConfig(), "a@b.com", "Hi", "<p>Hi</p>") is False
