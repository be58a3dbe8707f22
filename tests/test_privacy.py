"""Tests for experience classification, anonymization and email hashing."""

import hashlib

import pytest

from event_match.matching.experience import ExperienceLevel, classify_experience
from event_match.matching.scorer import score_profiles
from event_match.privacy.anonymizer import anonymize_profile
from event_match.privacy.consent import (
    DEFAULT_EMAIL_SALT,
    EmailHasher,
    SuppressionGate,
    SuppressionLookupError,
    SuppressionStatus,
    hash_email,
)
from event_match.profile.models import Goals, Persona, ProfileAttributes


class FakeStore:
    def __init__(self, hashes=(), error=None):
        self.hashes = set(hashes)
        self.error = error
        self.calls = 0

    def exists(self, email_hash: str) -> bool:
        self.calls += 1
        if self.error:
            raise self.error
        return email_hash in self.hashes


class TestClassifyExperience:
    @pytest.mark.parametrize("title, expected", [
        ("Senior Engineer", "Senior"),
        ("Head of Product", "Senior"),
        ("VP Sales", "Senior"),
        ("Junior Developer", "Junior"),
        ("Research Analyst", "Junior"),
        ("Product Manager", "Mid-level"),
        ("Co-Founder", "Executive"),
        ("CEO", "Executive"),
        ("Summer Intern", "Entry-level"),
        ("Designer", "Professional"),
    ])
    def test_keyword_groups(self, title, expected):
        assert classify_experience(title, "") == expected

    def test_priority_order(self):
        assert classify_experience("Senior Manager", "") == ExperienceLevel.SENIOR

    def test_missing_fields(self):
        assert classify_experience(None, None) == "Professional"
        assert classify_experience("", "") == "Professional"

    def test_role_alone_does_not_classify(self):
        assert classify_experience(None, "founder") == "Professional"


class TestAnonymizeProfile:
    def test_empty_profile_defaults(self):
        view = anonymize_profile(ProfileAttributes())
        assert view.persona == "Professional"
        assert view.industry == "Technology"
        assert view.experience_level == "Professional"
        assert view.interests == []
        assert view.seeking == []

    def test_preferred_fields(self):
        profile = ProfileAttributes(
            role="Investor",
            industry="Climate",
            title="Managing Director",
            interests=["energy"],
            skills=["finance"],
            seeking=["Find customers"],
            goals=Goals(objectives=["Invest capital"]),
        )
        view = anonymize_profile(profile)
        assert view.persona == "Investor"
        assert view.industry == "Climate"
        assert view.experience_level == "Senior"
        assert view.interests == ["energy"]
        assert view.seeking == ["Find customers"]

    def test_fallback_fields(self):
        profile = ProfileAttributes(
            persona=Persona(primary="Operator"),
            industries=["Biotech", "AI"],
            skills=["python"],
            goals=Goals(objectives=["Hire"]),
        )
        view = anonymize_profile(profile)
        assert view.persona == "Operator"
        assert view.industry == "Biotech"
        assert view.interests == ["python"]
        assert view.seeking == ["Hire"]

    def test_view_carries_no_identifying_fields(self):
        view = anonymize_profile(ProfileAttributes(title="CTO", city_region="SF"))
        assert set(view.to_dict()) == {"persona", "industry", "experience_level", "interests", "seeking"}

    def test_none_lists_yield_empty_view(self):
        profile = ProfileAttributes(
            interests=None, skills=None, seeking=None, industries=None, goals=Goals(objectives=None),
        )
        view = anonymize_profile(profile)
        assert view.industry == "Technology"
        assert view.interests == []
        assert view.seeking == []

    def test_none_lists_still_score(self):
        sparse = ProfileAttributes(interests=None, skills=None, seeking=None, industries=None)
        assert score_profiles(sparse, ProfileAttributes(skills=["python"], industries=["AI"])) == 0


class TestHashEmail:
    def test_deterministic(self):
        assert hash_email("a@b.com", "s") == hash_email("a@b.com", "s")

    def test_case_insensitive_email(self):
        assert hash_email("A@B.com", "s") == hash_email("a@b.com", "s")

    def test_case_sensitive_salt(self):
        assert hash_email("a@b.com", "salt") != hash_email("a@b.com", "SALT")

    def test_default_salt_literal(self):
        assert DEFAULT_EMAIL_SALT == "default-salt"
        assert EmailHasher().hash("user@example.com") == hash_email("USER@EXAMPLE.COM", "default-salt")

    def test_digest_format(self):
        expected = hashlib.sha256(b"user@example.comdefault-salt").hexdigest()
        assert hash_email("User@Example.com") == expected
        assert len(expected) == 64

    def test_hasher_uses_configured_salt(self):
        assert EmailHasher("pepper").hash("a@b.com") == hash_email("a@b.com", "pepper")


class TestSuppressionGate:
    def test_suppressed(self):
        h = hash_email("gone@example.com")
        gate = SuppressionGate(FakeStore([h]))
        assert gate.is_suppressed(h) is True
        assert gate.check(h) is SuppressionStatus.SUPPRESSED
        assert gate.may_contact(h) is False

    def test_not_suppressed(self):
        gate = SuppressionGate(FakeStore())
        h = hash_email("ok@example.com")
        assert gate.is_suppressed(h) is False
        assert gate.check(h) is SuppressionStatus.NOT_SUPPRESSED
        assert gate.may_contact(h) is True

    def test_one_lookup_per_call(self):
        store = FakeStore()
        gate = SuppressionGate(store)
        gate.is_suppressed("abc")
        gate.is_suppressed("abc")
        assert store.calls == 2

    def test_lookup_failure_propagates(self):
        gate = SuppressionGate(FakeStore(error=ConnectionError("store down")))
        with pytest.raises(SuppressionLookupError) as exc_info:
            gate.is_suppressed("abc")
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_lookup_failure_is_distinct_status(self):
        gate = SuppressionGate(FakeStore(error=TimeoutError()))
        assert gate.check("abc") is SuppressionStatus.LOOKUP_FAILED

    def test_fail_closed_by_default(self):
        gate = SuppressionGate(FakeStore(error=TimeoutError()))
        assert gate.may_contact("abc") is False
        assert gate.may_contact("abc", fail_closed=False) is True
