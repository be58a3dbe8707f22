"""Teaser views of profiles for pre-activation preview."""

from event_match.matching.experience import classify_experience
from event_match.profile.models import ProfileAttributes, SafeTeaserView

DEFAULT_PERSONA = "Professional"
DEFAULT_INDUSTRY = "Technology"


def anonymize_profile(profile: ProfileAttributes) -> SafeTeaserView:
    """Project a profile onto the fields that are safe to show before consent."""
    persona = profile.role or (profile.persona.primary if profile.persona else None) or DEFAULT_PERSONA
    industry = profile.industry or (profile.industries[0] if profile.industries else None) or DEFAULT_INDUSTRY
    objectives = profile.goals.objectives if profile.goals else None

    return SafeTeaserView(
        persona=persona,
        industry=industry,
        experience_level=classify_experience(profile.title, profile.role).value,
        interests=list(profile.interests or profile.skills or []),
        seeking=list(profile.seeking or objectives or []),
    )
