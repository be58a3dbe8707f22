"""Profile, teaser and match result data models."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

ProfileId = Union[str, int]


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_str_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, str)]


@dataclass(frozen=True)
class Goals:
    objectives: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Persona:
    primary: Optional[str] = None


@dataclass(frozen=True)
class ProfileAttributes:
    """Attributes of a profile as supplied by the profile store.

    Every field is optional. The scoring rules read industry, role, goals,
    skills and location; anonymization additionally reads title, interests
    and persona.
    """

    industry: Optional[str] = None
    industries: list[str] = field(default_factory=list)
    role: Optional[str] = None
    goals: Optional[Goals] = None
    seeking: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    city_region: Optional[str] = None
    title: Optional[str] = None
    interests: list[str] = field(default_factory=list)
    persona: Optional[Persona] = None

    @property
    def objectives(self) -> list[str]:
        """Goal objectives, falling back to the seeking list."""
        if self.goals and self.goals.objectives:
            return self.goals.objectives
        return self.seeking

    @classmethod
    def from_dict(cls, data: Any) -> "ProfileAttributes":
        """Build attributes from a loosely-typed record.

        Malformed values degrade to the field default instead of raising.
        """
        if not isinstance(data, dict):
            return cls()

        goals_raw = data.get("goals")
        goals = None
        if isinstance(goals_raw, dict):
            goals = Goals(objectives=_as_str_list(goals_raw.get("objectives")))

        persona_raw = data.get("persona")
        persona = None
        if isinstance(persona_raw, dict):
            persona = Persona(primary=_as_str(persona_raw.get("primary")))

        return cls(
            industry=_as_str(data.get("industry")),
            industries=_as_str_list(data.get("industries")),
            role=_as_str(data.get("role")),
            goals=goals,
            seeking=_as_str_list(data.get("seeking")),
            skills=_as_str_list(data.get("skills")),
            city_region=_as_str(data.get("city_region", data.get("cityRegion"))),
            title=_as_str(data.get("title")),
            interests=_as_str_list(data.get("interests")),
            persona=persona,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary, omitting absent fields."""
        d: dict[str, Any] = {}
        for key in ("industry", "role", "city_region", "title"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        for key in ("industries", "seeking", "skills", "interests"):
            value = getattr(self, key)
            if value:
                d[key] = list(value)
        if self.goals is not None:
            d["goals"] = {"objectives": list(self.goals.objectives)}
        if self.persona is not None:
            d["persona"] = {"primary": self.persona.primary}
        return d


@dataclass(frozen=True)
class SeededProfile:
    """A profile with stable identity, as found in a candidate pool."""

    id: ProfileId
    attributes: ProfileAttributes = field(default_factory=ProfileAttributes)

    @classmethod
    def from_dict(cls, data: dict) -> "SeededProfile":
        return cls(
            id=data["id"],
            attributes=ProfileAttributes.from_dict(data.get("attributes")),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "attributes": self.attributes.to_dict()}


@dataclass(frozen=True)
class SafeTeaserView:
    """Privacy-reduced projection of a profile shown before activation."""

    persona: str
    industry: str
    experience_level: str
    interests: list[str] = field(default_factory=list)
    seeking: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "persona": self.persona,
            "industry": self.industry,
            "experience_level": self.experience_level,
            "interests": list(self.interests),
            "seeking": list(self.seeking),
        }


@dataclass(frozen=True)
class MatchResult:
    candidate: SeededProfile
    score: int

    def to_dict(self) -> dict:
        return {"candidate": self.candidate.to_dict(), "score": self.score}
