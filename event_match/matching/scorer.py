"""Rules-based compatibility scoring between two profiles."""

from dataclasses import dataclass, field
from typing import Optional

from event_match.profile.models import ProfileAttributes


MAX_SCORE = 100

# Scoring weights
WEIGHT_INDUSTRY_EXACT = 30
WEIGHT_INDUSTRY_OVERLAP = 15
WEIGHT_SAME_ROLE = 10
WEIGHT_OTHER_ROLE = 5
MAX_GOALS = 25
WEIGHT_SHARED_GOAL = 8
WEIGHT_COMPLEMENTARY_GOAL = 10
WEIGHT_SKILLS = 10
WEIGHT_LOCATION = 10

# (keyword in role A, keyword in role B, points, matches in both directions)
ROLE_RULES: tuple[tuple[str, str, int, bool], ...] = (
    ("founder", "investor", 25, True),
    ("hiring", "talent", 25, True),
    ("mentor", "mentee", 20, False),
    ("advisor", "founder", 20, False),
)

COMPLEMENTARY_GOALS: tuple[tuple[str, str], ...] = (
    ("Raise capital", "Invest capital"),
    ("Hire", "Join a startup"),
    ("Find a cofounder", "Join a startup"),
    ("Find customers", "Partnership BD"),
    ("Get a mentor", "Find advisors"),
    ("Find service providers", "Find customers"),
)


@dataclass
class ScoreBreakdown:
    """Per-factor sub-scores for one pair of profiles."""

    industry: int = 0
    role: int = 0
    goals: int = 0
    skills: int = 0
    location: int = 0
    reasons: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return min(MAX_SCORE, self.industry + self.role + self.goals + self.skills + self.location)

    @property
    def reason(self) -> str:
        return "; ".join(self.reasons) if self.reasons else "Low overlap"


def _shares_any(items1: list[str], items2: list[str]) -> bool:
    if not items1 or not items2:
        return False
    return any(item in items2 for item in items1)


def industry_score(a: ProfileAttributes, b: ProfileAttributes) -> int:
    if a.industry and a.industry == b.industry:
        return WEIGHT_INDUSTRY_EXACT
    if _shares_any(a.industries, b.industries):
        return WEIGHT_INDUSTRY_OVERLAP
    return 0


def role_score(role1: Optional[str], role2: Optional[str]) -> int:
    """Score how well two roles complement each other (0-25)."""
    if not role1 or not role2:
        return 0

    r1 = role1.lower()
    r2 = role2.lower()

    for left, right, points, both_ways in ROLE_RULES:
        if left in r1 and right in r2:
            return points
        if both_ways and left in r2 and right in r1:
            return points

    if r1 == r2:
        return WEIGHT_SAME_ROLE

    return WEIGHT_OTHER_ROLE


def goals_score(goals1: list[str], goals2: list[str]) -> int:
    """Score goal alignment: shared goals plus complementary pairs, capped at 25."""
    if not goals1 or not goals2:
        return 0

    total = WEIGHT_SHARED_GOAL * sum(1 for g in goals1 if g in goals2)

    for goal_a, goal_b in COMPLEMENTARY_GOALS:
        if (goal_a in goals1 and goal_b in goals2) or (goal_b in goals1 and goal_a in goals2):
            total += WEIGHT_COMPLEMENTARY_GOAL

    return min(MAX_GOALS, total)


def skills_score(a: ProfileAttributes, b: ProfileAttributes) -> int:
    return WEIGHT_SKILLS if _shares_any(a.skills, b.skills) else 0


def location_score(a: ProfileAttributes, b: ProfileAttributes) -> int:
    if a.city_region and a.city_region == b.city_region:
        return WEIGHT_LOCATION
    return 0


def explain_score(a: ProfileAttributes, b: ProfileAttributes) -> ScoreBreakdown:
    """Compute every sub-score for a pair of profiles, with reasons."""
    breakdown = ScoreBreakdown(
        industry=industry_score(a, b),
        role=role_score(a.role, b.role),
        goals=goals_score(a.objectives, b.objectives),
        skills=skills_score(a, b),
        location=location_score(a, b),
    )

    if breakdown.industry == WEIGHT_INDUSTRY_EXACT:
        breakdown.reasons.append(f"Industry: {a.industry}")
    elif breakdown.industry:
        breakdown.reasons.append("Overlapping industries")
    if breakdown.role > WEIGHT_OTHER_ROLE:
        breakdown.reasons.append(f"Roles: {a.role} / {b.role}")
    if breakdown.goals:
        breakdown.reasons.append("Aligned goals")
    if breakdown.skills:
        shared = sorted(set(a.skills) & set(b.skills))
        breakdown.reasons.append(f"Skills: {', '.join(shared[:5])}")
    if breakdown.location:
        breakdown.reasons.append(f"Location: {a.city_region}")

    return breakdown


def score_profiles(a: ProfileAttributes, b: ProfileAttributes) -> int:
    """Compatibility score between two profiles, 0-100."""
    return explain_score(a, b).total
