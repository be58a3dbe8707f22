"""Coarse seniority classification from free-text titles."""

from enum import Enum
from typing import Optional


class ExperienceLevel(str, Enum):
    SENIOR = "Senior"
    JUNIOR = "Junior"
    MID_LEVEL = "Mid-level"
    EXECUTIVE = "Executive"
    ENTRY_LEVEL = "Entry-level"
    PROFESSIONAL = "Professional"

    def __str__(self) -> str:
        return self.value


# Checked in order; the first group with a keyword in the title wins.
EXPERIENCE_RULES: tuple[tuple[tuple[str, ...], ExperienceLevel], ...] = (
    (("senior", "lead", "director", "vp", "chief", "head of"), ExperienceLevel.SENIOR),
    (("junior", "associate", "analyst"), ExperienceLevel.JUNIOR),
    (("manager", "specialist"), ExperienceLevel.MID_LEVEL),
    (("founder", "ceo", "cto"), ExperienceLevel.EXECUTIVE),
    (("student", "intern"), ExperienceLevel.ENTRY_LEVEL),
)


def classify_experience(title: Optional[str], role: Optional[str] = None) -> ExperienceLevel:
    """Derive an experience level from a job title.

    Only the title is matched against the keyword groups; ``role`` is
    accepted so callers can pass a whole profile's fields without picking
    them apart. Missing input yields ``ExperienceLevel.PROFESSIONAL``.
    """
    title_lower = title.lower() if isinstance(title, str) else ""
    if not title_lower:
        return ExperienceLevel.PROFESSIONAL

    for keywords, level in EXPERIENCE_RULES:
        if any(kw in title_lower for kw in keywords):
            return level

    return ExperienceLevel.PROFESSIONAL
