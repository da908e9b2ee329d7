"""Score, rank and recommend jobs against a profile with keyword similarity."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from jobflow.entities import EXPERIENCE_PLACEHOLDER
from jobflow.log import get_logger
from jobflow.models import JobListing, UserProfile

log = get_logger(__name__)

SKILLS_WEIGHT = 0.40
ROLE_WEIGHT = 0.30
LOCATION_WEIGHT = 0.15
EXPERIENCE_WEIGHT = 0.15

DEFAULT_MIN_SCORE = 50
DEFAULT_RECOMMENDATION_LIMIT = 10

STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "have", "has", "had",
    "will", "would", "could", "should", "may", "might", "can", "must", "shall",
})

_NON_WORD_RE = re.compile(r"[^\w\s]")


def extract_keywords(text: str) -> list[str]:
    """Lowercased tokens longer than two characters, stop-words removed, unique."""
    tokens = _NON_WORD_RE.sub(" ", (text or "").lower()).split()
    return list(dict.fromkeys(t for t in tokens if len(t) > 2 and t not in STOP_WORDS))


def keywords_of(texts: Iterable[str]) -> set[str]:
    out: set[str] = set()
    for text in texts:
        out.update(extract_keywords(text))
    return out


def jaccard(left: set[str], right: set[str]) -> float:
    if not left or not right:
        return 0.0
    return len(left & right) / len(left | right)


def _location_match(preferred: Sequence[str], job_location: str) -> bool:
    job_loc = job_location.lower()
    for loc in preferred:
        loc = loc.lower().strip()
        if loc and loc in job_loc:
            return True
        if "remote" in loc and "remote" in job_loc:
            return True
    return False


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


@dataclass
class ProfileCompleteness:
    score: int
    missing: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


_COMPLETENESS_CHECKS: tuple[tuple[str, int, str], ...] = (
    ("name", 5, "Full name"),
    ("email", 10, "Email address"),
    ("phone", 5, "Phone number"),
    ("location", 10, "Location preference"),
    ("skills", 25, "Skills list"),
    ("experience", 20, "Experience description"),
    ("education", 10, "Education background"),
    ("preferred_roles", 15, "Preferred job roles"),
)


class MatchingService:
    """Stateless keyword matcher; construct once and share."""

    def __init__(
        self,
        min_score: int = DEFAULT_MIN_SCORE,
        recommendation_limit: int = DEFAULT_RECOMMENDATION_LIMIT,
    ) -> None:
        self.min_score = min_score
        self.recommendation_limit = recommendation_limit

    def signals(self, profile: UserProfile, job: JobListing) -> list[tuple[float, float]]:
        """(similarity, weight) for every signal with data on both sides."""
        applied: list[tuple[float, float]] = []

        profile_skills = {s.lower().strip() for s in profile.skills if s.strip()}
        job_skills = {s.lower().strip() for s in job.skills if s.strip()}
        if profile_skills and job_skills:
            applied.append((jaccard(profile_skills, job_skills), SKILLS_WEIGHT))

        role_keywords = keywords_of(profile.preferred_roles)
        title_keywords = keywords_of([job.title])
        if role_keywords and title_keywords:
            applied.append((jaccard(role_keywords, title_keywords), ROLE_WEIGHT))

        if profile.preferred_locations and job.location.strip():
            hit = _location_match(profile.preferred_locations, job.location)
            applied.append((1.0 if hit else 0.0, LOCATION_WEIGHT))

        experience = "" if profile.experience == EXPERIENCE_PLACEHOLDER else profile.experience
        experience_keywords = keywords_of([experience])
        requirement_keywords = keywords_of(job.requirements)
        if experience_keywords and requirement_keywords:
            applied.append((jaccard(experience_keywords, requirement_keywords), EXPERIENCE_WEIGHT))

        return applied

    def calculate_job_match(self, profile: UserProfile, job: JobListing) -> int:
        """Weighted similarity normalised by the weights that applied, in [0, 100]."""
        applied = self.signals(profile, job)
        weights = sum(w for _, w in applied)
        if not weights:
            return 0
        total = sum(score * w for score, w in applied)
        return max(0, min(100, _round_half_up(total / weights * 100)))

    def rank_jobs(self, profile: UserProfile, jobs: Sequence[JobListing]) -> list[JobListing]:
        """Scored copies of *jobs*, best first; ties keep their input order."""
        scored = [job.with_score(self.calculate_job_match(profile, job)) for job in jobs]
        # sorted() is stable, so equal scores keep input order
        return sorted(scored, key=lambda j: -(j.match_score or 0))

    def generate_recommendations(
        self,
        profile: UserProfile | None,
        jobs: Sequence[JobListing],
        limit: int | None = None,
        min_score: int | None = None,
    ) -> list[JobListing]:
        limit = self.recommendation_limit if limit is None else limit
        min_score = self.min_score if min_score is None else min_score
        if profile is None or not jobs or limit <= 0:
            return []

        ranked = self.rank_jobs(profile, jobs)
        result = [j for j in ranked if (j.match_score or 0) >= min_score][:limit]
        log.info(
            "Scored %d jobs → %d recommended at ≥%d%%", len(jobs), len(result), min_score,
        )
        return result

    @staticmethod
    def analyze_profile_completeness(profile: UserProfile) -> ProfileCompleteness:
        total = 0
        achieved = 0
        missing: list[str] = []
        for attr, weight, label in _COMPLETENESS_CHECKS:
            total += weight
            value = getattr(profile, attr)
            if attr == "experience" and value == EXPERIENCE_PLACEHOLDER:
                value = ""
            if value:
                achieved += weight
            else:
                missing.append(label)

        suggestions: list[str] = []
        if len(profile.skills) < 5:
            suggestions.append("Add more technical skills to improve job matching")
        if not profile.resume_text:
            suggestions.append("Upload your resume for automated parsing")
        if len(profile.preferred_roles) < 2:
            suggestions.append("Add multiple job role preferences")

        return ProfileCompleteness(
            score=_round_half_up(achieved / total * 100),
            missing=missing,
            suggestions=suggestions,
        )
