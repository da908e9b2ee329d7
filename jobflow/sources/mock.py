"""Synthetic job generator — fallback when every real source comes back empty."""
from __future__ import annotations

import random
from datetime import datetime, timezone

from jobflow.log import get_logger
from jobflow.models import JobListing, SearchParams
from jobflow.sources.base import JobSource

log = get_logger(__name__)

DEFAULT_COUNT = 20

COMPANIES: tuple[str, ...] = (
    "TechCorp", "StartupX", "InnovateLabs", "DataDriven Inc", "CloudTech",
    "AI Solutions", "WebFlow Co", "DevCraft", "CodeBase", "TechPioneer",
    "Digital Dynamics", "FutureCode", "ByteWorks", "PixelPerfect", "NetVision",
)

TITLES: tuple[str, ...] = (
    "Senior Frontend Developer", "Full Stack Engineer", "React Developer",
    "Backend Developer", "DevOps Engineer", "Software Engineer",
    "UI/UX Designer", "Product Manager", "Data Scientist", "Mobile Developer",
    "Python Developer", "JavaScript Developer", "Cloud Architect", "QA Engineer",
)

LOCATIONS: tuple[str, ...] = (
    "Remote", "San Francisco, CA", "New York, NY", "Austin, TX", "Seattle, WA",
    "London, UK", "Berlin, Germany", "Toronto, CA", "Amsterdam, NL", "Barcelona, ES",
)

SKILLS: tuple[str, ...] = (
    "React", "JavaScript", "TypeScript", "Node.js", "Python", "Java",
    "AWS", "Docker", "Kubernetes", "PostgreSQL", "MongoDB", "Redis",
    "GraphQL", "REST APIs", "Git", "CI/CD", "Agile", "Scrum",
)

JOB_TYPES: tuple[str, ...] = ("Full-time", "Part-time", "Contract")


class MockSource(JobSource):
    name = "Mock Data"

    def __init__(self, rng: random.Random | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.rng = rng or random.Random()

    def _job(self, index: int, stamp: str) -> JobListing:
        rng = self.rng
        company = rng.choice(COMPANIES)
        title = rng.choice(TITLES)
        skills = list(SKILLS[: rng.randint(3, 8)])
        salary = None
        if rng.random() > 0.3:
            salary = f"${rng.randint(80, 179)}k - ${rng.randint(120, 219)}k"
        return JobListing(
            id=f"mock_{stamp}_{index}_{rng.getrandbits(36):09x}",
            title=title,
            company=company,
            location=rng.choice(LOCATIONS),
            type=rng.choice(JOB_TYPES),
            salary=salary,
            description=(
                f"We are looking for a talented {title} to join our team at {company}. "
                "You will work on exciting projects using cutting-edge technologies "
                "and collaborate with a dynamic team of professionals."
            ),
            requirements=[
                f"3+ years of experience in {skills[0]}",
                f"Strong knowledge of {skills[1]} and {skills[2]}",
                "Bachelor's degree in Computer Science or related field",
                "Excellent communication skills",
                "Experience with Agile development methodologies",
            ],
            skills=skills,
            posted_date=f"{rng.randint(1, 7)} days ago",
            source=self.name,
            url=f"https://example.com/jobs/{index}",
        )

    def search(self, params: SearchParams) -> list[JobListing]:
        count = params.limit if params.limit > 0 else DEFAULT_COUNT
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        log.info("MockSource generating %d sample jobs", count)
        return [self._job(i, stamp) for i in range(count)]
