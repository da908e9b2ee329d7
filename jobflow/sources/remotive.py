"""Remotive — free API for remote tech jobs (no API key required).

Docs: https://remotive.com/api/remote-jobs
"""
from __future__ import annotations

import requests

from jobflow.log import get_logger
from jobflow.models import JobListing, SearchParams
from jobflow.retry import retry
from jobflow.sources.base import JobSource, requirements_from_text, stable_id, strip_html

log = get_logger(__name__)

API_URL = "https://remotive.com/api/remote-jobs"

# Remotive works best with short, broad search terms, not full role titles.
_GENERIC_WORDS = frozenset({
    "senior", "junior", "lead", "staff", "principal", "manager",
    "engineer", "developer", "specialist", "consultant", "ii", "iii", "iv",
})

_JOB_TYPES = {"full_time": "Full-time", "part_time": "Part-time", "contract": "Contract", "freelance": "Contract"}


def search_term(query: str | None) -> str:
    """Most distinctive word of a role title ("Senior Python Developer" → "python")."""
    words = (query or "").lower().split()
    distinctive = [w for w in words if w not in _GENERIC_WORDS]
    if distinctive:
        return distinctive[0]
    return words[0] if words else ""


class RemotiveSource(JobSource):
    name = "Remotive"

    @retry(max_attempts=2, base_delay=1.0, retryable=(requests.RequestException,), budget_attr="timeout")
    def _fetch(self, term: str, limit: int) -> list[JobListing]:
        query: dict = {"limit": limit}
        if term:
            query["search"] = term
        data = self._get_json(API_URL, params=query)

        jobs: list[JobListing] = []
        for hit in (data.get("jobs", []) if isinstance(data, dict) else []):
            title = hit.get("title") or ""
            company = hit.get("company_name") or ""
            raw_description = hit.get("description") or ""
            jobs.append(
                JobListing(
                    id=stable_id("remotive", hit.get("id") or f"{title}{company}"),
                    title=title,
                    company=company,
                    location=hit.get("candidate_required_location") or "Remote",
                    type=_JOB_TYPES.get(hit.get("job_type", ""), "Full-time"),
                    salary=hit.get("salary") or None,
                    description=strip_html(raw_description).strip(),
                    requirements=requirements_from_text(raw_description),
                    skills=list(hit.get("tags") or []),
                    posted_date=(hit.get("publication_date") or "")[:10],
                    source=self.name,
                    url=hit.get("url"),
                )
            )
        return jobs

    def search(self, params: SearchParams) -> list[JobListing]:
        term = search_term(params.query) or (params.skills[0].lower() if params.skills else "")
        jobs = self._run(self._fetch, term, params.limit)
        log.debug("Remotive search=%r returned %d jobs", term, len(jobs))
        return jobs[: params.limit]
