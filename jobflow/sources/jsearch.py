"""JSearch API (RapidAPI) — aggregated job listings."""
from __future__ import annotations

import requests

from jobflow.entities import extract_skills
from jobflow.log import get_logger
from jobflow.models import JobListing, SearchParams
from jobflow.retry import retry
from jobflow.sources.base import DEFAULT_TIMEOUT, JobSource, stable_id

log = get_logger(__name__)

API_HOST = "jsearch.p.rapidapi.com"


def _location(hit: dict) -> str:
    if hit.get("job_is_remote"):
        return "Remote"
    parts = [hit.get("job_city"), hit.get("job_state"), hit.get("job_country")]
    return ", ".join(p for p in parts if p)


def _salary(hit: dict) -> str | None:
    low, high = hit.get("job_min_salary"), hit.get("job_max_salary")
    if low and high:
        return f"{low:,.0f}-{high:,.0f} {hit.get('job_salary_currency') or ''}".strip()
    return None


class JSearchSource(JobSource):
    name = "JSearch"

    def __init__(self, api_key: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__(timeout)
        self.api_key = api_key

    @retry(max_attempts=3, base_delay=1.0, retryable=(requests.RequestException,), budget_attr="timeout")
    def _fetch(self, params: SearchParams) -> list[JobListing]:
        query = " ".join(filter(None, [params.query or "developer", params.location]))
        data = self._get_json(
            f"https://{API_HOST}/search",
            params={"query": query, "num_pages": "1"},
            headers={"X-RapidAPI-Key": self.api_key, "X-RapidAPI-Host": API_HOST},
        )

        jobs: list[JobListing] = []
        for hit in (data.get("data", []) if isinstance(data, dict) else []):
            title = hit.get("job_title") or ""
            company = hit.get("employer_name") or ""
            description = hit.get("job_description") or ""
            highlights = hit.get("job_highlights") or {}
            jobs.append(
                JobListing(
                    id=stable_id("jsearch", hit.get("job_id") or f"{title}{company}"),
                    title=title,
                    company=company,
                    location=_location(hit),
                    type=(hit.get("job_employment_type") or "Full-time").replace("FULLTIME", "Full-time"),
                    salary=_salary(hit),
                    description=description,
                    requirements=list(highlights.get("Qualifications") or [])[:10],
                    skills=hit.get("job_required_skills") or extract_skills(description),
                    posted_date=(hit.get("job_posted_at_datetime_utc") or "")[:10],
                    source=self.name,
                    url=hit.get("job_apply_link"),
                )
            )
        return jobs

    def search(self, params: SearchParams) -> list[JobListing]:
        jobs = self._run(self._fetch, params)
        log.debug("JSearch query=%r returned %d jobs", params.query, len(jobs))
        return jobs[: params.limit]
