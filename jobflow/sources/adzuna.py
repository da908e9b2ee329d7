"""Adzuna job search — broad aggregator, needs an app id + key.

Free tier: 250 requests/day.  Sign up at https://developer.adzuna.com/
"""
from __future__ import annotations

import requests

from jobflow.entities import extract_skills
from jobflow.log import get_logger
from jobflow.models import JobListing, SearchParams
from jobflow.retry import retry
from jobflow.sources.base import DEFAULT_TIMEOUT, JobSource, requirements_from_text, stable_id

log = get_logger(__name__)

DEFAULT_COUNTRY = "gb"
BASE_URL = "https://api.adzuna.com/v1/api/jobs/{country}/search"

_CONTRACT_TYPES = {"full_time": "Full-time", "part_time": "Part-time", "contract": "Contract", "permanent": "Full-time"}


def _salary_text(hit: dict) -> str | None:
    sal_min = hit.get("salary_min")
    sal_max = hit.get("salary_max")
    if sal_min and sal_max:
        return f"{sal_min:,.0f}-{sal_max:,.0f}"
    if sal_min:
        return f"{sal_min:,.0f}"
    return None


class AdzunaSource(JobSource):
    name = "Adzuna"

    def __init__(self, app_id: str, app_key: str, country: str = DEFAULT_COUNTRY,
                 timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__(timeout)
        self.app_id = app_id
        self.app_key = app_key
        self.country = country or DEFAULT_COUNTRY

    @retry(max_attempts=3, base_delay=1.0, retryable=(requests.RequestException,), budget_attr="timeout")
    def _fetch(self, params: SearchParams, page: int = 1) -> list[JobListing]:
        query: dict = {
            "app_id": self.app_id,
            "app_key": self.app_key,
            "results_per_page": min(params.limit, 50),
            "content-type": "application/json",
        }
        what = " ".join(filter(None, [params.query, *params.skills[:3]]))
        if what:
            query["what"] = what
        if params.location:
            query["where"] = params.location

        url = f"{BASE_URL.format(country=self.country)}/{page}"
        data = self._get_json(url, params=query)

        jobs: list[JobListing] = []
        for hit in (data.get("results", []) if isinstance(data, dict) else []):
            title = hit.get("title") or ""
            company = (hit.get("company") or {}).get("display_name") or ""
            loc = (hit.get("location") or {}).get("display_name") or ""
            description = hit.get("description") or ""
            jobs.append(
                JobListing(
                    id=stable_id("adzuna", hit.get("id") or f"{title}{company}{loc}"),
                    title=title,
                    company=company,
                    location=loc,
                    type=_CONTRACT_TYPES.get(hit.get("contract_time") or hit.get("contract_type") or "", "Full-time"),
                    salary=_salary_text(hit),
                    description=description,
                    requirements=requirements_from_text(description),
                    skills=extract_skills(f"{title}\n{description}"),
                    posted_date=(hit.get("created") or "")[:10],
                    source=self.name,
                    url=hit.get("redirect_url"),
                )
            )
        return jobs

    def search(self, params: SearchParams) -> list[JobListing]:
        jobs = self._run(self._fetch, params)
        log.debug("Adzuna what=%r where=%r returned %d jobs", params.query, params.location, len(jobs))
        return jobs[: params.limit]
