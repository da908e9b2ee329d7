"""Himalayas — free remote-jobs API (no key required).

Docs: https://himalayas.app/api
"""
from __future__ import annotations

from datetime import datetime

import requests

from jobflow.entities import extract_skills
from jobflow.log import get_logger
from jobflow.models import JobListing, SearchParams
from jobflow.retry import retry
from jobflow.sources.base import JobSource, requirements_from_text, strip_html

log = get_logger(__name__)

API_URL = "https://himalayas.app/jobs/api/search"


def _posted(value: object) -> str:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value).strftime("%Y-%m-%d")
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d")
        except ValueError:
            return value
    return ""


def _company(hit: dict) -> str:
    company = hit.get("company")
    if isinstance(company, dict):
        return company.get("name") or ""
    return hit.get("companyName") or company or "Unknown Company"


def _location(hit: dict) -> str:
    restrictions = hit.get("locationRestrictions")
    if isinstance(restrictions, list) and restrictions:
        return "Remote (" + ", ".join(str(r) for r in restrictions) + ")"
    return hit.get("location") or "Remote"


def _salary(hit: dict) -> str | None:
    if hit.get("salary_range"):
        return hit["salary_range"]
    low, high = hit.get("minSalary"), hit.get("maxSalary")
    if low and high:
        return f"{hit.get('currency', '')} {low}-{high}".strip()
    return None


class HimalayasSource(JobSource):
    name = "Himalayas"

    @retry(max_attempts=2, base_delay=1.0, retryable=(requests.RequestException,), budget_attr="timeout")
    def _fetch(self, params: SearchParams) -> list[JobListing]:
        query: dict = {}
        if params.query:
            query["q"] = params.query
        if params.location:
            query["location"] = params.location
        data = self._get_json(API_URL, params=query, headers={"Accept": "application/json"})

        jobs: list[JobListing] = []
        for hit in (data.get("jobs", []) if isinstance(data, dict) else []):
            title = hit.get("title") or ""
            company = _company(hit)
            description = strip_html(hit.get("description") or hit.get("excerpt") or "")
            raw_id = hit.get("id") or hit.get("guid") or f"{title}{company}"
            skills = hit.get("skills") or hit.get("categories") or extract_skills(description)
            jobs.append(
                JobListing(
                    id=f"himalayas_{raw_id}",
                    title=title,
                    company=company,
                    location=_location(hit),
                    type=hit.get("employment_type") or hit.get("employmentType") or "Full-time",
                    salary=_salary(hit),
                    description=description,
                    requirements=list(hit.get("requirements") or requirements_from_text(hit.get("description", ""))),
                    skills=[str(s) for s in skills],
                    posted_date=_posted(hit.get("created_at") or hit.get("pubDate")),
                    source=self.name,
                    url=hit.get("url") or hit.get("applicationLink"),
                )
            )
        return jobs

    def search(self, params: SearchParams) -> list[JobListing]:
        jobs = self._run(self._fetch, params)
        log.debug("Himalayas q=%r returned %d jobs", params.query, len(jobs))
        return jobs[: params.limit]
