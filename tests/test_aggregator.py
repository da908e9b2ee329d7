"""Tests for multi-source job aggregation."""

from __future__ import annotations

import random
import threading
import time
from unittest import mock

import pytest
import requests

from jobflow.aggregator import JobAggregator, dedupe_jobs, discovery_params
from jobflow.errors import FallbackError, SearchCancelled, SourceFailure
from jobflow.models import JobListing, SearchParams, UserProfile
from jobflow.sources import HimalayasSource, JobSource, MockSource


class FakeSource(JobSource):
    def __init__(self, name, jobs=(), error=None, delay=0.0):
        super().__init__(timeout=1.0)
        self.name = name
        self.jobs = list(jobs)
        self.error = error
        self.delay = delay
        self.calls = 0

    def search(self, params):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.jobs)[: params.limit]


def job(title, company, job_id=None, source="A"):
    return JobListing(id=job_id or f"{source}-{title}-{company}", title=title, company=company,
                      location="Remote", source=source)


def fallback_jobs(n=3):
    return [job(f"Synthetic {i}", "MockCo", source="Mock Data") for i in range(n)]


def test_all_sources_fail_uses_fallback_only():
    sources = [
        FakeSource("A", error=SourceFailure("A", "HTTP 500")),
        FakeSource("B", error=RuntimeError("boom")),
    ]
    agg = JobAggregator(sources, fallback=MockSource(rng=random.Random(7)), timeout=2.0)

    result = agg.search_jobs(SearchParams(limit=10))

    assert result.source == "Mock Data"
    assert 0 < len(result.jobs) <= 10
    assert {j.source for j in result.jobs} == {"Mock Data"}


def test_partial_failure_is_tolerated():
    ok = FakeSource("A", jobs=[job("Python Dev", "Acme")])
    broken = FakeSource("B", error=SourceFailure("B", "HTTP 403"))
    fallback = FakeSource("Mock Data", jobs=fallback_jobs())
    result = JobAggregator([ok, broken], fallback=fallback).search_jobs(SearchParams(limit=10))

    assert result.source == "A"
    assert [j.title for j in result.jobs] == ["Python Dev"]


def test_every_source_is_queried_even_after_a_success():
    a = FakeSource("A", jobs=[job("One", "Acme")])
    b = FakeSource("B", jobs=[job("Two", "Globex", source="B")], delay=0.1)
    fallback = FakeSource("Mock Data", jobs=fallback_jobs())
    result = JobAggregator([a, b], fallback=fallback).search_jobs(SearchParams(limit=10))

    assert (a.calls, b.calls, fallback.calls) == (1, 1, 1)
    assert result.source == "A, B"
    assert [j.title for j in result.jobs] == ["One", "Two"]


def test_sources_with_no_results_are_not_credited():
    a = FakeSource("A", jobs=[job("One", "Acme")])
    empty = FakeSource("Empty")
    result = JobAggregator([empty, a], fallback=FakeSource("Mock Data")).search_jobs()
    assert result.source == "A"


def test_duplicates_collapse_first_seen_wins():
    a = FakeSource("A", jobs=[job("Python Dev", "Acme", job_id="a1")])
    b = FakeSource("B", jobs=[job("python dev ", "ACME", job_id="b1", source="B"),
                              job("Go Dev", "Acme", job_id="b2", source="B")])
    result = JobAggregator([a, b], fallback=FakeSource("Mock Data")).search_jobs(SearchParams(limit=10))
    assert [j.id for j in result.jobs] == ["a1", "b2"]


def test_results_truncated_to_limit():
    a = FakeSource("A", jobs=[job(f"Role {i}", "Acme") for i in range(8)])
    b = FakeSource("B", jobs=[job(f"Role {i}", "Globex", source="B") for i in range(8)])
    result = JobAggregator([a, b], fallback=FakeSource("Mock Data")).search_jobs(SearchParams(limit=5))
    assert len(result.jobs) == 5


def test_slow_source_times_out_without_failing_the_search():
    fast = FakeSource("Fast", jobs=[job("One", "Acme")])
    slow = FakeSource("Slow", jobs=[job("Two", "Globex")], delay=2.0)
    agg = JobAggregator([fast, slow], fallback=FakeSource("Mock Data"), timeout=0.3)

    started = time.monotonic()
    result = agg.search_jobs(SearchParams(limit=10))

    assert time.monotonic() - started < 1.5
    assert result.source == "Fast"
    assert [j.title for j in result.jobs] == ["One"]


def test_no_sources_configured_uses_fallback():
    result = JobAggregator([], fallback=FakeSource("Mock Data", jobs=fallback_jobs(2))).search_jobs()
    assert result.source == "Mock Data"
    assert len(result.jobs) == 2


def test_empty_outcome_is_not_an_error():
    agg = JobAggregator([FakeSource("A", error=RuntimeError("down"))], fallback=FakeSource("Mock Data"))
    result = agg.search_jobs()
    assert result.is_empty
    assert result.source == ""


def test_fallback_failure_is_fatal_when_needed():
    agg = JobAggregator(
        [FakeSource("A", error=RuntimeError("down"))],
        fallback=FakeSource("Mock Data", error=RuntimeError("generator broke")),
    )
    with pytest.raises(FallbackError):
        agg.search_jobs()


def test_fallback_failure_ignored_when_real_jobs_exist():
    agg = JobAggregator(
        [FakeSource("A", jobs=[job("One", "Acme")])],
        fallback=FakeSource("Mock Data", error=RuntimeError("generator broke")),
    )
    assert agg.search_jobs().source == "A"


def test_cancelled_search_emits_nothing():
    cancel = threading.Event()
    cancel.set()
    agg = JobAggregator([FakeSource("A", jobs=[job("One", "Acme")])], fallback=FakeSource("Mock Data"))
    with pytest.raises(SearchCancelled):
        agg.search_jobs(SearchParams(limit=5), cancel=cancel)


def test_listing_with_null_company_does_not_break_the_search():
    payload = {"jobs": [{"id": 2, "title": "Dev", "company": {"name": None}},
                        {"id": 3, "title": None, "company": {"name": "Acme"}}]}
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = 200
    resp.json.return_value = payload
    ok = FakeSource("A", jobs=[job("Python Dev", "Acme")])
    agg = JobAggregator([HimalayasSource(timeout=1.0), ok], fallback=FakeSource("Mock Data"))

    with mock.patch("jobflow.sources.base.requests.get", return_value=resp):
        result = agg.search_jobs(SearchParams(limit=5))

    assert result.source == "Himalayas, A"
    assert [(j.title, j.company) for j in result.jobs] == [("Dev", ""), ("", "Acme"), ("Python Dev", "Acme")]


def test_dedupe_jobs_helper():
    jobs = [job("A", "X", job_id="1"), job("a", "x", job_id="2"), job("A", "Y", job_id="3")]
    assert [j.id for j in dedupe_jobs(jobs)] == ["1", "3"]


def test_discovery_params_from_profile():
    profile = UserProfile(
        id="p1",
        skills=["Python", "React", "AWS", "Docker"],
        preferred_roles=["Backend Developer"],
        preferred_locations=["Berlin"],
    )
    params = discovery_params(profile, limit=25)
    assert params.query == "Backend Developer"
    assert params.location == "Berlin"
    assert params.skills == ["Python", "React", "AWS"]
    assert params.limit == 25


def test_discovery_params_defaults():
    params = discovery_params(UserProfile(id="p1"))
    assert (params.query, params.location, params.limit) == ("developer", "remote", 50)
