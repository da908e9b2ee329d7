"""Query every job source in parallel and merge what comes back.

One task per source plus one for the synthetic fallback. All tasks are
awaited; a failing or slow source only costs its own slot. Merging,
deduplication and truncation happen on the calling thread after every
task has settled.
"""
from __future__ import annotations

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Sequence

from jobflow.config import Settings, get_env
from jobflow.errors import FallbackError, SearchCancelled
from jobflow.log import get_logger
from jobflow.models import JobListing, SearchParams, SearchResult, SourceResult, UserProfile
from jobflow.sources import JobSource, MockSource, get_sources

log = get_logger(__name__)

_CANCEL_POLL = 0.25


def dedupe_jobs(jobs: Sequence[JobListing]) -> list[JobListing]:
    """Collapse case-insensitive (title, company) duplicates; first seen wins."""
    seen: set[tuple[str, str]] = set()
    out: list[JobListing] = []
    for job in jobs:
        if job.dedup_key not in seen:
            seen.add(job.dedup_key)
            out.append(job)
    return out


def discovery_params(profile: UserProfile, limit: int = 50) -> SearchParams:
    """Search parameters for scheduled discovery runs."""
    return SearchParams(
        query=profile.preferred_roles[0] if profile.preferred_roles else "developer",
        location=profile.preferred_locations[0] if profile.preferred_locations else "remote",
        skills=profile.skills[:3],
        limit=limit,
    )


def _query(source: JobSource, params: SearchParams) -> SourceResult:
    """Run one source; never raises."""
    started = time.monotonic()
    try:
        jobs = source.search(params)
    except Exception as exc:
        log.warning("[%s] FAILED: %s", source.name, exc)
        return SourceResult(jobs=[], source=source.name, failed=True, error=str(exc) or type(exc).__name__)
    log.info("[%s] returned %d jobs in %.1fs", source.name, len(jobs), time.monotonic() - started)
    return SourceResult(jobs=list(jobs), source=source.name)


class JobAggregator:
    def __init__(
        self,
        sources: Sequence[JobSource],
        fallback: JobSource | None = None,
        timeout: float = 10.0,
        default_limit: int = 50,
    ) -> None:
        self.sources = list(sources)
        self.fallback = fallback or MockSource()
        self.timeout = timeout
        self.default_limit = default_limit

    @classmethod
    def from_env(
        cls, settings: Settings | None = None, preferred_locations: Sequence[str] = ()
    ) -> "JobAggregator":
        settings = settings or Settings.from_env()
        sources = get_sources(get_env, preferred_locations, timeout=settings.source_timeout)
        return cls(sources, timeout=settings.source_timeout, default_limit=settings.search_limit)

    def _settle(
        self, tasks: list[JobSource], params: SearchParams, cancel: threading.Event | None
    ) -> list[SourceResult]:
        pool = ThreadPoolExecutor(max_workers=len(tasks), thread_name_prefix="jobflow-source")
        try:
            futures: list[Future] = [pool.submit(_query, src, params) for src in tasks]
            deadline = time.monotonic() + self.timeout
            pending = set(futures)
            while pending:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                step = min(remaining, _CANCEL_POLL) if cancel is not None else remaining
                _, pending = wait(pending, timeout=step)
                if cancel is not None and cancel.is_set():
                    raise SearchCancelled("Search abandoned by caller")
        finally:
            # Stragglers keep running in the background; their results are dropped.
            pool.shutdown(wait=False, cancel_futures=True)

        results: list[SourceResult] = []
        for src, fut in zip(tasks, futures):
            if fut.done() and not fut.cancelled():
                results.append(fut.result())
            else:
                log.warning("[%s] timed out after %.1fs", src.name, self.timeout)
                results.append(SourceResult(jobs=[], source=src.name, failed=True, error="timeout"))
        return results

    def search_jobs(
        self, params: SearchParams | None = None, cancel: threading.Event | None = None
    ) -> SearchResult:
        """Wait for every source, tolerate failures, fall back to synthetic jobs."""
        params = params or SearchParams(limit=self.default_limit)
        log.info("Searching %d source(s) in parallel (query=%r, location=%r)",
                 len(self.sources), params.query, params.location)

        results = self._settle([*self.sources, self.fallback], params, cancel)
        *real, fallback = results

        if cancel is not None and cancel.is_set():
            raise SearchCancelled("Search abandoned by caller")

        jobs: list[JobListing] = []
        contributors: list[str] = []
        for result in real:
            if result.jobs:
                jobs.extend(result.jobs)
                contributors.append(result.source)

        if not jobs:
            if fallback.failed:
                raise FallbackError(f"Fallback generator failed: {fallback.error}")
            log.warning("Falling back to %s (no real jobs returned)", fallback.source)
            jobs = list(fallback.jobs)
            if jobs:
                contributors.append(fallback.source)

        unique = dedupe_jobs(jobs)[: max(params.limit, 0)]
        if not unique:
            log.warning("No matching jobs found after exhausting all sources")
        log.info("Total unique jobs: %d (from %s)", len(unique), ", ".join(contributors) or "none")
        return SearchResult(jobs=unique, source=", ".join(contributors))
