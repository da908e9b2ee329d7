from __future__ import annotations

from typing import Callable, Sequence

from .base import JobSource
from .adzuna import AdzunaSource
from .himalayas import HimalayasSource
from .jsearch import JSearchSource
from .mock import MockSource
from .remotive import RemotiveSource

from jobflow.config import env_flag
from jobflow.log import get_logger
from jobflow.sources.base import DEFAULT_TIMEOUT

log = get_logger(__name__)

__all__ = [
    "JobSource", "AdzunaSource", "HimalayasSource", "JSearchSource",
    "MockSource", "RemotiveSource", "get_sources",
]


def get_sources(
    env_getter: Callable[..., str],
    preferred_locations: Sequence[str] = (),
    timeout: float = DEFAULT_TIMEOUT,
) -> list[JobSource]:
    """Real sources enabled by the environment. The fallback is not included."""
    sources: list[JobSource] = []

    if env_flag("JOBFLOW_ENABLE_HIMALAYAS", True):
        sources.append(HimalayasSource(timeout=timeout))
        log.info("Registered source: Himalayas (free, remote jobs)")

    if env_getter("ADZUNA_APP_ID") and env_getter("ADZUNA_APP_KEY"):
        sources.append(
            AdzunaSource(
                env_getter("ADZUNA_APP_ID"),
                env_getter("ADZUNA_APP_KEY"),
                country=env_getter("ADZUNA_COUNTRY"),
                timeout=timeout,
            )
        )
        log.info("Registered source: Adzuna")

    if env_getter("JSEARCH_API_KEY"):
        sources.append(JSearchSource(env_getter("JSEARCH_API_KEY"), timeout=timeout))
        log.info("Registered source: JSearch")

    # Remotive is free; include it whenever the user is open to remote work
    wants_remote = any("remote" in loc.lower() for loc in preferred_locations)
    if env_flag("JOBFLOW_ENABLE_REMOTIVE", wants_remote):
        sources.append(RemotiveSource(timeout=timeout))
        log.info("Registered source: Remotive (free, remote jobs)")

    if not sources:
        log.info("No job sources enabled — searches will use synthetic listings")
    return sources
