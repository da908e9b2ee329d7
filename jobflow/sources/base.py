from __future__ import annotations

import hashlib
import re
from abc import ABC, abstractmethod

import requests

from jobflow.errors import SourceFailure, SourceTimeout
from jobflow.models import JobListing, SearchParams

DEFAULT_TIMEOUT = 10.0

_BULLET_RE = re.compile(r"^\s*(?:[-*•·]|\d+[.)])\s+(.+)$", re.MULTILINE)
_TAG_RE = re.compile(r"<[^>]+>")


def stable_id(prefix: str, *parts: object) -> str:
    digest = hashlib.sha256("|".join(str(p) for p in parts).encode()).hexdigest()[:12]
    return f"{prefix}_{digest}"


def strip_html(text: str) -> str:
    return _TAG_RE.sub(" ", text or "")


def requirements_from_text(text: str, limit: int = 10) -> list[str]:
    """Bullet lines of a posting, which are usually its requirements."""
    plain = strip_html((text or "").replace("<li>", "\n- ").replace("</li>", "\n"))
    return [m.strip() for m in _BULLET_RE.findall(plain) if m.strip()][:limit]


class JobSource(ABC):
    """One independent job-listing provider."""

    name: str = "unknown"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    @abstractmethod
    def search(self, params: SearchParams) -> list[JobListing]:
        """Return listings; raise ``SourceError`` on failure."""

    def _get_json(self, url: str, **kwargs) -> dict | list:
        """GET and decode JSON.

        Server errors and network errors stay ``requests`` exceptions so the
        retry decorator can retry them; client errors and bad payloads
        become ``SourceFailure`` straight away.
        """
        kwargs.setdefault("timeout", self.timeout)
        r = requests.get(url, **kwargs)
        if 400 <= r.status_code < 500:
            raise SourceFailure(self.name, f"HTTP {r.status_code}")
        r.raise_for_status()
        try:
            return r.json()
        except ValueError as exc:
            raise SourceFailure(self.name, f"invalid JSON: {exc}") from exc

    def _run(self, fetch, *args, **kwargs):
        """Call a fetch method, converting exhausted ``requests`` errors."""
        try:
            return fetch(*args, **kwargs)
        except requests.Timeout as exc:
            raise SourceTimeout(self.name, str(exc)) from exc
        except requests.RequestException as exc:
            raise SourceFailure(self.name, str(exc)) from exc

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timeout={self.timeout})"
