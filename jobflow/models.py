"""Data models for résumés, profiles and job listings."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePath
from types import MappingProxyType
from typing import Any, Iterable, Mapping


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def unique_ci(items: Iterable[str]) -> list[str]:
    """Drop blanks and case-insensitive duplicates, keeping first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        value = (item or "").strip()
        key = value.casefold()
        if value and key not in seen:
            seen.add(key)
            out.append(value)
    return out


# ── Documents ────────────────────────────────────────────────────────────


class DocumentKind(str, Enum):
    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"
    TXT = "txt"
    UNKNOWN = "unknown"


_MEDIA_TYPES: dict[str, DocumentKind] = {
    "application/pdf": DocumentKind.PDF,
    "application/msword": DocumentKind.DOC,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentKind.DOCX,
    "text/plain": DocumentKind.TXT,
}

_EXTENSIONS: dict[str, DocumentKind] = {
    ".pdf": DocumentKind.PDF,
    ".doc": DocumentKind.DOC,
    ".docx": DocumentKind.DOCX,
    ".txt": DocumentKind.TXT,
}


def resolve_kind(name: str, media_type: str | None = None) -> DocumentKind:
    """Declared media type wins; otherwise fall back to the file extension."""
    if media_type:
        kind = _MEDIA_TYPES.get(media_type.split(";")[0].strip().lower())
        if kind is not None:
            return kind
    return _EXTENSIONS.get(PurePath(name or "").suffix.lower(), DocumentKind.UNKNOWN)


@dataclass(frozen=True)
class RawDocument:
    data: bytes
    kind: DocumentKind
    name: str = ""
    media_type: str | None = None

    @classmethod
    def from_upload(cls, data: bytes, name: str, media_type: str | None = None) -> "RawDocument":
        return cls(data=bytes(data), kind=resolve_kind(name, media_type), name=name, media_type=media_type)


# ── Parsed résumé ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ContactInfo:
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class ParsedContent:
    text: str
    skills: tuple[str, ...]
    experience: str
    education: tuple[str, ...]
    contact: ContactInfo
    sections: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "skills", tuple(unique_ci(self.skills)))
        object.__setattr__(self, "education", tuple(self.education))
        object.__setattr__(self, "sections", MappingProxyType(dict(self.sections)))


# ── Profile ──────────────────────────────────────────────────────────────


@dataclass
class UserProfile:
    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    skills: list[str] = field(default_factory=list)
    experience: str = ""
    education: list[str] = field(default_factory=list)
    preferred_roles: list[str] = field(default_factory=list)
    preferred_locations: list[str] = field(default_factory=list)
    resume_text: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.skills = unique_ci(self.skills)
        self.preferred_roles = unique_ci(self.preferred_roles)
        self.preferred_locations = unique_ci(self.preferred_locations)
        self.education = list(self.education)

    @classmethod
    def new(cls, **kwargs: Any) -> "UserProfile":
        return cls(id=uuid.uuid4().hex, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserProfile":
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known and v is not None}
        for ts in ("created_at", "updated_at"):
            if isinstance(kwargs.get(ts), str):
                kwargs[ts] = datetime.fromisoformat(kwargs[ts])
        kwargs.setdefault("id", uuid.uuid4().hex)
        return cls(**kwargs)


@dataclass(frozen=True)
class ProfilePatch:
    """Optional profile fields produced by a résumé parse.

    ``None`` / empty means "leave the existing value alone".
    """

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    skills: tuple[str, ...] = ()
    experience: str | None = None
    education: tuple[str, ...] = ()
    resume_text: str | None = None
    updated_at: datetime = field(default_factory=utcnow)

    def apply_to(self, profile: UserProfile) -> UserProfile:
        """Return *profile* with every non-empty patch field overwritten."""
        changes: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "updated_at":
                continue
            value = getattr(self, f.name)
            if value:
                changes[f.name] = list(value) if isinstance(value, tuple) else value
        changes["updated_at"] = self.updated_at
        return replace(profile, **changes)


# ── Jobs ─────────────────────────────────────────────────────────────────


@dataclass
class JobListing:
    id: str
    title: str
    company: str
    location: str
    type: str = "Full-time"
    description: str = ""
    requirements: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    posted_date: str = ""
    source: str = "unknown"
    salary: str | None = None
    url: str | None = None
    match_score: int | None = None
    applied: bool = False
    applied_at: datetime | None = None

    def __post_init__(self) -> None:
        # Provider payloads sometimes carry explicit nulls
        self.title = (self.title or "").strip()
        self.company = (self.company or "").strip()
        self.location = (self.location or "").strip()
        self.skills = unique_ci(self.skills or [])
        self.requirements = [r for r in (self.requirements or []) if r]

    @property
    def dedup_key(self) -> tuple[str, str]:
        return (self.title.casefold(), self.company.casefold())

    def with_score(self, score: int) -> "JobListing":
        return replace(self, match_score=score)


@dataclass
class SourceResult:
    jobs: list[JobListing]
    source: str
    failed: bool = False
    error: str | None = None


@dataclass
class SearchParams:
    query: str | None = None
    location: str | None = None
    skills: list[str] = field(default_factory=list)
    limit: int = 50
    job_type: str | None = None


@dataclass
class SearchResult:
    jobs: list[JobListing]
    source: str

    @property
    def is_empty(self) -> bool:
        return not self.jobs
