"""Résumé parsing, job matching and multi-source job search."""
from __future__ import annotations

from typing import Sequence

from jobflow.aggregator import JobAggregator
from jobflow.cover_letter import generate_cover_letter
from jobflow.errors import (
    ExtractionFailure,
    FallbackError,
    JobflowError,
    ParseError,
    SearchCancelled,
    SourceFailure,
    SourceTimeout,
    UnsupportedFormat,
)
from jobflow.matching import MatchingService
from jobflow.models import (
    ContactInfo,
    DocumentKind,
    JobListing,
    ParsedContent,
    ProfilePatch,
    RawDocument,
    SearchParams,
    SearchResult,
    UserProfile,
)
from jobflow.resume_parser import ResumeParser

__version__ = "0.1.0"

__all__ = [
    "JobAggregator", "MatchingService", "ResumeParser",
    "ContactInfo", "DocumentKind", "JobListing", "ParsedContent", "ProfilePatch",
    "RawDocument", "SearchParams", "SearchResult", "UserProfile",
    "JobflowError", "ParseError", "UnsupportedFormat", "ExtractionFailure",
    "SourceFailure", "SourceTimeout", "FallbackError", "SearchCancelled",
    "parse_resume", "create_profile_from_resume", "calculate_job_match",
    "rank_jobs", "generate_recommendations", "search_jobs", "generate_cover_letter",
]


def parse_resume(document: bytes, declared_name: str, media_type: str | None = None) -> ParsedContent:
    return ResumeParser().parse_resume(document, declared_name, media_type)


def create_profile_from_resume(parsed: ParsedContent) -> ProfilePatch:
    return ResumeParser.create_profile_from_resume(parsed)


def calculate_job_match(profile: UserProfile, job: JobListing) -> int:
    return MatchingService().calculate_job_match(profile, job)


def rank_jobs(profile: UserProfile, jobs: Sequence[JobListing]) -> list[JobListing]:
    return MatchingService().rank_jobs(profile, jobs)


def generate_recommendations(
    profile: UserProfile | None, jobs: Sequence[JobListing], limit: int = 10
) -> list[JobListing]:
    return MatchingService().generate_recommendations(profile, jobs, limit)


def search_jobs(params: SearchParams | None = None) -> SearchResult:
    """One-off search with sources configured from the environment."""
    return JobAggregator.from_env().search_jobs(params)
