"""Exception taxonomy for résumé parsing and job aggregation."""
from __future__ import annotations


class JobflowError(Exception):
    """Base class for every error raised by jobflow."""


# ── Parsing ──────────────────────────────────────────────────────────────


class ParseError(JobflowError):
    """A résumé could not be turned into text. Fatal to the parse call."""

    user_message = "We couldn't read that résumé. Please try a different format."


class UnsupportedFormat(ParseError):
    """The declared media type / extension is not one we can read."""

    user_message = "Unsupported file type. Please upload a PDF or Word document."

    def __init__(self, name: str, media_type: str | None = None) -> None:
        self.name = name
        self.media_type = media_type
        detail = f" ({media_type})" if media_type else ""
        super().__init__(f"Unsupported résumé format: {name}{detail}")


class ExtractionFailure(ParseError):
    """Text extraction heuristics found nothing usable."""

    user_message = (
        "We couldn't extract any text from that file. "
        "Please try uploading a Word document instead."
    )


# ── Job sources ──────────────────────────────────────────────────────────


class SourceError(JobflowError):
    """A single job source failed. Absorbed by the aggregator."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"[{source}] {message}")


class SourceFailure(SourceError):
    """The source answered with an error or an unreadable payload."""


class SourceTimeout(SourceError):
    """The source did not settle within its time budget."""


class FallbackError(JobflowError):
    """The synthetic fallback generator raised; nothing left to return."""


class SearchCancelled(JobflowError):
    """The caller abandoned an in-flight search."""
