"""Split résumé text into named sections."""
from __future__ import annotations

GENERAL_SECTION = "general"
MAX_HEADER_LENGTH = 50

SECTION_KEYWORDS: tuple[str, ...] = (
    "summary", "objective", "experience", "work", "employment", "education",
    "skills", "projects", "achievements", "certifications", "awards",
)


def is_header(line: str) -> bool:
    """Short line mentioning a section keyword."""
    if len(line) >= MAX_HEADER_LENGTH:
        return False
    low = line.strip().lower()
    return any(keyword in low for keyword in SECTION_KEYWORDS)


def segment(text: str) -> dict[str, str]:
    """Single pass over lines; text before the first header lands in ``general``.

    Headers are keyed by their lowercased line. A header with no body is
    not recorded, and a repeated header replaces the earlier body.
    """
    sections: dict[str, str] = {}
    current = GENERAL_SECTION
    buffer: list[str] = []

    for line in text.split("\n"):
        if is_header(line):
            if buffer:
                sections[current] = "\n".join(buffer).strip()
            current = line.strip().lower()
            buffer = []
        else:
            buffer.append(line)

    if buffer:
        sections[current] = "\n".join(buffer).strip()
    return sections


def find_section(sections: dict[str, str], keywords: tuple[str, ...]) -> str | None:
    """Content of the first non-blank section whose name contains a keyword.

    Keywords are tried in priority order, sections in document order.
    """
    for keyword in keywords:
        for name, content in sections.items():
            if keyword in name.lower() and content.strip():
                return content
    return None
