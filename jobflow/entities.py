"""Heuristic entity extraction: skills, contact details, experience, education.

Every extractor degrades through fallback tiers and ends in a sentinel
value; none of them raise.
"""
from __future__ import annotations

import re

from jobflow.models import ContactInfo, unique_ci
from jobflow.sections import find_section, segment

EXPERIENCE_PLACEHOLDER = "Experience details will be extracted from your resume."
EDUCATION_PLACEHOLDER = "Education details extracted from resume"

MAX_EXPERIENCE_CHARS = 500
MAX_EDUCATION_ITEMS = 3
MAX_YEAR_SPANS = 3

SKILL_VOCABULARY: tuple[str, ...] = (
    # languages
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "PHP", "Ruby",
    "Go", "Rust", "Swift", "Kotlin",
    # frontend
    "React", "Vue", "Angular", "HTML", "CSS", "Sass", "Less", "Tailwind",
    "Bootstrap", "jQuery",
    # backend
    "Node.js", "Express", "Django", "Flask", "Spring", "Laravel", "Rails", "ASP.NET",
    # datastores
    "MySQL", "PostgreSQL", "MongoDB", "Redis", "Elasticsearch", "SQLite", "Oracle",
    # cloud / devops
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Jenkins", "GitHub Actions", "Terraform",
    # tools
    "Git", "Webpack", "Babel", "Jest", "Cypress", "GraphQL", "REST API", "Microservices",
    # methodologies
    "Agile", "Scrum", "Kanban", "TDD", "CI/CD", "DevOps",
)

ACRONYM_STOPWORDS: frozenset[str] = frozenset({"THE", "AND", "FOR", "ARE", "YOU"})
MAX_ACRONYM_LENGTH = 10

EXPERIENCE_SECTION_KEYWORDS = ("experience", "work history", "employment", "professional", "career")
EDUCATION_SECTION_KEYWORDS = ("education", "academic", "university", "college", "school", "degree")

_SKILL_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (skill, re.compile(rf"(?<!\w){re.escape(skill)}(?!\w)", re.IGNORECASE))
    for skill in SKILL_VOCABULARY
)
_ACRONYM_RE = re.compile(r"\b[A-Z]{2,}\b")

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_RE = re.compile(r"(\+?1?[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})")
_NAME_RE = re.compile(r"^[A-Z][a-z]+ [A-Z][a-z]+")
_LOCATION_RE = re.compile(r"\b([A-Z][a-zA-Z]+(?: [A-Z][a-zA-Z]+)*, [A-Z]{2})\b")

_YEAR_SPAN_RE = re.compile(r"\b(?:19|20)\d{2}\b.*?(?=\b(?:19|20)\d{2}\b|\n\n|\Z)", re.DOTALL)
_DEGREE_RE = re.compile(
    r"(bachelor|master|phd|doctorate|associate|diploma|certificate)"
    r".*?(computer science|engineering|business|marketing|design)",
    re.IGNORECASE,
)


def extract_skills(text: str) -> list[str]:
    """Vocabulary hits in vocabulary casing, then bare uppercase acronyms."""
    found = [skill for skill, pattern in _SKILL_PATTERNS if pattern.search(text)]
    acronyms = [
        token for token in _ACRONYM_RE.findall(text)
        if len(token) <= MAX_ACRONYM_LENGTH and token not in ACRONYM_STOPWORDS
    ]
    return unique_ci(found + acronyms)


def _head_lines(text: str, count: int = 5) -> list[str]:
    lines = [line.strip() for line in text.split("\n")]
    return [line for line in lines if line][:count]


def extract_contact(text: str) -> ContactInfo:
    email = _EMAIL_RE.search(text)
    phone = _PHONE_RE.search(text)
    head = _head_lines(text)

    name = None
    for line in head:
        if _NAME_RE.match(line) and len(line) < 50 and "@" not in line:
            name = line
            break

    location = None
    for line in head:
        m = _LOCATION_RE.search(line)
        if m:
            location = m.group(1)
            break

    return ContactInfo(
        name=name,
        email=email.group(0) if email else None,
        phone=phone.group(0).strip() if phone else None,
        location=location,
    )


def extract_experience(text: str, sections: dict[str, str] | None = None) -> str:
    sections = segment(text) if sections is None else sections
    content = find_section(sections, EXPERIENCE_SECTION_KEYWORDS)
    if content:
        return content[:MAX_EXPERIENCE_CHARS]

    # Year spans read as date ranges of past roles.
    spans = [m.group(0).strip() for m in _YEAR_SPAN_RE.finditer(text)]
    spans = [s for s in spans if s][:MAX_YEAR_SPANS]
    if spans:
        return "\n".join(spans)[:MAX_EXPERIENCE_CHARS]

    return EXPERIENCE_PLACEHOLDER


def extract_education(text: str, sections: dict[str, str] | None = None) -> list[str]:
    sections = segment(text) if sections is None else sections
    content = find_section(sections, EDUCATION_SECTION_KEYWORDS)
    if content:
        lines = [line.strip() for line in content.split("\n") if len(line.strip()) > 10]
        if lines:
            return lines[:MAX_EDUCATION_ITEMS]

    degrees = [m.group(0) for m in _DEGREE_RE.finditer(text)]
    if degrees:
        return degrees[:MAX_EDUCATION_ITEMS]

    return [EDUCATION_PLACEHOLDER]
