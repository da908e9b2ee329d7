"""Draft cover letters from a profile and a job listing (template based)."""
from __future__ import annotations

from pathlib import Path

from jobflow.config import DATA_DIR
from jobflow.entities import EXPERIENCE_PLACEHOLDER
from jobflow.log import get_logger
from jobflow.models import JobListing, UserProfile

log = get_logger(__name__)

DEFAULT_NAME = "Job Seeker"
DEFAULT_BACKGROUND = "software development"


def _background(profile: UserProfile) -> str:
    experience = (profile.experience or "").strip()
    if not experience or experience == EXPERIENCE_PLACEHOLDER:
        return DEFAULT_BACKGROUND
    first_line = experience.split("\n", 1)[0].strip().rstrip(".")
    return first_line or DEFAULT_BACKGROUND


def _location_reason(job: JobListing) -> str:
    if "remote" in job.location.lower():
        return "of the remote work flexibility"
    return f"it's located in {job.location}"


def generate_cover_letter(profile: UserProfile, job: JobListing) -> str:
    qualifications = "\n".join(f"• Proficiency in {skill}" for skill in profile.skills[:5])
    top_skills = ", ".join(profile.skills[:3]) or "my field"
    letter = f"""Dear Hiring Manager,

I am writing to express my interest in the {job.title} position at {job.company}. With my background in {_background(profile)}, I am excited about the opportunity to contribute to your team.

My key qualifications include:
{qualifications}

I am particularly drawn to this role because {_location_reason(job)}, and I believe my skills in {top_skills} align well with your requirements.

I would welcome the opportunity to discuss how my experience can benefit {job.company}. Thank you for your consideration.

Best regards,
{profile.name or DEFAULT_NAME}"""
    log.debug("Cover letter drafted for %s @ %s", job.title, job.company)
    return letter


def save_cover_letter(job: JobListing, content: str, data_dir: Path | None = None) -> Path:
    data_dir = data_dir or DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    safe = "".join(c if c.isalnum() or c in " -_" else "_" for c in job.company)[:40]
    safe_id = "".join(c if c.isalnum() or c in "-_" else "_" for c in job.id)[:60]
    path = data_dir / f"cover_{safe_id}_{safe}.txt"
    path.write_text(content, encoding="utf-8")
    return path
