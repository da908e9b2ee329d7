"""Load env configuration and resolve project paths."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from jobflow.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
PROFILE_PATH: Path = CONFIG_DIR / "profile.yaml"
SCHEDULE_PATH: Path = CONFIG_DIR / "discovery.yaml"
DATA_DIR: Path = ROOT_DIR / "data"
RESUME_DIR: Path = ROOT_DIR / "resume"

RESUME_EXTENSIONS: tuple[str, ...] = (".pdf", ".docx", ".doc", ".txt")


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _env_float(key: str, default: float) -> float:
    raw = get_env(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


def _env_int(key: str, default: int) -> int:
    return int(_env_float(key, float(default)))


def env_flag(key: str, default: bool) -> bool:
    raw = get_env(key).lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    source_timeout: float = 10.0
    search_limit: int = 50
    min_match_score: int = 50
    recommendation_limit: int = 10

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            source_timeout=_env_float("JOBFLOW_SOURCE_TIMEOUT", cls.source_timeout),
            search_limit=_env_int("JOBFLOW_SEARCH_LIMIT", cls.search_limit),
            min_match_score=_env_int("JOBFLOW_MIN_MATCH_SCORE", cls.min_match_score),
            recommendation_limit=_env_int(
                "JOBFLOW_RECOMMENDATION_LIMIT", cls.recommendation_limit
            ),
        )


def ensure_dirs() -> None:
    for d in (CONFIG_DIR, DATA_DIR, RESUME_DIR):
        d.mkdir(parents=True, exist_ok=True)


def get_resume_path(resume_dir: Path | None = None) -> Path | None:
    """First PDF, DOCX, DOC or TXT in the resume folder."""
    resume_dir = resume_dir or RESUME_DIR
    if not resume_dir.exists():
        return None
    for ext in RESUME_EXTENSIONS:
        for p in sorted(resume_dir.iterdir()):
            if p.suffix.lower() == ext and p.is_file():
                return p
    return None
