"""YAML-backed profile persistence, invoked by the application root.

The matching and parsing services never touch this module; callers load a
profile, hand it to the services, and save what they get back.
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import yaml

from jobflow.config import PROFILE_PATH, SCHEDULE_PATH
from jobflow.log import get_logger
from jobflow.models import SearchParams, UserProfile

log = get_logger(__name__)

_HEADER = (
    "# ============================================================\n"
    "# Candidate Profile — generated from your résumé\n"
    "# Edit preferred_roles / preferred_locations to tune matching\n"
    "# ============================================================\n\n"
)


class ProfileStore:
    def __init__(self, path: Path | None = None, schedule_path: Path | None = None) -> None:
        self.path = Path(path or PROFILE_PATH)
        self.schedule_path = Path(schedule_path or SCHEDULE_PATH)

    def load(self) -> UserProfile | None:
        if not self.path.exists():
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a profile mapping")
        return UserProfile.from_dict(data)

    def save(self, profile: UserProfile) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        yaml_str = yaml.safe_dump(profile.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True)
        self.path.write_text(_HEADER + yaml_str, encoding="utf-8")
        log.info("Profile written → %s", self.path)
        return self.path

    def save_schedule(self, params: SearchParams, interval_hours: float = 24) -> dict[str, Any]:
        """Persist parameters for the next automatic discovery run."""
        schedule = {
            "params": asdict(params),
            "next_run": (datetime.now(timezone.utc) + timedelta(hours=interval_hours)).isoformat(),
            "enabled": True,
        }
        self.schedule_path.parent.mkdir(parents=True, exist_ok=True)
        self.schedule_path.write_text(yaml.safe_dump(schedule, sort_keys=False), encoding="utf-8")
        log.info("Scheduled automatic job discovery: %s", schedule["params"])
        return schedule

    def load_schedule(self) -> SearchParams | None:
        if not self.schedule_path.exists():
            return None
        data = yaml.safe_load(self.schedule_path.read_text(encoding="utf-8")) or {}
        if not data.get("enabled"):
            return None
        return SearchParams(**data.get("params", {}))
