#!/usr/bin/env python3
"""Entry point to run one résumé → search → recommend pass."""
from __future__ import annotations

import sys
from pathlib import Path

from jobflow.agent import run
from jobflow.log import get_logger

log = get_logger(__name__)


if __name__ == "__main__":
    resume = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    if resume is not None and not resume.is_file():
        log.error("Résumé not found: %s", resume)
        sys.exit(1)

    result = run(resume_path=resume, top_letters=3)
    log.info("Run complete.")
    log.info("  Jobs found: %d (%s)", result["jobs_found"], result["source"] or "no sources")
    log.info("  Recommended: %d", result["recommended"])
    log.info("  Cover letters generated: %d", result["cover_letters"])
    if result["completeness"] is not None:
        log.info("  Profile completeness: %d%%", result["completeness"])
    if result["parse_error"]:
        log.warning("  %s", result["parse_error"])
        sys.exit(2)
