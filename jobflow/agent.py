"""
Job search assistant — one pass.

Runs: parse résumé → merge profile → search sources → rank/recommend → cover letters.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jobflow.aggregator import JobAggregator, discovery_params
from jobflow.config import DATA_DIR, Settings, ensure_dirs, get_resume_path
from jobflow.cover_letter import generate_cover_letter, save_cover_letter
from jobflow.errors import ParseError
from jobflow.log import get_logger
from jobflow.matching import MatchingService
from jobflow.profile_store import ProfileStore
from jobflow.resume_parser import ResumeParser

log = get_logger(__name__)


@dataclass
class Services:
    parser: ResumeParser
    matcher: MatchingService
    aggregator: JobAggregator
    store: ProfileStore


def build_services(settings: Settings | None = None, store: ProfileStore | None = None) -> Services:
    """Construct every service once; callers pass them around explicitly."""
    settings = settings or Settings.from_env()
    store = store or ProfileStore()
    profile = store.load()
    locations = profile.preferred_locations if profile else ()
    return Services(
        parser=ResumeParser(),
        matcher=MatchingService(settings.min_match_score, settings.recommendation_limit),
        aggregator=JobAggregator.from_env(settings, locations),
        store=store,
    )


def run(
    *,
    resume_path: Path | None = None,
    services: Services | None = None,
    top_letters: int = 3,
    save_letters: bool = True,
    schedule_hours: float | None = None,
) -> dict[str, Any]:
    ensure_dirs()
    services = services or build_services()
    profile = services.store.load()

    # 1. Résumé → profile
    resume_path = resume_path or get_resume_path()
    parse_error: str | None = None
    if resume_path is not None:
        try:
            parsed = services.parser.parse_file(resume_path)
            patch = services.parser.create_profile_from_resume(parsed)
            profile = services.parser.merge_profile(profile, patch)
            services.store.save(profile)
        except ParseError as exc:
            log.error("Résumé parsing failed: %s", exc)
            parse_error = exc.user_message
    else:
        log.warning("No résumé found — add a PDF/DOCX to the resume/ folder")

    if profile is None:
        return {
            "jobs_found": 0, "recommended": 0, "cover_letters": 0,
            "source": "", "parse_error": parse_error,
            "completeness": None, "recommendations": [],
        }

    # 2. Search
    params = discovery_params(profile, limit=services.aggregator.default_limit)
    result = services.aggregator.search_jobs(params)

    # 3. Rank and recommend
    recommended = services.matcher.generate_recommendations(profile, result.jobs)
    completeness = services.matcher.analyze_profile_completeness(profile)
    if result.is_empty:
        log.warning("No jobs matched — try broadening your preferred roles or locations")

    # 4. Cover letters for top matches
    letters: dict[str, str] = {}
    for job in recommended[:top_letters]:
        content = generate_cover_letter(profile, job)
        letters[job.id] = str(save_cover_letter(job, content, DATA_DIR)) if save_letters else content

    if schedule_hours:
        services.store.save_schedule(params, schedule_hours)

    log.info(
        "Run complete — found=%d, recommended=%d, letters=%d, sources=%s",
        len(result.jobs), len(recommended), len(letters), result.source or "none",
    )
    return {
        "jobs_found": len(result.jobs),
        "recommended": len(recommended),
        "cover_letters": len(letters),
        "source": result.source,
        "parse_error": parse_error,
        "completeness": completeness.score,
        "recommendations": [
            {"id": j.id, "title": j.title, "company": j.company, "score": j.match_score, "url": j.url}
            for j in recommended
        ],
    }


def main() -> None:
    result = run()
    log.info("  Jobs found: %d", result["jobs_found"])
    log.info("  Recommended: %d", result["recommended"])
    log.info("  Cover letters: %d", result["cover_letters"])
    if result["parse_error"]:
        log.info("  Résumé: %s", result["parse_error"])
    for rec in result["recommendations"]:
        log.info("  %3d%%  %s @ %s", rec["score"] or 0, rec["title"], rec["company"])


if __name__ == "__main__":
    main()
