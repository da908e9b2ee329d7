"""End-to-end pass: résumé → profile → search → recommendations → letters."""

from __future__ import annotations

import pytest

from jobflow import agent
from jobflow.agent import Services, run
from jobflow.aggregator import JobAggregator
from jobflow.matching import MatchingService
from jobflow.models import JobListing
from jobflow.profile_store import ProfileStore
from jobflow.resume_parser import ResumeParser
from jobflow.sources import JobSource


class StaticSource(JobSource):
    name = "Static"

    def __init__(self, jobs):
        super().__init__(timeout=1.0)
        self.jobs = jobs
        self.seen_params = None

    def search(self, params):
        self.seen_params = params
        return self.jobs[: params.limit]


JOBS = [
    JobListing(id="s1", title="Python Developer", company="Acme", location="Austin, TX",
               skills=["Python", "AWS", "Docker"]),
    JobListing(id="s2", title="Chef", company="Bistro", location="Paris", skills=["Cooking"]),
]


@pytest.fixture(autouse=True)
def _no_repo_dirs(monkeypatch):
    monkeypatch.setattr(agent, "ensure_dirs", lambda: None)


@pytest.fixture
def services(tmp_path):
    source = StaticSource(JOBS)
    return Services(
        parser=ResumeParser(),
        matcher=MatchingService(min_score=10, recommendation_limit=10),
        aggregator=JobAggregator([source], fallback=StaticSource([]), timeout=2.0),
        store=ProfileStore(tmp_path / "profile.yaml", tmp_path / "discovery.yaml"),
    )


def test_full_pass(tmp_path, services, sample_resume):
    resume = tmp_path / "resume.txt"
    resume.write_text(sample_resume, encoding="utf-8")

    result = run(resume_path=resume, services=services, save_letters=False, schedule_hours=24)

    assert result["parse_error"] is None
    assert result["jobs_found"] == 2
    assert result["source"] == "Static"
    assert [r["id"] for r in result["recommendations"]] == ["s1"]
    assert result["cover_letters"] == 1
    assert result["completeness"] > 0

    saved = services.store.load()
    assert saved.name == "Jane Doe"
    assert "Python" in saved.skills
    assert services.store.load_schedule() is not None


def test_unreadable_resume_reports_user_message(tmp_path, services):
    resume = tmp_path / "photo.png"
    resume.write_bytes(b"\x89PNG\r\n\x1a\n")

    result = run(resume_path=resume, services=services, save_letters=False)

    assert result["parse_error"] == "Unsupported file type. Please upload a PDF or Word document."
    assert result["jobs_found"] == 0
    assert services.store.load() is None
