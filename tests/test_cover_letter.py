"""Tests for template cover letters."""

from jobflow.cover_letter import generate_cover_letter, save_cover_letter
from jobflow.entities import EXPERIENCE_PLACEHOLDER
from jobflow.models import JobListing, UserProfile


def make_job(location="Remote"):
    return JobListing(id="remotive_abc", title="Python Developer", company="Acme/Labs", location=location)


def test_remote_job_mentions_flexibility():
    profile = UserProfile(id="p1", name="Jane Doe", skills=["Python", "Django"],
                          experience="Backend engineer at Globex.\nMore detail")
    letter = generate_cover_letter(profile, make_job())
    assert "Python Developer position at Acme/Labs" in letter
    assert "background in Backend engineer at Globex," in letter
    assert "remote work flexibility" in letter
    assert letter.rstrip().endswith("Jane Doe")


def test_on_site_job_mentions_location():
    profile = UserProfile(id="p1", skills=["Python"])
    letter = generate_cover_letter(profile, make_job(location="Austin, TX"))
    assert "it's located in Austin, TX" in letter


def test_defaults_for_sparse_profile():
    profile = UserProfile(id="p1", experience=EXPERIENCE_PLACEHOLDER)
    letter = generate_cover_letter(profile, make_job())
    assert "background in software development" in letter
    assert letter.rstrip().endswith("Job Seeker")


def test_lists_at_most_five_skills():
    profile = UserProfile(id="p1", skills=["A1", "B2", "C3", "D4", "E5", "F6", "G7"])
    letter = generate_cover_letter(profile, make_job())
    assert letter.count("• Proficiency in") == 5
    assert "F6" not in letter


def test_save_cover_letter(tmp_path):
    path = save_cover_letter(make_job(), "Dear Hiring Manager", data_dir=tmp_path)
    assert path.parent == tmp_path
    assert "Acme_Labs" in path.name
    assert path.read_text(encoding="utf-8") == "Dear Hiring Manager"
