"""Tests for the résumé parsing pipeline and profile mapping."""

from datetime import datetime, timedelta, timezone

import pytest

from jobflow import resume_parser
from jobflow.entities import EDUCATION_PLACEHOLDER, EXPERIENCE_PLACEHOLDER
from jobflow.errors import ExtractionFailure, UnsupportedFormat
from jobflow.models import ProfilePatch, UserProfile
from jobflow.resume_parser import ResumeParser


@pytest.fixture
def parser():
    return ResumeParser()


def test_parse_txt_upload(parser, sample_resume):
    parsed = parser.parse_resume(sample_resume.encode(), "resume.txt", "text/plain")
    assert parsed.contact.name == "Jane Doe"
    assert parsed.contact.email == "jane.doe@example.com"
    assert "Python" in parsed.skills
    assert parsed.experience.startswith("Senior Engineer")
    assert parsed.education == ("Bachelor of Science in Computer Science, State University",)
    assert set(parsed.sections) == {"general", "summary", "experience", "education", "skills"}


def test_parse_docx_upload(parser, sample_docx):
    parsed = parser.parse_resume(sample_docx, "resume.docx")
    assert parsed.contact.name == "Jane Doe"
    assert "Kubernetes" in parsed.skills


def test_parse_file(parser, tmp_path, sample_resume):
    path = tmp_path / "cv.txt"
    path.write_text(sample_resume, encoding="utf-8")
    assert parser.parse_file(path).contact.email == "jane.doe@example.com"


def test_png_is_rejected_before_any_parsing(parser, monkeypatch):
    def boom(text):
        raise AssertionError("segmentation should not run")

    monkeypatch.setattr(resume_parser, "segment", boom)
    with pytest.raises(UnsupportedFormat):
        parser.parse_resume(b"\x89PNG\r\n\x1a\n", "photo.png", "image/png")


def test_extraction_failure_propagates(parser):
    with pytest.raises(ExtractionFailure):
        parser.parse_resume(b"", "empty.txt")


def test_sparse_resume_degrades_to_sentinels(parser):
    parsed = parser.parse_resume(b"just a few words", "notes.txt")
    assert parsed.experience == EXPERIENCE_PLACEHOLDER
    assert parsed.education == (EDUCATION_PLACEHOLDER,)
    assert parsed.contact.name is None


def test_parsed_content_is_read_only(parser, sample_resume):
    parsed = parser.parse_resume(sample_resume.encode(), "resume.txt")
    with pytest.raises(TypeError):
        parsed.sections["extra"] = "nope"


def test_create_profile_from_resume_maps_fields(parser, sample_resume):
    parsed = parser.parse_resume(sample_resume.encode(), "resume.txt")
    patch = parser.create_profile_from_resume(parsed)
    assert patch.name == "Jane Doe"
    assert patch.phone == "(555) 123-4567"
    assert patch.location == "Austin, TX"
    assert patch.skills == parsed.skills
    assert patch.resume_text == sample_resume
    assert patch.updated_at.tzinfo is not None


def test_merge_creates_profile_on_first_parse(parser):
    profile = parser.merge_profile(None, ProfilePatch(name="Jane Doe", skills=("Python",)))
    assert profile.id
    assert profile.name == "Jane Doe"
    assert profile.skills == ["Python"]


def test_sparse_reparse_keeps_stored_history(parser):
    profile = UserProfile(
        id="p1",
        experience="Senior Engineer at Acme 2019-2023",
        education=["BSc Computer Science, MIT"],
    )
    parsed = parser.parse_resume(b"just a few words", "notes.txt")
    patch = parser.create_profile_from_resume(parsed)

    assert patch.experience is None
    assert patch.education == ()

    merged = parser.merge_profile(profile, patch)
    assert merged.experience == "Senior Engineer at Acme 2019-2023"
    assert merged.education == ["BSc Computer Science, MIT"]
    assert merged.resume_text == "just a few words"


def test_merge_overwrites_only_non_empty_fields(parser):
    old = datetime(2020, 1, 1, tzinfo=timezone.utc)
    profile = UserProfile(
        id="p1",
        name="Old Name",
        email="old@example.com",
        skills=["Go"],
        preferred_roles=["Backend Developer"],
        created_at=old,
        updated_at=old,
    )
    patch = ProfilePatch(name="Jane Doe", skills=("Python", "python", "React"))

    merged = parser.merge_profile(profile, patch)

    assert merged.id == "p1"
    assert merged.name == "Jane Doe"
    assert merged.email == "old@example.com"
    assert merged.skills == ["Python", "React"]
    assert merged.preferred_roles == ["Backend Developer"]
    assert merged.created_at == old
    assert merged.updated_at - old > timedelta(days=1)
