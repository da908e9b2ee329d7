"""Shared fixtures: isolated environment and sample résumés."""

from __future__ import annotations

import io
import os
import zipfile

import pytest

# Keep test runs from writing log files into the checkout.
os.environ.setdefault("JOBFLOW_LOG_FILE", "0")

SAMPLE_RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567 | Austin, TX

Summary
Backend developer focused on Python services.

Experience
Senior Engineer, Acme Corp, 2019 - 2023
Built Python APIs on AWS with Docker and Kubernetes.

Education
Bachelor of Science in Computer Science, State University

Skills
Python, React, Node.js, PostgreSQL, C++
"""


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "ADZUNA_APP_ID",
        "ADZUNA_APP_KEY",
        "ADZUNA_COUNTRY",
        "JSEARCH_API_KEY",
        "JOBFLOW_ENABLE_HIMALAYAS",
        "JOBFLOW_ENABLE_REMOTIVE",
        "JOBFLOW_SOURCE_TIMEOUT",
        "JOBFLOW_SEARCH_LIMIT",
        "JOBFLOW_MIN_MATCH_SCORE",
        "JOBFLOW_RECOMMENDATION_LIMIT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


def build_docx(paragraphs: list[str]) -> bytes:
    ns = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
    body = "".join(f"<w:p><w:r><w:t>{p}</w:t></w:r></w:p>" for p in paragraphs)
    xml = f'<?xml version="1.0" encoding="UTF-8"?><w:document xmlns:w="{ns}"><w:body>{body}</w:body></w:document>'
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("word/document.xml", xml)
    return buf.getvalue()


@pytest.fixture
def sample_docx(sample_resume: str) -> bytes:
    return build_docx(sample_resume.split("\n"))
