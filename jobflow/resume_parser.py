"""Extract structured profile data from a résumé document.

Supports PDF, DOCX, legacy DOC and plain text. Text extraction is the
only stage that can fail; section and entity extraction always produce a
value, falling back to placeholder sentinels.
"""
from __future__ import annotations

from pathlib import Path

from jobflow import entities
from jobflow.log import get_logger
from jobflow.models import ParsedContent, ProfilePatch, RawDocument, UserProfile, utcnow
from jobflow.sections import segment
from jobflow.text_extractor import extract_text, read_document

log = get_logger(__name__)


class ResumeParser:
    """Stateless résumé parsing service."""

    def parse_resume(
        self, data: bytes, declared_name: str, media_type: str | None = None
    ) -> ParsedContent:
        """Parse uploaded bytes. Raises ``UnsupportedFormat`` / ``ExtractionFailure``."""
        return self.parse_document(RawDocument.from_upload(data, declared_name, media_type))

    def parse_file(self, path: Path) -> ParsedContent:
        return self.parse_document(read_document(Path(path)))

    def parse_document(self, doc: RawDocument) -> ParsedContent:
        log.info("Parsing résumé %s (%s)", doc.name or "<upload>", doc.kind.value)
        text = extract_text(doc)
        sections = segment(text)

        parsed = ParsedContent(
            text=text,
            skills=tuple(entities.extract_skills(text)),
            experience=entities.extract_experience(text, sections),
            education=tuple(entities.extract_education(text, sections)),
            contact=entities.extract_contact(text),
            sections=sections,
        )
        log.info(
            "Résumé parsed — name=%s, skills=%d, sections=%d",
            parsed.contact.name, len(parsed.skills), len(parsed.sections),
        )
        return parsed

    @staticmethod
    def create_profile_from_resume(parsed: ParsedContent) -> ProfilePatch:
        contact = parsed.contact
        # Placeholders mean "not found" and must not overwrite stored history
        experience = None if parsed.experience == entities.EXPERIENCE_PLACEHOLDER else parsed.experience
        education = tuple(e for e in parsed.education if e != entities.EDUCATION_PLACEHOLDER)
        return ProfilePatch(
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            location=contact.location,
            skills=parsed.skills,
            experience=experience,
            education=education,
            resume_text=parsed.text,
            updated_at=utcnow(),
        )

    @staticmethod
    def merge_profile(profile: UserProfile | None, patch: ProfilePatch) -> UserProfile:
        """Apply *patch*; creates the profile on first successful parse."""
        if profile is None:
            profile = UserProfile.new(created_at=patch.updated_at)
            log.info("Created profile %s from résumé", profile.id)
        return patch.apply_to(profile)
