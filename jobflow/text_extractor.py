"""Turn raw résumé bytes into plain text, dispatched by document kind.

PDF goes through two tiers: the pypdf text layer, then a lossy scan of
``stream … endstream`` bodies for files pypdf cannot read. The scan is a
heuristic, not a PDF decoder; it gives no fidelity guarantee and fails
outright when a file carries no stream markers. DOCX is read with the
stdlib zip + XML modules. Legacy DOC is a lossy byte decode.
"""
from __future__ import annotations

import io
import re
import zipfile
from pathlib import Path
from typing import Callable
from xml.etree import ElementTree

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from jobflow.errors import ExtractionFailure, UnsupportedFormat
from jobflow.log import get_logger
from jobflow.models import DocumentKind, RawDocument

log = get_logger(__name__)

_STREAM_RE = re.compile(r"stream\s*(.*?)\s*endstream", re.DOTALL)
_UNPRINTABLE_RE = re.compile(r"[^\w\s@.-]")
_WS_RE = re.compile(r"\s+")
_DOCX_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def read_document(path: Path, media_type: str | None = None) -> RawDocument:
    """Load a résumé file from disk."""
    return RawDocument.from_upload(Path(path).read_bytes(), Path(path).name, media_type)


def extract_text(doc: RawDocument) -> str:
    """Return plain text for *doc* or raise a ``ParseError`` subclass."""
    extractor = _EXTRACTORS.get(doc.kind)
    if extractor is None:
        raise UnsupportedFormat(doc.name, doc.media_type)

    log.debug("Extracting %s text from %s (%d bytes)", doc.kind.value, doc.name, len(doc.data))
    text = extractor(doc.data)
    if not text.strip():
        raise ExtractionFailure(f"No readable text found in {doc.name or 'document'}")
    return text


def _clean_binary_text(text: str) -> str:
    text = _UNPRINTABLE_RE.sub(" ", text)
    return _WS_RE.sub(" ", text).strip()


# ── PDF ──────────────────────────────────────────────────────────────────


def _read_pdf_text_layer(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages = [(page.extract_text() or "") for page in reader.pages]
    return "\n".join(pages)


def _scan_pdf_streams(data: bytes) -> str:
    raw = data.decode("utf-8", errors="replace")
    bodies = _STREAM_RE.findall(raw)
    if not bodies:
        raise ExtractionFailure("Could not extract text from PDF: no content streams found")
    return _clean_binary_text(" ".join(bodies))


def _extract_pdf(data: bytes) -> str:
    try:
        text = _read_pdf_text_layer(data)
    except (PyPdfError, ValueError, KeyError, OSError) as exc:
        log.warning("pypdf could not read PDF (%s), scanning content streams", exc)
        text = ""
    if text.strip():
        return text
    log.debug("PDF text layer empty, scanning content streams")
    return _scan_pdf_streams(data)


# ── Word ─────────────────────────────────────────────────────────────────


def _extract_docx(data: bytes) -> str:
    """Parse DOCX using only stdlib (zipfile + xml)."""
    texts: list[str] = []
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            with zf.open("word/document.xml") as f:
                tree = ElementTree.parse(f)
    except (zipfile.BadZipFile, KeyError, ElementTree.ParseError) as exc:
        raise ExtractionFailure(f"Failed to parse Word document: {exc}") from exc

    for para in tree.iter(f"{_DOCX_NS}p"):
        parts = [node.text for node in para.iter(f"{_DOCX_NS}t") if node.text]
        if parts:
            texts.append("".join(parts))
    return "\n".join(texts)


def _extract_doc(data: bytes) -> str:
    return _clean_binary_text(data.decode("utf-8", errors="replace"))


def _extract_txt(data: bytes) -> str:
    return data.decode("utf-8", errors="ignore")


_EXTRACTORS: dict[DocumentKind, Callable[[bytes], str]] = {
    DocumentKind.PDF: _extract_pdf,
    DocumentKind.DOCX: _extract_docx,
    DocumentKind.DOC: _extract_doc,
    DocumentKind.TXT: _extract_txt,
}
