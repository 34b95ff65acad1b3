from __future__ import annotations

import logging
import re
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from resume_analyzer.core.errors import ExtractionFailure, TextTooShort, UnsupportedFormat
from resume_analyzer.schemas.resume import MIN_EXTRACTED_TEXT_LENGTH

from .models import ExtractedDocument

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = MIN_EXTRACTED_TEXT_LENGTH
SUPPORTED_EXTENSIONS = (".pdf", ".docx")

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def resolve_extension(file_path: str | Path, declared_extension: str | None = None) -> str:
    raw = declared_extension if declared_extension else Path(file_path).suffix
    extension = (raw or "").strip().lower()
    if extension and not extension.startswith("."):
        extension = f".{extension}"
    return extension


def _parse_pdf(file_path: Path) -> tuple[str, int, list[str]]:
    warnings: list[str] = []
    reader = PdfReader(str(file_path))
    text_parts: list[str] = []
    for page in reader.pages:
        page_text = (page.extract_text() or "").strip()
        if page_text:
            text_parts.append(page_text)
    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return "\n".join(text_parts), len(reader.pages), warnings


def _parse_docx(file_path: Path) -> tuple[str, None, list[str]]:
    warnings: list[str] = []
    document = Document(str(file_path))
    parts = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    # Skills are often laid out in tables, which python-docx keeps out of paragraphs.
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                cell_text = (cell.text or "").strip()
                if cell_text:
                    parts.append(cell_text)
    if not parts:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(parts), None, warnings


_PARSERS = {
    ".pdf": ("pdf", "PDF", _parse_pdf),
    ".docx": ("docx", "DOCX", _parse_docx),
}


def extract_document(file_path: str | Path, declared_extension: str | None = None) -> ExtractedDocument:
    extension = resolve_extension(file_path, declared_extension)
    if extension not in _PARSERS:
        raise UnsupportedFormat(
            f"Unsupported file format '{extension or 'unknown'}'. Only PDF and DOCX are allowed."
        )

    source_type, label, parser = _PARSERS[extension]
    path = Path(file_path)
    try:
        raw_text, page_count, warnings = parser(path)
    except Exception as exc:
        logger.warning("document_extraction_failed type=%s file=%s: %s", source_type, path.name, exc)
        raise ExtractionFailure(f"{label} parsing failed: {exc}") from exc

    text = normalize_whitespace(raw_text)
    if len(text) < MIN_TEXT_LENGTH:
        logger.info("document_text_too_short type=%s chars=%s", source_type, len(text))
        raise TextTooShort("Could not extract meaningful text from the file.")

    return ExtractedDocument(
        source_type=source_type,
        text=text,
        page_count=page_count,
        warnings=warnings,
    )


def extract_text(file_path: str | Path, declared_extension: str | None = None) -> str:
    return extract_document(file_path, declared_extension).text
