"""
Text extraction for uploaded resumes.

One strategy per supported MIME type:
- PDF: text layer via pypdf
- DOCX: paragraph and table text via python-docx
- DOC: best-effort printable-text scan (see extract_doc)
- TXT: UTF-8 decode
"""

import re
from collections.abc import Callable
from io import BytesIO

from docx import Document
from pypdf import PdfReader

from jobseeker.errors import ExtractionFailed, UnsupportedType
from jobseeker.repositories.document_store import MIME_DOC, MIME_DOCX, MIME_PDF, MIME_TEXT

DOC_SCAN_BYTES = 10_000
DOC_MIN_CHARS = 100
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n\r\t]")


def extract_pdf(content: bytes) -> str:
    """
    Extract text from a PDF file.

    Args:
        content: Raw bytes of the PDF file

    Returns:
        Extracted text content from all pages

    Raises:
        ExtractionFailed: parser error, or no text layer at all
    """
    try:
        reader = PdfReader(BytesIO(content))
        text_parts = []

        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
    except Exception as e:
        raise ExtractionFailed(f"Failed to extract PDF text: {e}") from e

    text = "\n\n".join(text_parts)
    if not text.strip():
        raise ExtractionFailed("Failed to extract PDF text: document has no text layer")
    return text


def extract_docx(content: bytes) -> str:
    """Extract body text (paragraphs, then table cells) from a DOCX archive."""
    try:
        document = Document(BytesIO(content))
    except Exception as e:
        raise ExtractionFailed(f"Failed to extract DOCX text: {e}") from e

    lines = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                lines.extend(p.text for p in cell.paragraphs)
    return "\n".join(lines)


def extract_doc(content: bytes) -> str:
    """
    Best-effort text from a legacy binary DOC file.

    Decodes the first DOC_SCAN_BYTES as Latin-1 and blanks out non-printable
    characters. This is a heuristic, not a DOC parser: it misfires on many real
    binary documents, and callers should prefer DOCX or PDF.
    """
    text = content[:DOC_SCAN_BYTES].decode("latin-1")
    cleaned = _NON_PRINTABLE.sub(" ", text)
    if len(cleaned.strip()) < DOC_MIN_CHARS:
        raise ExtractionFailed(
            "Failed to extract DOC text. Please convert to DOCX or PDF: "
            "could not extract meaningful text from DOC file"
        )
    return cleaned


def extract_plain_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


EXTRACTORS: dict[str, Callable[[bytes], str]] = {
    MIME_PDF: extract_pdf,
    MIME_DOCX: extract_docx,
    MIME_DOC: extract_doc,
    MIME_TEXT: extract_plain_text,
}


def extract_text(content: bytes, mime_type: str) -> str:
    """Dispatch to the strategy for mime_type. Deterministic, no side effects."""
    extractor = EXTRACTORS.get(mime_type)
    if extractor is None:
        raise UnsupportedType(f"Unsupported MIME type: {mime_type}")
    return extractor(content)


def extract_text_from_path(file_path: str, mime_type: str) -> str:
    """
    Extract text from a file path.

    Args:
        file_path: Path to the resume file
        mime_type: Declared MIME type of the file

    Returns:
        Extracted text content
    """
    with open(file_path, "rb") as f:
        return extract_text(f.read(), mime_type)
