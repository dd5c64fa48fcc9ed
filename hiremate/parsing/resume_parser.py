"""Resume text extraction using pypdf.

Validates an uploaded PDF and pulls its text so the resume analyzer can
answer questions about it.
"""

import io
import logging
import re

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

MAX_RESUME_SIZE = 5 * 1024 * 1024  # 5MB
PDF_MAGIC_BYTES = b"%PDF"
PREVIEW_LENGTH = 200


class ResumeDocument(BaseModel):
    """Text extracted from a resume PDF.

    Attributes:
        text: Page texts joined by blank lines, trimmed.
        pages: Number of pages in the document.
        author: Document author from the PDF metadata, if any.
    """

    text: str
    pages: int = Field(ge=0)
    author: str | None = None

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())

    def preview(self, length: int = PREVIEW_LENGTH) -> str:
        return self.text[:length]


class ResumeParseError(Exception):
    """Raised when a resume PDF cannot be read."""

    pass


def _check_bytes(file_content: bytes) -> None:
    """Reject empty, oversized and non-PDF uploads.

    Raises:
        ResumeParseError: If a check fails.
    """
    if not file_content:
        raise ResumeParseError("Empty file provided")

    if len(file_content) > MAX_RESUME_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise ResumeParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (5MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise ResumeParseError("Invalid PDF: file does not start with PDF header")


def _page_texts(reader: PdfReader) -> list[str]:
    texts: list[str] = []
    for number, page in enumerate(reader.pages, start=1):
        try:
            text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from resume page {number}: {e}")
            continue
        if text:
            # Collapse runs of spaces that layout extraction leaves behind
            texts.append(re.sub(r"[ \t]{2,}", " ", text).strip())
    return texts


def _author(reader: PdfReader) -> str | None:
    try:
        if reader.metadata and reader.metadata.get("/Author"):
            return str(reader.metadata.get("/Author"))
    except Exception as e:
        logger.warning(f"Failed to read resume metadata: {e}")
    return None


def parse_resume(file_content: bytes) -> ResumeDocument:
    """Extract the text of a resume PDF.

    A PDF without extractable text (e.g. a scanned image) parses
    successfully with empty text; callers decide whether that is usable.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        ResumeDocument with text, page count and author.

    Raises:
        ResumeParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _check_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise ResumeParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise ResumeParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise ResumeParseError("PDF contains no pages")

    text = "\n\n".join(_page_texts(reader)).strip()
    if not text:
        logger.warning("Resume contains no extractable text (may be scanned/image-based)")

    return ResumeDocument(text=text, pages=pages, author=_author(reader))
