"""Resume parsing utilities for the resume analyzer service.

Responsibilities:
    - PDF validation (header, size, emptiness)
    - Text extraction with pypdf
    - Whitespace cleanup of extracted page text
"""

from hiremate.parsing.resume_parser import (
    MAX_RESUME_SIZE,
    ResumeDocument,
    ResumeParseError,
    parse_resume,
)

__all__ = ["MAX_RESUME_SIZE", "ResumeDocument", "ResumeParseError", "parse_resume"]
