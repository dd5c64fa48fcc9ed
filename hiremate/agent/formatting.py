"""Normalization of coach answers before they are returned to the client.

LLM output occasionally repeats words, stacks markdown symbols or mixes
list styles. These helpers bring it back to the house style: ``###``
headings, ``-`` bullets, sparse bold, no duplicated tokens.
"""

import re

MAX_ANSWER_LENGTH = 1800

_POLITE_PREFACE = re.compile(
    r"^(sure|certainly|of course|absolutely|here(?:'|’)s|here are)[,\s]+",
    re.IGNORECASE,
)
_LEADING_MARKER = re.compile(r"^[-*•+]\s*")


def clean_markdown_artifacts(text: str) -> str:
    """Remove repeated markdown symbols and malformed list markers."""
    t = str(text or "")
    t = re.sub(r"\*{3,}", "**", t)
    t = re.sub(r"(\*\*)\s*(\*\*)+", "**", t)
    t = re.sub(r"(^|\n)\s*-\s*\*\s+", r"\1- ", t)
    t = re.sub(r"(^|\n)\s*\+{2,}\s+", r"\1- ", t)
    t = re.sub(r"(^|\n)\s*\*\s*\*\s+", r"\1- ", t)
    t = re.sub(r"\*\*\s+\*\*", "**", t)
    return t


def dedupe_text(text: str) -> str:
    """Collapse immediately repeated words and punctuation."""
    t = str(text)
    t = re.sub(r"[\t\r]+", " ", t)
    t = re.sub(r" +", " ", t)
    t = re.sub(r"\s*\n\s*", "\n", t)
    t = re.sub(r"\b([A-Za-z0-9]+)(\s+\1\b)+", r"\1", t, flags=re.IGNORECASE)
    t = re.sub(r"([.!?,;:])(\s*\1)+", r"\1", t)
    t = re.sub(r"\n{3,}", "\n\n", t)
    return t.strip()


def format_interview_answer(raw: str) -> str:
    """Normalize an answer for readability.

    Args:
        raw: Answer text as produced by the model.

    Returns:
        Answer with cleaned markdown, ``###`` headings, ``-`` bullets,
        and at most MAX_ANSWER_LENGTH characters (plus an ellipsis).
    """
    if not raw or not isinstance(raw, str):
        return raw

    text = raw.strip()
    text = clean_markdown_artifacts(text)
    text = dedupe_text(text)
    text = _POLITE_PREFACE.sub("", text)
    text = re.sub(r"^\s*#{1,6}\s+", "### ", text, flags=re.MULTILINE)
    text = re.sub(r"^\s*\d+\.\s+", "- ", text, flags=re.MULTILINE)
    text = re.sub(r"^\s*[•*+-]\s+", "- ", text, flags=re.MULTILINE)
    text = re.sub(r"\n{3,}", "\n\n", text)

    if len(text) > MAX_ANSWER_LENGTH:
        text = text[:MAX_ANSWER_LENGTH].rstrip() + "..."
    return text


def ensure_markdown(text: str) -> str:
    """Guarantee a bullet structure even when the model returned prose."""
    if not text:
        return text

    cleaned = clean_markdown_artifacts(text)
    if re.search(r"(^|\n)\s*-\s+", cleaned):
        return cleaned

    lines = [line for line in re.split(r"\n+", cleaned) if line.strip()]
    return "\n".join("- " + _LEADING_MARKER.sub("", line) for line in lines)
