"""Canned coach replies used when the backend cannot be reached."""

import re

GREETING_REPLY = (
    "Hello! I'm HireMate, your AI interview coach. Ask me anything to get started."
)
EXPERIENCE_REPLY = (
    "When describing your background, be specific, quantify achievements, "
    "and link to the role. Want to practice one?"
)
STRENGTH_REPLY = (
    "Pick role-relevant strengths, give concrete examples, and show team impact. "
    "Which strength should we refine?"
)
WEAKNESS_REPLY = (
    "Choose a real weakness, explain your improvement plan, and show progress. "
    "Which area do you want to discuss?"
)
GENERIC_REPLY = (
    "I'm here to help you prepare for interviews. "
    "Ask a question or say 'start' to begin a practice session."
)

FALLBACK_REPLIES = (
    GREETING_REPLY,
    EXPERIENCE_REPLY,
    STRENGTH_REPLY,
    WEAKNESS_REPLY,
    GENERIC_REPLY,
)

_GREETING_KEYWORDS = ("hello", "hey")
# "hi" alone is matched as a word, otherwise "this" or "which" would greet
_HI_WORD = re.compile(r"\bhi\b")

# (substrings, reply), checked in order after the greeting rule
_KEYWORD_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("experience", "background"), EXPERIENCE_REPLY),
    (("strength", "skill"), STRENGTH_REPLY),
    (("weakness", "improve"), WEAKNESS_REPLY),
)


def fallback_reply(message: str | None) -> str:
    """Pick a canned reply by keyword.

    Every rule matches substrings, except "hi" which must be a whole word.
    """
    text = message.lower() if isinstance(message, str) else ""

    if any(keyword in text for keyword in _GREETING_KEYWORDS) or _HI_WORD.search(text):
        return GREETING_REPLY

    for keywords, reply in _KEYWORD_RULES:
        if any(keyword in text for keyword in keywords):
            return reply

    return GENERIC_REPLY
