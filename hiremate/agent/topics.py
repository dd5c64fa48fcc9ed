"""Scope gate keeping the coach on interview, career and tech topics."""

import re

SCOPE_NOTICE = (
    "I specialize in interview, tech, and career topics. "
    "Please ask about job interviews, coding, or professional development!"
)

_SHORT_TECH_TOKENS = frozenset({
    "python", "java", "javascript", "typescript", "js", "ts", "c", "c++", "cpp",
    "go", "golang", "rust", "sql", "html", "css", "react", "next", "next.js",
    "node", "node.js", "express", "docker", "kubernetes", "k8s", "aws", "azure",
    "gcp", "mongo", "mongodb", "mysql", "postgres", "postgresql", "leetcode",
    "dsa", "big-o", "ai", "ml", "nlp", "llm", "devops", "git", "github", "gitlab",
})

_ALLOW_KEYWORDS = (
    # interview / career
    "interview", "resume", "cv", "cover letter", "salary", "offer", "negotiation",
    "behavioural", "behavioral", "star method", "hr", "recruiter", "career", "job",
    "hiring", "onsite", "phone screen",
    # programming / tech
    "algorithm", "data structure", "system design", "database", "sql", "api",
    "frontend", "backend", "fullstack", "devops", "cloud", "aws", "azure", "gcp",
    "docker", "kubernetes", "python", "javascript", "typescript", "java", "c++",
    "react", "next.js", "node", "express", "microservices", "testing", "unit test",
    "debug", "performance", "security", "oauth", "jwt", "encryption",
)

_BLOCK_KEYWORDS = (
    "recipe", "cooking", "travel", "tourism", "vacation", "relationship", "dating",
    "movie", "music", "celebrity", "sports score", "astrology", "horoscope",
    "lottery", "gambling", "medical advice", "diagnosis", "therapy",
)

_SMALL_TALK = (
    re.compile(r"^(hi|hello|hey|greetings|good (morning|afternoon|evening))\b"),
    re.compile(r"^(thanks|thank you|thx|ty)\b"),
    re.compile(r"^(how are you|how('s| is) it going|what's up|sup|wassup)\b"),
    re.compile(r"^(bye|goodbye|see you|cya)\b"),
    re.compile(r"^what('s| is) the (weather|temperature)\b"),
)


def is_interview_related(question: str) -> bool:
    """Decide whether a question is in the coach's scope.

    Known tech tokens and allow-listed keywords win over the block list;
    small talk is declined; anything else is allowed and left to the
    coach's instructions.
    """
    q = (question or "").lower().strip()

    if len(q.split()) <= 2 and q in _SHORT_TECH_TOKENS:
        return True

    if any(keyword in q for keyword in _ALLOW_KEYWORDS):
        return True

    if any(keyword in q for keyword in _BLOCK_KEYWORDS):
        return False

    if any(pattern.search(q) for pattern in _SMALL_TALK):
        return False

    return True
