"""Agno coach logic for interview answers.

Responsibilities:
    - Coach and resume reader agents on OpenAI-compatible models
    - Prompt assembly from client-supplied conversation history
    - Topic gating for off-scope questions
    - Answer normalization into the house markdown style

Maintains clean separation from the HTTP layer.
"""

from hiremate.agent.coach_agent import CoachService, get_coach_service
from hiremate.agent.config import AgentConfig, get_agent_config
from hiremate.agent.formatting import ensure_markdown, format_interview_answer
from hiremate.agent.topics import SCOPE_NOTICE, is_interview_related

__all__ = [
    "SCOPE_NOTICE",
    "AgentConfig",
    "CoachService",
    "ensure_markdown",
    "format_interview_answer",
    "get_agent_config",
    "get_coach_service",
    "is_interview_related",
]
