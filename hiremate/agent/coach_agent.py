"""Agno coach service with streaming support.

Core module for the backend's interview coaching answers.

Design notes:

1. **Stateless agents** - The client owns the conversation and sends its
   recent turns with every request, so the agents run without storage.
   History is folded into the prompt, capped to the last 8 messages.

2. **Singleton** - Model clients are created once and reused across
   requests through ``get_coach_service``, which the API layer consumes as
   a FastAPI dependency.

3. **Two agents** - The coach answers general interview questions; the
   resume reader answers strictly from an uploaded resume.

4. **Streaming generator** - Agno yields run events; only content events
   are forwarded, as plain strings, to the SSE endpoint.
"""

import logging
from collections.abc import AsyncGenerator, Sequence

from agno.agent import Agent
from agno.models.openai import OpenAIChat

from hiremate.agent.config import AgentConfig, get_agent_config
from hiremate.models.schemas import ChatMessage

logger = logging.getLogger(__name__)

MAX_HISTORY_MESSAGES = 8
MAX_HISTORY_CHARS = 800
MAX_QUESTION_CHARS = 1200
MAX_RESUME_CHARS = 8000

RUN_CONTENT_EVENT = "RunContent"

COACH_DESCRIPTION = "You are HireMate, a professional Tech Interview Assistant."
COACH_INSTRUCTIONS = [
    "Use ### for headings only.",
    "Use - for bullet points only.",
    "Use **bold** sparingly and only when necessary.",
    "Never repeat words, phrases, or Markdown symbols.",
    "Each section must contain unique information.",
    "Be concise and clear; keep answers under 200 words unless detail is needed.",
    "Provide actionable advice focused on interview and career preparation.",
    "Do not echo the user's message; always provide a helpful, original answer.",
    "Do not use resume data; answer from general knowledge only.",
]

RESUME_DESCRIPTION = "You answer questions about a candidate's resume."
RESUME_INSTRUCTIONS = [
    "Answer ONLY using the resume provided in the message.",
    "If the answer is not in the resume, say 'Not available in resume'.",
    "Be concise and factual.",
]


def build_prompt(question: str, history: Sequence[ChatMessage] = ()) -> str:
    """Fold recent conversation and the new question into one prompt."""
    recent = list(history)[-MAX_HISTORY_MESSAGES:]
    lines: list[str] = []
    if recent:
        lines.append("Conversation so far:")
        for message in recent:
            speaker = "Candidate" if message.role == "user" else "Coach"
            lines.append(f"{speaker}: {message.content[:MAX_HISTORY_CHARS]}")
        lines.append("")
    lines.append(f"Question: {question[:MAX_QUESTION_CHARS]}")
    return "\n".join(lines)


def build_resume_prompt(question: str, resume_text: str) -> str:
    return f"Resume:\n\n{resume_text[:MAX_RESUME_CHARS]}\n\nQuestion: {question}"


class CoachService:
    """Service wrapping the Agno coach and resume reader agents."""

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the coach service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._coach = self._create_agent(COACH_DESCRIPTION, COACH_INSTRUCTIONS)
        self._resume_reader = self._create_agent(RESUME_DESCRIPTION, RESUME_INSTRUCTIONS)

    def _create_model(self) -> OpenAIChat:
        return OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

    def _create_agent(self, description: str, instructions: list[str]) -> Agent:
        """Create an Agno agent on its own model client.

        Returns:
            Configured Agent producing markdown output.
        """
        return Agent(
            model=self._create_model(),
            description=description,
            instructions=instructions,
            markdown=True,
        )

    async def stream_answer(
        self,
        question: str,
        history: Sequence[ChatMessage] = (),
    ) -> AsyncGenerator[str]:
        """Stream answer fragments for a question.

        Args:
            question: The candidate's question.
            history: Prior conversation, oldest first.

        Yields:
            Answer text fragments as they arrive.
        """
        response_stream = self._coach.arun(build_prompt(question, history), stream=True)

        async for chunk in response_stream:
            if getattr(chunk, "event", RUN_CONTENT_EVENT) != RUN_CONTENT_EVENT:
                continue
            if getattr(chunk, "content", None):
                yield chunk.content

    async def answer(
        self,
        question: str,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Get the complete answer for a question."""
        response = await self._coach.arun(build_prompt(question, history))
        return response.content or ""

    async def answer_from_resume(self, question: str, resume_text: str) -> str:
        """Answer a question strictly from the given resume text."""
        response = await self._resume_reader.arun(build_resume_prompt(question, resume_text))
        return (response.content or "").strip()


# Module-level singleton instance
_coach_service: CoachService | None = None


def get_coach_service() -> CoachService:
    """Get or create the global coach service.

    Returns:
        The CoachService instance.
    """
    global _coach_service
    if _coach_service is None:
        _coach_service = CoachService()
    return _coach_service
