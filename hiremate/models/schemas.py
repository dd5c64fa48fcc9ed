from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class EventType(str, Enum):
    """Discriminator values for chat stream events."""

    CONNECTED = "connected"
    CHUNK = "chunk"
    DONE = "done"
    ERROR = "error"


class StreamEvent(BaseModel):
    """A single server-sent event of the chat stream.

    Attributes:
        type: Event discriminator (connected, chunk, done, error).
        content: Text fragment carried by chunk events.
        message: Failure reason carried by error events.
    """

    type: EventType
    content: str | None = None
    message: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.type in (EventType.DONE, EventType.ERROR)


class ChatMessage(BaseModel):
    """A role-tagged message sent as conversation context.

    Attributes:
        role: The speaker, either 'user' or 'assistant'.
        content: The message text.
    """

    role: Literal["user", "assistant"] = Field(..., description="Message role")
    content: str = Field(..., description="The message content")


def _strip(v: str) -> str:
    if isinstance(v, str):
        return v.strip()
    return v


class AskRequest(BaseModel):
    """Request payload for the single-shot chat endpoint.

    Attributes:
        question: User's question.
        history: Prior conversation, oldest first.
    """

    question: str = Field(..., min_length=1)
    history: list[ChatMessage] = Field(default_factory=list)

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, v: str) -> str:
        """Strip whitespace from question before validation."""
        return _strip(v)


class AskResponse(BaseModel):
    """Response from the single-shot chat endpoint.

    Attributes:
        success: Always true for answered questions.
        response: The coach's formatted answer.
        question: Echo of the question that was answered.
        timestamp: ISO format time the answer was produced.
        credits_remaining: Balance after deduction, None for anonymous callers.
    """

    success: bool = True
    response: str
    question: str
    timestamp: str
    credits_remaining: int | None = None


class FailureResponse(BaseModel):
    """Body returned alongside non-2xx statuses that carry a user message."""

    success: bool = False
    message: str
    credits: int | None = None


class ResumeUploadResponse(BaseModel):
    """Response after resume upload processing.

    Attributes:
        success: Whether the upload was stored.
        message: Human readable outcome.
        filename: Name of the uploaded file.
        preview: First characters of the extracted text.
        length: Total length of the extracted text.
    """

    success: bool
    message: str
    filename: str
    preview: str
    length: int = Field(ge=0)


class ResumeAskRequest(BaseModel):
    """Question about the uploaded resume."""

    question: str = Field(..., min_length=1)

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, v: str) -> str:
        return _strip(v)


class ResumeAskResponse(BaseModel):
    success: bool = True
    answer: str
