"""Pydantic models for API requests, responses and stream events.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - StreamEvent: One server-sent event of the chat stream
    - ChatMessage: Role-tagged message sent as conversation context
    - AskRequest / AskResponse: Single-shot chat exchange
    - ResumeUploadResponse / ResumeAskRequest / ResumeAskResponse:
      Resume analyzer service payloads
    - FailureResponse: Generic ``success: false`` body
"""

from hiremate.models.schemas import (
    AskRequest,
    AskResponse,
    ChatMessage,
    EventType,
    FailureResponse,
    ResumeAskRequest,
    ResumeAskResponse,
    ResumeUploadResponse,
    StreamEvent,
)

__all__ = [
    "AskRequest",
    "AskResponse",
    "ChatMessage",
    "EventType",
    "FailureResponse",
    "ResumeAskRequest",
    "ResumeAskResponse",
    "ResumeUploadResponse",
    "StreamEvent",
]
