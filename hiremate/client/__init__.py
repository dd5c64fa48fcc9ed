"""Streaming chat client for the HireMate coach backend.

Responsibilities:
    - Transport selection between the SSE stream and the single-shot call
    - Incremental assembly of streamed answer fragments
    - Conversation state owned by each chat widget
    - Canned local replies when the backend is unreachable

Holds no module-level state: every chat widget builds its own client and
conversation session.
"""

from hiremate.client.chat_client import ChatClient, StreamSession
from hiremate.client.config import ClientConfig, get_client_config
from hiremate.client.errors import (
    ChatClientError,
    ChatParseError,
    ChatTimeoutError,
    ChatTransportError,
    ChatUpstreamError,
)
from hiremate.client.fallback import fallback_reply
from hiremate.client.session import ConversationSession, ConversationTurn
from hiremate.client.token_store import TokenStore

__all__ = [
    "ChatClient",
    "ChatClientError",
    "ChatParseError",
    "ChatTimeoutError",
    "ChatTransportError",
    "ChatUpstreamError",
    "ClientConfig",
    "ConversationSession",
    "ConversationTurn",
    "StreamSession",
    "TokenStore",
    "fallback_reply",
    "get_client_config",
]
