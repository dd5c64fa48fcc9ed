"""Conversation state owned by one chat widget.

Each chat page creates its own ``ConversationSession`` and hands it to its
``ChatClient``; nothing here is shared at module level.
"""

from collections import deque
from collections.abc import Sequence
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from hiremate.models.schemas import ChatMessage

# Oldest turns are dropped beyond this; requests only ever read the tail.
MAX_STORED_TURNS = 50
# The backend reads no more than this per history message
MAX_TURN_CHARS = 800


class ConversationTurn(BaseModel):
    """One message of the conversation.

    Attributes:
        sender: Who produced the text, 'user' or 'bot'.
        text: The message text.
        timestamp: When the turn was recorded.
    """

    sender: Literal["user", "bot"]
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_message(self) -> ChatMessage:
        """Map the turn onto a role-tagged message."""
        role = "user" if self.sender == "user" else "assistant"
        return ChatMessage(role=role, content=self.text)


class ConversationSession:
    """Append-only log of conversation turns with a bounded window."""

    def __init__(self, max_turns: int = MAX_STORED_TURNS) -> None:
        self._turns: deque[ConversationTurn] = deque(maxlen=max_turns)

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def turns(self) -> list[ConversationTurn]:
        return list(self._turns)

    def add_user_turn(self, text: str) -> ConversationTurn:
        return self._append(ConversationTurn(sender="user", text=text))

    def add_bot_turn(self, text: str) -> ConversationTurn:
        return self._append(ConversationTurn(sender="bot", text=text))

    def _append(self, turn: ConversationTurn) -> ConversationTurn:
        self._turns.append(turn)
        return turn

    def recent(self, limit: int, *, skip_latest: int = 0) -> list[ConversationTurn]:
        """Return at most ``limit`` most recent turns, oldest first.

        Args:
            limit: Maximum number of turns to return.
            skip_latest: Number of newest turns to leave out before counting.
        """
        turns = list(self._turns)
        if skip_latest:
            turns = turns[:-skip_latest]
        if limit <= 0:
            return []
        return turns[-limit:]

    def clear(self) -> None:
        self._turns.clear()


def serialize_turns(
    turns: Sequence[ConversationTurn],
    max_chars: int | None = None,
) -> list[dict[str, str]]:
    """Serialize turns for the stream endpoint's ``history`` parameter.

    Args:
        turns: Turns to serialize, oldest first.
        max_chars: Cut each turn's text to this length when given.
    """
    items = [turn.model_dump(mode="json") for turn in turns]
    if max_chars is not None:
        for item in items:
            item["text"] = item["text"][:max_chars]
    return items
