"""Unit tests for conversation state."""

import pytest_check as check

from hiremate.client.session import ConversationSession, ConversationTurn, serialize_turns


def _session_with(count: int) -> ConversationSession:
    session = ConversationSession()
    for i in range(count):
        if i % 2 == 0:
            session.add_user_turn(f"q{i}")
        else:
            session.add_bot_turn(f"a{i}")
    return session


class TestConversationSession:
    """Tests for ConversationSession windows."""

    def test_turns_are_kept_in_order(self) -> None:
        """Turns are returned oldest first."""
        session = _session_with(3)

        assert [t.text for t in session.turns] == ["q0", "a1", "q2"]

    def test_recent_returns_tail(self) -> None:
        """recent() returns at most the requested number of newest turns."""
        session = _session_with(12)

        recent = session.recent(5)

        check.equal(len(recent), 5)
        check.equal(recent[-1].text, "a11")
        check.equal(recent[0].text, "a7")

    def test_recent_with_short_history(self) -> None:
        """recent() returns every turn when fewer exist."""
        assert len(_session_with(2).recent(10)) == 2

    def test_recent_skips_latest(self) -> None:
        """skip_latest leaves out the newest turns before counting."""
        session = _session_with(4)

        recent = session.recent(2, skip_latest=1)

        assert [t.text for t in recent] == ["a1", "q2"]

    def test_recent_zero_limit(self) -> None:
        """A zero window yields no turns."""
        assert _session_with(4).recent(0) == []

    def test_bounded_storage(self) -> None:
        """Oldest turns are dropped beyond max_turns."""
        session = ConversationSession(max_turns=3)
        for i in range(5):
            session.add_user_turn(str(i))

        check.equal(len(session), 3)
        check.equal(session.turns[0].text, "2")

    def test_clear(self) -> None:
        """clear() empties the conversation."""
        session = _session_with(4)
        session.clear()

        assert len(session) == 0


class TestConversationTurn:
    """Tests for turn conversion and serialization."""

    def test_bot_turn_maps_to_assistant(self) -> None:
        """Bot turns become assistant messages."""
        message = ConversationTurn(sender="bot", text="hello").to_message()

        check.equal(message.role, "assistant")
        check.equal(message.content, "hello")

    def test_user_turn_maps_to_user(self) -> None:
        """User turns keep the user role."""
        assert ConversationTurn(sender="user", text="q").to_message().role == "user"

    def test_serialize_turns(self) -> None:
        """Serialized turns carry sender, text and an ISO timestamp."""
        data = serialize_turns([ConversationTurn(sender="user", text="q")])

        check.equal(data[0]["sender"], "user")
        check.equal(data[0]["text"], "q")
        check.is_instance(data[0]["timestamp"], str)

    def test_serialize_turns_truncates_text(self) -> None:
        """max_chars cuts each text without touching the session."""
        turn = ConversationTurn(sender="bot", text="abcdef")

        data = serialize_turns([turn], max_chars=4)

        check.equal(data[0]["text"], "abcd")
        check.equal(turn.text, "abcdef")
