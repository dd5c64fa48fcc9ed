"""Unit tests for SSE payload grouping and event decoding."""

from collections.abc import AsyncIterator

import pytest
import pytest_check as check

from hiremate.client.errors import ChatParseError
from hiremate.client.sse import decode_event, iter_sse_data
from hiremate.models.schemas import EventType


async def _lines(*lines: str) -> AsyncIterator[str]:
    for line in lines:
        yield line


async def _collect(*lines: str) -> list[str]:
    return [payload async for payload in iter_sse_data(_lines(*lines))]


class TestIterSseData:
    """Tests for grouping lines into event payloads."""

    async def test_one_payload_per_event(self) -> None:
        """Each blank-line terminated event yields its data."""
        payloads = await _collect(
            'data: {"type":"connected"}', "", 'data: {"type":"done"}', ""
        )

        assert payloads == ['{"type":"connected"}', '{"type":"done"}']

    async def test_multiline_data_is_joined(self) -> None:
        """Multiple data lines of one event are joined with newlines."""
        payloads = await _collect("data: first", "data: second", "")

        assert payloads == ["first\nsecond"]

    async def test_ignores_comments_and_other_fields(self) -> None:
        """Comments, event, id and retry fields do not produce payloads."""
        payloads = await _collect(
            ": keep-alive", "event: message", "id: 7", "retry: 100", "data: x", ""
        )

        assert payloads == ["x"]

    async def test_flushes_unterminated_event(self) -> None:
        """A final event without trailing blank line is still dispatched."""
        payloads = await _collect("data: tail")

        assert payloads == ["tail"]

    async def test_strips_carriage_returns(self) -> None:
        """CRLF framed lines decode the same as LF framed lines."""
        payloads = await _collect("data: x\r", "\r")

        assert payloads == ["x"]

    async def test_blank_lines_without_data_are_skipped(self) -> None:
        """Consecutive blank lines do not produce empty payloads."""
        payloads = await _collect("", "", "data:no-space", "", "")

        assert payloads == ["no-space"]


class TestDecodeEvent:
    """Tests for event payload validation."""

    def test_decodes_chunk(self) -> None:
        """Chunk events carry their content."""
        event = decode_event('{"type": "chunk", "content": "Hi"}')

        check.equal(event.type, EventType.CHUNK)
        check.equal(event.content, "Hi")
        check.is_false(event.is_terminal)

    def test_done_and_error_are_terminal(self) -> None:
        """Done and error events end the stream."""
        check.is_true(decode_event('{"type": "done"}').is_terminal)
        check.is_true(decode_event('{"type": "error", "message": "x"}').is_terminal)

    def test_rejects_invalid_json(self) -> None:
        """Non-JSON payloads raise ChatParseError."""
        with pytest.raises(ChatParseError, match="Malformed"):
            decode_event("not json")

    def test_rejects_unknown_type(self) -> None:
        """Unknown event types raise ChatParseError."""
        with pytest.raises(ChatParseError):
            decode_event('{"type": "heartbeat"}')
