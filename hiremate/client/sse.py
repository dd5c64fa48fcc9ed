"""Server-sent event decoding for the chat stream."""

from collections.abc import AsyncIterable, AsyncIterator

from pydantic import ValidationError

from hiremate.client.errors import ChatParseError
from hiremate.models.schemas import StreamEvent


async def iter_sse_data(lines: AsyncIterable[str]) -> AsyncIterator[str]:
    """Group SSE lines into event payloads.

    ``data:`` lines of one event are joined with newlines and dispatched on
    the blank line that ends the event. Comments and other fields (event,
    id, retry) are ignored. An unterminated event at end of input is still
    dispatched.

    Args:
        lines: Text lines without line terminators.

    Yields:
        The data payload of each event.
    """
    data: list[str] = []
    async for line in lines:
        line = line.rstrip("\r")
        if not line:
            if data:
                yield "\n".join(data)
                data = []
            continue
        if line.startswith(":"):
            continue
        field, _, value = line.partition(":")
        if field != "data":
            continue
        data.append(value[1:] if value.startswith(" ") else value)
    if data:
        yield "\n".join(data)


def decode_event(payload: str) -> StreamEvent:
    """Validate one event payload.

    Raises:
        ChatParseError: If the payload is not JSON or not a known event.
    """
    try:
        return StreamEvent.model_validate_json(payload)
    except ValidationError as e:
        raise ChatParseError(f"Malformed stream payload: {payload[:80]!r}") from e