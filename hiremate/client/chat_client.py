"""Streaming chat client with single-shot and local fallbacks.

Delivers a question to the backend coach and surfaces the answer as it is
generated:

1. **Streaming** - ``GET /api/chat/stream`` is consumed as server-sent
   events. Every ``chunk`` event grows the running answer and is reported
   through ``on_chunk``; the stream ends in exactly one of ``on_complete`` or
   ``on_error``.

2. **Single-shot** - ``POST /api/chat/ask`` returns the whole answer. It is
   the fallback when streaming fails and never raises: when the backend is
   unreachable a canned reply is computed locally.

Both paths retry once against the configured alternate base URL when the
connection itself fails.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Sequence
from typing import Any

import httpx

from hiremate.client.config import ClientConfig, get_client_config
from hiremate.client.errors import (
    ChatClientError,
    ChatParseError,
    ChatTimeoutError,
    ChatTransportError,
    ChatUpstreamError,
)
from hiremate.client.fallback import fallback_reply
from hiremate.client.session import (
    MAX_TURN_CHARS,
    ConversationSession,
    ConversationTurn,
    serialize_turns,
)
from hiremate.client.sse import decode_event, iter_sse_data
from hiremate.client.token_store import TokenStore
from hiremate.models.schemas import AskRequest, EventType

logger = logging.getLogger(__name__)

STREAM_PATH = "/api/chat/stream"
ASK_PATH = "/api/chat/ask"
CREDITS_PATH = "/api/credits"
DEFAULT_REPLY = "I had trouble processing that. Please try again."

ChunkCallback = Callable[[str, str], None]
CompleteCallback = Callable[[str], None]
ErrorCallback = Callable[[ChatClientError], None]


class StreamSession:
    """State of one streaming request/response cycle."""

    def __init__(self) -> None:
        self.base_url: str | None = None
        self.accumulated_text: str = ""
        self.chunks_received: int = 0
        self.retried: bool = False
        self.parse_failures: int = 0
        self.consecutive_parse_failures: int = 0
        self.error: ChatClientError | None = None
        self.completed: bool = False

    def append(self, fragment: str) -> str:
        self.accumulated_text += fragment
        self.chunks_received += 1
        return self.accumulated_text

    @property
    def finished(self) -> bool:
        return self.completed or self.error is not None


class ChatClient:
    """Chat client bound to one conversation.

    Args:
        config: Client configuration. Loads from environment if not provided.
        session: Conversation log owned by the calling widget.
        token_store: Source of the bearer token.
        transport: Optional httpx transport, used instead of the network.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: ConversationSession | None = None,
        token_store: TokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or get_client_config()
        self.session = session if session is not None else ConversationSession()
        self.token_store = token_store or TokenStore(self.config.token_file)
        self._transport = transport

    def _http_client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def send_streaming(
        self,
        question: str,
        on_chunk: ChunkCallback,
        on_complete: CompleteCallback,
        on_error: ErrorCallback,
        history: Sequence[ConversationTurn] | None = None,
    ) -> StreamSession:
        """Stream the answer to a question.

        Args:
            question: The user's question.
            on_chunk: Called with each fragment and the running answer.
            on_complete: Called once with the full answer.
            on_error: Called once with the failure instead of on_complete.
            history: Prior turns; defaults to this client's session.

        Returns:
            The finished stream session.

        Raises:
            ValueError: If the question is empty.
        """
        if not isinstance(question, str) or not question.strip():
            raise ValueError("question must be a non-empty string")

        window = self.config.stream_history_turns
        prior = list(history) if history is not None else self.session.recent(window)
        prior = prior[-window:] if window else []
        self.session.add_user_turn(question)

        params = {
            "question": question,
            "history": json.dumps(serialize_turns(prior, max_chars=MAX_TURN_CHARS)),
        }
        token = self.token_store.load()
        if token:
            params["token"] = token

        stream = StreamSession()
        try:
            await asyncio.wait_for(
                self._run_stream(stream, params, on_chunk),
                timeout=self.config.stream_timeout,
            )
        except asyncio.TimeoutError:
            stream.error = ChatTimeoutError("timeout")
        except ChatClientError as e:
            stream.error = e

        if stream.error is not None:
            logger.warning(f"Chat stream failed via {stream.base_url}: {stream.error}")
            on_error(stream.error)
        else:
            stream.completed = True
            self.session.add_bot_turn(stream.accumulated_text)
            on_complete(stream.accumulated_text)
        return stream

    async def _run_stream(
        self,
        stream: StreamSession,
        params: dict[str, str],
        on_chunk: ChunkCallback,
    ) -> None:
        urls = self.config.candidate_base_urls()
        for attempt, base_url in enumerate(urls):
            stream.base_url = base_url
            try:
                await self._consume(stream, f"{base_url}{STREAM_PATH}", params, on_chunk)
                return
            except httpx.TransportError as e:
                # Retrying after chunks arrived would restart the answer
                if stream.chunks_received or attempt + 1 >= len(urls):
                    raise ChatTransportError(f"Connection failed: {e}") from e
                logger.warning(
                    f"Stream connection to {base_url} failed ({e}); "
                    f"retrying against {urls[attempt + 1]}"
                )
                stream.retried = True
            except httpx.HTTPError as e:
                raise ChatTransportError(f"Stream read failed: {e}") from e

    async def _consume(
        self,
        stream: StreamSession,
        url: str,
        params: dict[str, str],
        on_chunk: ChunkCallback,
    ) -> None:
        limit = self.config.max_parse_failures
        async with (
            self._http_client(self.config.stream_timeout) as client,
            client.stream(
                "GET",
                url,
                params=params,
                headers={"Accept": "text/event-stream"},
            ) as response,
        ):
            if response.is_error:
                raise ChatUpstreamError(f"HTTP {response.status_code}")

            async for payload in iter_sse_data(response.aiter_lines()):
                try:
                    event = decode_event(payload)
                except ChatParseError as e:
                    stream.parse_failures += 1
                    stream.consecutive_parse_failures += 1
                    logger.warning(f"Skipping stream payload: {e}")
                    if limit and stream.consecutive_parse_failures >= limit:
                        raise ChatParseError(
                            f"{limit} consecutive malformed payloads"
                        ) from e
                    continue
                stream.consecutive_parse_failures = 0

                if event.type == EventType.CHUNK:
                    fragment = event.content or ""
                    on_chunk(fragment, stream.append(fragment))
                elif event.type == EventType.DONE:
                    return
                elif event.type == EventType.ERROR:
                    raise ChatUpstreamError(event.message or "Streaming failed")

        raise ChatTransportError("Stream closed before completion")

    async def send_non_streaming(
        self,
        question: str,
        *,
        record_user_turn: bool = True,
    ) -> str:
        """Ask a question in a single request.

        Never raises: when the backend cannot answer, a canned reply chosen
        from the question's keywords is returned instead.

        Args:
            question: The user's question.
            record_user_turn: False when a failed stream already recorded it.

        Returns:
            The answer text.
        """
        try:
            prior = self.session.recent(
                self.config.ask_history_turns,
                skip_latest=0 if record_user_turn else 1,
            )
            request = AskRequest(
                question=question,
                history=[turn.to_message() for turn in prior],
            )
            if record_user_turn:
                self.session.add_user_turn(question)

            data = await self._post_ask(request)
            reply = data.get("response") or data.get("message") or DEFAULT_REPLY
            self.session.add_bot_turn(reply)
            return reply

        except Exception as e:
            logger.error(f"Chat request failed, answering locally: {e}")
            return fallback_reply(question)

    async def _post_ask(self, request: AskRequest) -> dict[str, Any]:
        headers: dict[str, str] = {}
        token = self.token_store.load()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        urls = self.config.candidate_base_urls()
        async with self._http_client(self.config.request_timeout) as client:
            for attempt, base_url in enumerate(urls):
                try:
                    response = await client.post(
                        f"{base_url}{ASK_PATH}",
                        json=request.model_dump(),
                        headers=headers,
                    )
                except httpx.TransportError as e:
                    if attempt + 1 >= len(urls):
                        raise ChatTransportError(f"Connection failed: {e}") from e
                    logger.warning(
                        f"Ask request to {base_url} failed ({e}); "
                        f"retrying against {urls[attempt + 1]}"
                    )
                    continue

                if response.is_error:
                    raise ChatUpstreamError(f"Backend error: {response.status_code}")
                return response.json()

        raise ChatTransportError("No backend URL configured")

    async def fetch_credits(self) -> int | None:
        """Credit balance of the stored token, or None when unknown."""
        token = self.token_store.load()
        if not token:
            return None

        try:
            async with self._http_client(self.config.request_timeout) as client:
                response = await client.get(
                    f"{self.config.base_url}{CREDITS_PATH}",
                    headers={"Authorization": f"Bearer {token}"},
                )
                response.raise_for_status()
                return int(response.json()["credits"])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Could not fetch credit balance: {e}")
            return None

    async def reply(self, question: str, on_chunk: ChunkCallback | None = None) -> str:
        """Stream an answer, falling back to a single-shot request.

        Returns:
            The streamed answer, or the single-shot/canned reply when the
            stream failed.
        """
        stream = await self.send_streaming(
            question,
            on_chunk or _ignore_chunk,
            _ignore_text,
            _ignore_error,
        )
        if stream.error is None:
            return stream.accumulated_text
        return await self.send_non_streaming(question, record_user_turn=False)


def _ignore_chunk(fragment: str, total: str) -> None:
    pass


def _ignore_text(text: str) -> None:
    pass


def _ignore_error(error: ChatClientError) -> None:
    pass
