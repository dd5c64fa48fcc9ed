"""Chat endpoints: SSE stream and single-shot ask.

The stream speaks a small JSON event protocol, one ``data:`` message per
event: ``connected`` first, ``chunk`` per answer fragment, and ``done``
last. Failures are reported as an ``error`` event before ``done``.
"""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, StreamingResponse

from hiremate.agent.coach_agent import CoachService, get_coach_service
from hiremate.agent.formatting import ensure_markdown, format_interview_answer
from hiremate.agent.topics import SCOPE_NOTICE, is_interview_related
from hiremate.api.credits import (
    INSUFFICIENT_CREDITS_MESSAGE,
    CreditLedger,
    get_bearer_token,
    get_credit_ledger,
)
from hiremate.models.schemas import (
    AskRequest,
    AskResponse,
    ChatMessage,
    EventType,
    FailureResponse,
    StreamEvent,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])

# Generation is cut short after this, leaving the client's 30s budget for done
STREAM_DEADLINE_SECONDS = 25.0
GENERATION_FAILED_MESSAGE = "Failed to generate response"


def format_sse(event: StreamEvent) -> str:
    """Frame an event as one SSE message."""
    return f"data: {event.model_dump_json(exclude_none=True)}\n\n"


def _history_item(item: dict) -> ChatMessage:
    role = item.get("role") or ("user" if item.get("sender") == "user" else "assistant")
    content = item.get("content") or item.get("text") or ""
    return ChatMessage(role=role, content=str(content))


def parse_history_param(raw: str | None) -> list[ChatMessage]:
    """Decode the ``history`` query parameter.

    Accepts turns shaped ``{sender, text}`` or ``{role, content}``.
    Malformed input is logged and treated as no history.
    """
    if not raw:
        return []
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise ValueError("history must be a JSON list")
        return [_history_item(item) for item in items]
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Ignoring malformed history parameter: {e}")
        return []


async def _event_stream(
    question: str,
    history: list[ChatMessage],
    token: str | None,
    coach: CoachService,
    ledger: CreditLedger,
) -> AsyncGenerator[str]:
    yield format_sse(StreamEvent(type=EventType.CONNECTED))

    if token and not ledger.has_credits(token):
        yield format_sse(StreamEvent(type=EventType.ERROR, message=INSUFFICIENT_CREDITS_MESSAGE))
        yield format_sse(StreamEvent(type=EventType.DONE))
        return

    if not is_interview_related(question):
        yield format_sse(StreamEvent(type=EventType.CHUNK, content=SCOPE_NOTICE))
        yield format_sse(StreamEvent(type=EventType.DONE))
        return

    # Charged up front so concurrent requests cannot spend the same credit
    if token:
        ledger.deduct(token)

    sent = 0
    try:
        async with aclosing(_fragments_until_deadline(coach, question, history)) as fragments:
            async for content in fragments:
                sent += 1
                yield format_sse(StreamEvent(type=EventType.CHUNK, content=content))
    except Exception:
        logger.exception("Chat stream generation failed")
        if token:
            ledger.refund(token)
        yield format_sse(StreamEvent(type=EventType.ERROR, message=GENERATION_FAILED_MESSAGE))
    else:
        if token and not sent:
            ledger.refund(token)

    yield format_sse(StreamEvent(type=EventType.DONE))


async def _fragments_until_deadline(
    coach: CoachService,
    question: str,
    history: list[ChatMessage],
) -> AsyncGenerator[str]:
    """Answer fragments, stopping silently once the stream deadline passes.

    Each fragment is awaited with the time left, so a coach that stalls
    before or between fragments is cut off too.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + STREAM_DEADLINE_SECONDS
    async with aclosing(coach.stream_answer(question, history)) as fragments:
        while True:
            remaining = deadline - loop.time()
            try:
                if remaining <= 0:
                    raise TimeoutError
                content = await asyncio.wait_for(anext(fragments), timeout=remaining)
            except StopAsyncIteration:
                return
            except TimeoutError:
                logger.warning("Stream deadline reached, truncating answer")
                return
            yield content


@router.get("/stream")
async def stream_chat(
    question: str = Query("", description="The user's question"),
    history: str | None = Query(None, description="JSON list of prior turns"),
    token: str | None = Query(None, description="Bearer token for quota tracking"),
    coach: CoachService = Depends(get_coach_service),
    ledger: CreditLedger = Depends(get_credit_ledger),
) -> StreamingResponse:
    """Stream the coach's answer as server-sent events.

    Raises:
        400: Question is missing or blank.
    """
    question = question.strip()
    if not question:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Question is required",
        )

    return StreamingResponse(
        _event_stream(question, parse_history_param(history), token, coach, ledger),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.post("/ask", response_model=AskResponse)
async def ask(
    request: AskRequest,
    token: str | None = Depends(get_bearer_token),
    coach: CoachService = Depends(get_coach_service),
    ledger: CreditLedger = Depends(get_credit_ledger),
) -> AskResponse | JSONResponse:
    """Answer a question in one response.

    Raises:
        402: The caller's token has no credits left.
        502: The coach failed to produce an answer.
    """
    if token and not ledger.has_credits(token):
        return JSONResponse(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            content=FailureResponse(
                message=INSUFFICIENT_CREDITS_MESSAGE,
                credits=ledger.balance(token),
            ).model_dump(),
        )

    timestamp = datetime.now(timezone.utc).isoformat()

    if not is_interview_related(request.question):
        return AskResponse(
            response=SCOPE_NOTICE,
            question=request.question,
            timestamp=timestamp,
            credits_remaining=ledger.balance(token) if token else None,
        )

    # Charged before the await so concurrent requests cannot spend the same credit
    remaining = ledger.deduct(token) if token else None
    try:
        raw = await coach.answer(request.question, request.history)
    except Exception as e:
        logger.exception("Chat answer generation failed")
        if token:
            ledger.refund(token)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=GENERATION_FAILED_MESSAGE,
        ) from e

    return AskResponse(
        response=ensure_markdown(format_interview_answer(raw)) or GENERATION_FAILED_MESSAGE,
        question=request.question,
        timestamp=timestamp,
        credits_remaining=remaining,
    )
