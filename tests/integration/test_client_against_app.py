"""Integration tests driving ChatClient against the real FastAPI app.

The client's httpx transport is an ASGITransport, so requests exercise the
actual endpoints, SSE framing and credit metering.
"""

from pathlib import Path

import pytest
import pytest_check as check
from fastapi import FastAPI
from httpx import ASGITransport

from hiremate.agent.topics import SCOPE_NOTICE
from hiremate.client import ChatClient, ClientConfig, ConversationSession
from tests.conftest import TEST_STARTING_CREDITS, FakeCoach


@pytest.fixture
def client(app: FastAPI, tmp_path: Path) -> ChatClient:
    config = ClientConfig(
        base_url="http://test",
        fallback_base_urls=[],
        token_file=tmp_path / "session.json",
    )
    return ChatClient(
        config=config,
        session=ConversationSession(),
        transport=ASGITransport(app=app),
    )


class TestClientAgainstApp:
    """End-to-end chat through the client."""

    async def test_streams_answer(self, client: ChatClient) -> None:
        """Chunks from the app arrive in order and complete once."""
        totals: list[str] = []
        completed: list[str] = []
        errors: list[Exception] = []

        await client.send_streaming(
            "How should I prepare for a Python interview?",
            lambda fragment, total: totals.append(total),
            completed.append,
            errors.append,
        )

        check.equal(completed, ["Use the STAR method to structure answers."])
        check.equal(errors, [])
        check.equal(totals[-1], completed[0])
        check.equal(len(client.session), 2)

    async def test_history_follows_conversation(
        self, client: ChatClient, fake_coach: FakeCoach
    ) -> None:
        """A second question carries the first exchange as history."""
        await client.reply("What is a REST API?")
        await client.reply("And GraphQL API?")

        roles = [m.role for m in fake_coach.histories[1]]
        check.equal(roles, ["user", "assistant"])
        check.equal(fake_coach.histories[1][0].content, "What is a REST API?")

    async def test_scope_notice_is_streamed(self, client: ChatClient) -> None:
        """Off-topic questions come back as the scope notice."""
        assert await client.reply("Give me a pasta recipe") == SCOPE_NOTICE

    async def test_generation_failure_falls_back_to_canned_reply(
        self, client: ChatClient, fake_coach: FakeCoach
    ) -> None:
        """Stream error, then ask 502, ends with a local keyword reply."""
        fake_coach.fail = True

        reply = await client.reply("How do I improve my Python skills?")

        assert "strengths" in reply

    async def test_token_credits(self, client: ChatClient) -> None:
        """Streaming with a stored token is metered and visible to the client."""
        client.token_store.save("tok")

        await client.reply("Explain Docker volumes")

        assert await client.fetch_credits() == TEST_STARTING_CREDITS - 1
