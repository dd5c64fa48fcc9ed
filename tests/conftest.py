"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_coach: Scripted stand-in for the agno coach service
    - app: Fresh FastAPI application wired to the fake coach
    - async_client: HTTPX client for API testing
    - make_pdf: Builds small valid PDFs with the given page texts
"""

import asyncio
from collections.abc import AsyncGenerator, Callable, Sequence

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from hiremate.agent.coach_agent import get_coach_service
from hiremate.api.app import create_app
from hiremate.models.schemas import ChatMessage

TEST_STARTING_CREDITS = 3


class FakeCoach:
    """Coach double that replays fixed fragments and records its calls."""

    def __init__(self) -> None:
        self.fragments: list[str] = ["Use the ", "STAR method ", "to structure answers."]
        self.fail = False
        self.delay = 0.0
        self.resume_answer = "Five years of Python at Acme."
        self.questions: list[str] = []
        self.histories: list[list[ChatMessage]] = []
        self.resume_texts: list[str] = []

    async def stream_answer(
        self,
        question: str,
        history: Sequence[ChatMessage] = (),
    ) -> AsyncGenerator[str]:
        self.questions.append(question)
        self.histories.append(list(history))
        for fragment in self.fragments:
            if self.delay:
                await asyncio.sleep(self.delay)
            yield fragment
        if self.fail:
            raise RuntimeError("model unavailable")

    async def answer(self, question: str, history: Sequence[ChatMessage] = ()) -> str:
        self.questions.append(question)
        self.histories.append(list(history))
        await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("model unavailable")
        return "".join(self.fragments)

    async def answer_from_resume(self, question: str, resume_text: str) -> str:
        self.questions.append(question)
        self.resume_texts.append(resume_text)
        await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("model unavailable")
        return self.resume_answer


@pytest.fixture
def fake_coach() -> FakeCoach:
    """Return a fresh scripted coach."""
    return FakeCoach()


@pytest.fixture
def app(fake_coach: FakeCoach) -> FastAPI:
    """Create an application with its own ledger and resume store.

    Returns:
        FastAPI app whose coach dependency resolves to fake_coach.
    """
    application = create_app(starting_credits=TEST_STARTING_CREDITS)
    application.dependency_overrides[get_coach_service] = lambda: fake_coach
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def _pdf_literal(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(*page_texts: str) -> bytes:
    """Build a minimal PDF with one line of Helvetica text per page.

    An empty string produces a page without any text.
    """
    count = len(page_texts)
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(count))
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {count} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for i, text in enumerate(page_texts):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {5 + 2 * i} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 12 Tf 72 720 Td ({_pdf_literal(text)}) Tj ET".encode() if text else b""
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Return the PDF builder."""
    return build_pdf
