"""Resume analyzer service: upload a resume PDF, then ask about it.

Replaces the legacy ``/api/resume`` endpoints. The uploaded resume's text
is kept in memory per application instance until it is replaced or cleared.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse

from hiremate.agent.coach_agent import CoachService, get_coach_service
from hiremate.api.credits import (
    INSUFFICIENT_CREDITS_MESSAGE,
    CreditLedger,
    get_bearer_token,
    get_credit_ledger,
)
from hiremate.models.schemas import (
    FailureResponse,
    ResumeAskRequest,
    ResumeAskResponse,
    ResumeUploadResponse,
)
from hiremate.parsing.resume_parser import MAX_RESUME_SIZE, ResumeParseError, parse_resume

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resume-analyzer", tags=["resume analyzer"])

NOT_FOUND_ANSWER = "Not available in resume"


class StoredResume:
    def __init__(self, text: str, filename: str) -> None:
        self.text = text
        self.filename = filename
        self.uploaded_at = datetime.now(timezone.utc)


class ResumeStore:
    """Holds the most recently uploaded resume."""

    def __init__(self) -> None:
        self._resume: StoredResume | None = None

    def set(self, text: str, filename: str) -> StoredResume:
        self._resume = StoredResume(text=text, filename=filename)
        return self._resume

    def get(self) -> StoredResume | None:
        return self._resume

    def clear(self) -> None:
        self._resume = None


def get_resume_store(request: Request) -> ResumeStore:
    return request.app.state.resume_store


def _failure(status_code: int, message: str, credits: int | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=FailureResponse(message=message, credits=credits).model_dump(exclude_none=True),
    )


@router.post("/upload", response_model=ResumeUploadResponse)
async def upload_resume(
    resume: UploadFile,
    store: ResumeStore = Depends(get_resume_store),
) -> ResumeUploadResponse:
    """Upload a resume PDF and keep its text for questions.

    Args:
        resume: The PDF file (multipart/form-data field ``resume``).

    Raises:
        400: Not a PDF, unreadable, or without extractable text.
        413: File exceeds 5MB.
    """
    filename = resume.filename or ""
    if not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    content = await resume.read()
    if len(content) > MAX_RESUME_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (5MB)",
        )

    try:
        document = parse_resume(content)
    except ResumeParseError as e:
        logger.warning(f"Resume parse error for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    if not document.has_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No text content found in PDF.",
        )

    store.set(document.text, filename)
    logger.info(f"Stored resume {filename} ({document.pages} pages, {len(document.text)} chars)")

    return ResumeUploadResponse(
        success=True,
        message="Resume uploaded and parsed successfully",
        filename=filename,
        preview=document.preview(),
        length=len(document.text),
    )


@router.post("/ask", response_model=ResumeAskResponse)
async def ask_resume(
    request: ResumeAskRequest,
    token: str | None = Depends(get_bearer_token),
    store: ResumeStore = Depends(get_resume_store),
    coach: CoachService = Depends(get_coach_service),
    ledger: CreditLedger = Depends(get_credit_ledger),
) -> ResumeAskResponse | JSONResponse:
    """Answer a question using only the uploaded resume.

    Raises:
        400: No resume has been uploaded.
        402: The caller's token has no credits left.
        502: The coach failed to produce an answer.
    """
    resume = store.get()
    if resume is None:
        return _failure(status.HTTP_400_BAD_REQUEST, "Please upload a resume first")

    if token and not ledger.has_credits(token):
        return _failure(
            status.HTTP_402_PAYMENT_REQUIRED,
            INSUFFICIENT_CREDITS_MESSAGE,
            credits=ledger.balance(token),
        )

    if token:
        ledger.deduct(token)
    try:
        answer = await coach.answer_from_resume(request.question, resume.text)
    except Exception as e:
        logger.exception("Resume answer generation failed")
        if token:
            ledger.refund(token)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to answer from resume",
        ) from e

    return ResumeAskResponse(answer=answer or NOT_FOUND_ANSWER)


@router.delete("/session")
async def clear_resume(store: ResumeStore = Depends(get_resume_store)) -> dict[str, object]:
    """Forget the uploaded resume."""
    store.clear()
    return {"success": True, "message": "Resume session cleared"}
