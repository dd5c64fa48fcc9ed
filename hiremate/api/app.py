"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
per-application state and router registration.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hiremate import __version__
from hiremate.api.chat import router as chat_router
from hiremate.api.credits import DEFAULT_STARTING_CREDITS, CreditLedger
from hiremate.api.credits import router as credits_router
from hiremate.api.resume import router as resume_router
from hiremate.api.resume_analyzer import ResumeStore
from hiremate.api.resume_analyzer import router as resume_analyzer_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting HireMate API...")
    yield
    logger.info("Shutting down HireMate API...")


def create_app(starting_credits: int | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        starting_credits: Balance given to a token on first use.
            Reads HIREMATE_STARTING_CREDITS when not provided.

    Returns:
        Configured FastAPI application instance.
    """
    if starting_credits is None:
        starting_credits = int(
            os.getenv("HIREMATE_STARTING_CREDITS", str(DEFAULT_STARTING_CREDITS))
        )

    application = FastAPI(
        title="HireMate API",
        description=(
            "Interview coaching API. Streams coach answers over server-sent "
            "events, answers single-shot questions, tracks credits per bearer "
            "token and analyzes uploaded resumes."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.state.credit_ledger = CreditLedger(starting_credits)
    application.state.resume_store = ResumeStore()

    application.include_router(chat_router)
    application.include_router(credits_router)
    application.include_router(resume_router)
    application.include_router(resume_analyzer_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "hiremate"}

    return application


app = create_app()
