"""Main application entry point.

Runs FastAPI (port 8000) with the NiceGUI coach page mounted on it.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run the API and the coach page on the same server."""
    import uvicorn
    from nicegui import ui

    from hiremate.api.app import create_app
    from hiremate.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="HireMate Coach",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "hiremate-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting HireMate on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_api() -> None:
    """Run only the API, for a UI served elsewhere."""
    import uvicorn

    uvicorn.run(
        "hiremate.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    """Application entry point.

    Set RUN_MODE=api to serve the API without the chat page.
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting HireMate in {mode} mode")

    if mode == "api":
        run_api()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
