"""Main application entry point.

Runs FastAPI (port 8000) with the NiceGUI chat page mounted on the same
server, or the API alone with RUN_MODE=api. Environment variables are loaded
from .env file.
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


def _serve(app: object) -> None:
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_integrated() -> None:
    """Run FastAPI with the NiceGUI chat page mounted on the same server."""
    from nicegui import ui

    from finchat.api.app import create_app
    from finchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Financial Assistant",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "finchat-secret"),
    )

    logger.info("API docs available at /docs, chat UI at /")
    _serve(app)


def run_api() -> None:
    """Run the FastAPI endpoints without the chat page."""
    from finchat.api.app import create_app

    _serve(create_app())


def main() -> None:
    """Application entry point.

    Set RUN_MODE=api to serve only the HTTP endpoints.
    Default is integrated mode (API and chat page on one port).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    if not os.getenv("GEMINI_API_KEY"):
        logger.warning("GEMINI_API_KEY is not set; chat requests will fail until it is")

    logger.info(f"Starting FinChat in {mode} mode")

    if mode == "api":
        run_api()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
