"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error rendering and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finchat.api.chat import router as chat_router
from finchat.api.upload import router as upload_router
from finchat.errors import AssistantError
from finchat.models.schemas import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting FinChat API...")
    yield
    logger.info("Shutting down FinChat API...")


async def assistant_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    """Render an AssistantError as an error body with its status code."""
    body = ErrorResponse(error=exc.message, kind=exc.kind)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="FinChat API",
        description=(
            "Conversational financial assistant backed by Google Gemini. "
            "Encodes uploaded financial documents for inline attachment and "
            "relays conversations with their documents to the model."
        ),
        version="0.1.0",
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
    )

    application.add_exception_handler(AssistantError, assistant_error_handler)
    application.include_router(upload_router)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "finchat"}

    return application


app = create_app()
