"""FastAPI endpoints for the financial assistant.

JSON routes with async request handling. Errors are rendered as
``{"error": ..., "kind": ...}`` bodies.

Endpoints:
    - GET /health: Service health status
    - POST /api/upload: Encode one document for attachment
    - POST /api/chat: Send a message with history and documents to Gemini
"""

from finchat.api.app import app, create_app

__all__ = ["app", "create_app"]
