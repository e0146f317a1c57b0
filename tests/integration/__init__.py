"""Integration tests for the HTTP boundary.

Drives the FastAPI app over httpx's ASGITransport with the model gateway
replaced through dependency overrides, so no API key is required.
"""
