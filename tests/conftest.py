"""Pytest fixtures and shared test configuration.

Fixtures:
    - sample_pdf_bytes: A small valid PDF built with pypdf
    - csv_document: Encoded descriptor for a CSV statement
    - fake_gateway: Recording stand-in for the model gateway
    - async_client: HTTPX client for API testing with the fake gateway
"""

import io
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from finchat.agent.gateway import get_model_gateway
from finchat.api import app
from finchat.documents.encoder import encode_document
from finchat.errors import AssistantError
from finchat.models.schemas import DocumentDescriptor, OutboundRequest


class FakeGateway:
    """Records requests and answers with a canned reply or error."""

    def __init__(self, reply: str = "Here is my advice.") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.requests: list[OutboundRequest] = []

    def fail_with(self, error: AssistantError | Exception) -> None:
        self.error = error

    async def send(self, request: OutboundRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Return a two-page blank PDF.

    Returns:
        Raw PDF bytes.
    """
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def csv_document() -> DocumentDescriptor:
    """Return an encoded CSV bank statement."""
    return encode_document(
        b"date,amount\n2024-01-01,-42.50\n2024-01-02,1200.00\n",
        "statement.csv",
        declared_type="",
    )


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
async def async_client(fake_gateway: FakeGateway) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with the fake gateway installed.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_model_gateway] = lambda: fake_gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
