"""Pydantic models for conversation state, documents and API payloads.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Message: Immutable conversation turn
    - DocumentDescriptor: Base64-encoded upload ready for inline attachment
    - OutboundRequest: Assembled Gemini chat request
    - ChatRequest / ChatReply / ErrorResponse: Chat boundary payloads
"""

from finchat.models.schemas import (
    ChatReply,
    ChatRequest,
    ChatTurn,
    DocumentDescriptor,
    ErrorResponse,
    HistoryTurn,
    InlineDataPart,
    Message,
    OutboundRequest,
    Role,
    TextPart,
)

__all__ = [
    "ChatReply",
    "ChatRequest",
    "ChatTurn",
    "DocumentDescriptor",
    "ErrorResponse",
    "HistoryTurn",
    "InlineDataPart",
    "Message",
    "OutboundRequest",
    "Role",
    "TextPart",
]
