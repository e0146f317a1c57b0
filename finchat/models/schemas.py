import base64
import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from finchat.errors import FailureKind

MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB


class Role(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single turn in the conversation log.

    Attributes:
        id: Opaque unique identifier.
        role: Who authored the turn.
        content: The message text.
        timestamp: Creation instant (UTC).
        is_seed: True only for the synthetic welcome turn.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    is_seed: bool = False


class DocumentDescriptor(BaseModel):
    """Transport-ready representation of an uploaded document.

    Serialized with camelCase keys. ``name`` and ``size`` are accepted on
    input as alternatives to ``fileName`` and ``sizeBytes``.

    Attributes:
        file_id: Opaque identifier unique within the process.
        name: Original filename.
        size_bytes: Original file size in bytes, at most 20MB.
        mime_type: Resolved content type, never empty.
        content: Base64-encoded file bytes.
        pages: Page count for readable PDFs, otherwise None.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_id: str = Field(..., alias="fileId")
    name: str = Field(
        ...,
        validation_alias=AliasChoices("fileName", "name"),
        serialization_alias="fileName",
    )
    size_bytes: int = Field(
        ...,
        ge=0,
        le=MAX_FILE_SIZE,
        validation_alias=AliasChoices("sizeBytes", "size"),
        serialization_alias="sizeBytes",
    )
    mime_type: str = Field(..., min_length=1, alias="mimeType")
    content: str = Field(..., alias="base64Content")
    pages: int | None = Field(None, ge=0)

    def decode(self) -> bytes:
        """Return the original document bytes."""
        return base64.b64decode(self.content)


class HistoryTurn(BaseModel):
    """A prior turn replayed to Gemini in its role vocabulary."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    text: str


class TextPart(BaseModel):
    """Free-text fragment of the new message."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class InlineDataPart(BaseModel):
    """Raw document bytes (base64) with their content type."""

    model_config = ConfigDict(frozen=True)

    type: Literal["inline_data"] = "inline_data"
    mime_type: str
    data: str


MessagePart = Annotated[TextPart | InlineDataPart, Field(discriminator="type")]


class OutboundRequest(BaseModel):
    """One assembled chat request.

    Attributes:
        system_instruction: Fixed assistant persona and guidelines.
        history: Prior turns, or None when there are none.
        parts: New message parts, text part first.
    """

    model_config = ConfigDict(frozen=True)

    system_instruction: str
    history: list[HistoryTurn] | None = None
    parts: list[MessagePart] = Field(..., min_length=1)

    @model_validator(mode="after")
    def text_part_first(self) -> "OutboundRequest":
        """Require the text part to lead the message parts."""
        if not isinstance(self.parts[0], TextPart):
            raise ValueError("First message part must be text")
        if any(isinstance(part, TextPart) for part in self.parts[1:]):
            raise ValueError("Only the first message part may be text")
        return self


class ChatTurn(BaseModel):
    """A prior turn as posted by the chat client."""

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        messages: The conversation so far, welcome turn first.
        user_message: The new user utterance.
        documents: Descriptors to attach, in order.
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatTurn] = Field(default_factory=list)
    user_message: str = Field(..., min_length=1, alias="userMessage")
    documents: list[DocumentDescriptor] | None = None

    @field_validator("user_message")
    @classmethod
    def reject_blank_message(cls, v: str) -> str:
        """Reject whitespace-only messages without altering the text."""
        if not v.strip():
            raise ValueError("Message must not be blank")
        return v


class ChatReply(BaseModel):
    """Successful chat response."""

    reply: str


class ErrorResponse(BaseModel):
    """Error body returned by both boundaries."""

    error: str
    kind: FailureKind
