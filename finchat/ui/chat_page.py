"""NiceGUI chat page for the financial assistant."""

import logging
import os
from collections.abc import Sequence

import httpx
from nicegui import events, ui

from finchat.conversation import (
    ConversationStore,
    record_failure,
    record_reply,
    record_user_turn,
)
from finchat.documents.encoder import MAX_FILE_SIZE
from finchat.errors import FailureKind
from finchat.models.schemas import (
    ChatReply,
    DocumentDescriptor,
    ErrorResponse,
    Message,
    Role,
)

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
ACCEPTED_EXTENSIONS = ".pdf,.txt,.doc,.docx,.xls,.xlsx,.csv"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f1f5f4; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.08);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #047857 0%, #0f766e 100%); }

    .message-user {
        background: #047857;
        color: white;
        border-radius: 18px 18px 4px 18px;
        white-space: pre-wrap;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #047857;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .document-chip { background: #ecfdf5; border: 1px solid #a7f3d0; border-radius: 8px; }
</style>
"""


class ApiError(Exception):
    """Error body returned by the API, with its failure kind."""

    def __init__(self, kind: FailureKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)


class ChatSession:
    """Chat state for one page: the conversation log and pending documents."""

    def __init__(self) -> None:
        self.store = ConversationStore()
        self.documents: list[DocumentDescriptor] = []
        self.is_waiting: bool = False

    def reset(self) -> None:
        self.store = ConversationStore()
        self.documents.clear()


def format_file_size(size: int) -> str:
    """Human-readable size, e.g. ``1.5 KB``."""
    if size < 1024:
        return f"{size} Bytes"
    if size < 1024 * 1024:
        return f"{round(size / 1024, 2)} KB"
    return f"{round(size / (1024 * 1024), 2)} MB"


def _api_error(response: httpx.Response) -> ApiError:
    try:
        body = ErrorResponse.model_validate(response.json())
        return ApiError(body.kind, body.error)
    except ValueError:
        return ApiError(FailureKind.UNEXPECTED_FAILURE, f"HTTP {response.status_code}")


async def upload_document(
    name: str, content: bytes, content_type: str | None
) -> DocumentDescriptor:
    """Encode one file through POST /api/upload."""
    async with httpx.AsyncClient(timeout=60.0) as client:
        try:
            response = await client.post(
                f"{API_BASE_URL}/api/upload",
                files={"file": (name, content, content_type or "application/octet-stream")},
            )
        except httpx.RequestError as e:
            raise ApiError(FailureKind.UNEXPECTED_FAILURE, f"Connection failed: {e}") from e
    if response.status_code != 200:
        raise _api_error(response)
    return DocumentDescriptor.model_validate(response.json())


async def request_reply(
    prior: Sequence[Message], text: str, documents: Sequence[DocumentDescriptor]
) -> str:
    """Post one chat cycle to POST /api/chat and return the reply."""
    payload = {
        "messages": [{"role": m.role.value, "content": m.content} for m in prior],
        "userMessage": text,
        "documents": [doc.model_dump(by_alias=True) for doc in documents],
    }
    async with httpx.AsyncClient(timeout=120.0) as client:
        try:
            response = await client.post(f"{API_BASE_URL}/api/chat", json=payload)
        except httpx.RequestError as e:
            raise ApiError(FailureKind.UPSTREAM_FAILURE, f"Connection failed: {e}") from e
    if response.status_code != 200:
        raise _api_error(response)
    try:
        return ChatReply.model_validate(response.json()).reply
    except ValueError as e:
        raise ApiError(FailureKind.UNEXPECTED_FAILURE, f"Malformed chat reply: {e}") from e


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    documents_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_message(msg: Message) -> None:
        is_user = msg.role == Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        time_label = msg.timestamp.astimezone().strftime("%I:%M %p")

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 text-sm {bubble}"):
                    if is_user:
                        ui.label(msg.content)
                    else:
                        ui.markdown(msg.content)
                ui.label(time_label).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for msg in session.store:
                render_message(msg)

    def refresh_documents() -> None:
        documents_container.clear()
        with documents_container:
            if session.documents:
                ui.label(f"Uploaded Documents ({len(session.documents)})").classes(
                    "text-sm font-medium"
                )
            for doc in session.documents:
                with ui.row().classes("w-full items-center justify-between px-3 py-2 document-chip"):
                    with ui.column().classes("gap-0"):
                        ui.label(doc.name).classes("text-sm font-medium")
                        details = format_file_size(doc.size_bytes)
                        if doc.pages:
                            details += f" - {doc.pages} pages"
                        ui.label(details).classes("text-xs text-gray-500")
                    ui.button(
                        icon="close", on_click=lambda d=doc: remove_document(d)
                    ).props("flat round dense color=negative")

    def remove_document(doc: DocumentDescriptor) -> None:
        session.documents = [d for d in session.documents if d.file_id != doc.file_id]
        refresh_documents()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        try:
            descriptor = await upload_document(e.name, e.content.read(), e.type)
        except ApiError as err:
            logger.warning(f"Upload failed for {e.name}: {err.message}")
            ui.notify(err.message, type="negative")
            return
        session.documents.append(descriptor)
        refresh_documents()

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.is_waiting:
            return

        documents = list(session.documents)
        prior = session.store.snapshot()
        input_field.value = ""
        session.documents.clear()
        refresh_documents()

        session.is_waiting = True
        send_btn.disable()
        record_user_turn(session.store, text, documents)
        refresh_messages()
        with messages_container:
            with ui.row().classes("gap-1 px-4 py-3 message-assistant") as typing_row:
                for _ in range(3):
                    ui.element("div").classes("typing-dot")

        try:
            reply = await request_reply(prior, text, documents)
            record_reply(session.store, reply)
        except ApiError as err:
            logger.warning(f"Chat request failed ({err.kind.value}): {err.message}")
            record_failure(session.store, err.kind)
            ui.notify(err.message, type="negative")
        finally:
            typing_row.delete()
            session.is_waiting = False
            send_btn.enable()
            refresh_messages()

    def new_chat() -> None:
        session.reset()
        refresh_messages()
        refresh_documents()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("account_balance").classes("text-white text-3xl")
                with ui.column().classes("gap-0"):
                    ui.label("Financial Assistant").classes("text-lg font-semibold text-white")
                    ui.label("Powered by Gemini").classes("text-xs text-white/80")
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        # Documents and input
        with ui.column().classes("w-full p-4 gap-3 bg-white border-t"):
            with ui.expansion("Attach documents", icon="upload_file").classes("w-full"):
                ui.upload(
                    on_upload=handle_upload,
                    multiple=True,
                    auto_upload=True,
                    max_file_size=MAX_FILE_SIZE,
                    on_rejected=lambda: ui.notify(
                        "File is too large (max 20MB)", type="negative"
                    ),
                ).props(f"accept={ACCEPTED_EXTENSIONS} flat bordered").classes("w-full")
                ui.label("PDF, TXT, DOC, DOCX, XLS, XLSX, CSV (max 20MB)").classes(
                    "text-xs text-gray-500"
                )
            documents_container = ui.column().classes("w-full gap-2")

            with ui.row().classes("w-full gap-3 items-end"):
                input_field = (
                    ui.textarea(
                        placeholder="Ask me about investments, budgeting, savings, taxes..."
                    )
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=positive"
                )

