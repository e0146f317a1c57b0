"""Document encoder for chat attachments.

Converts raw upload bytes into a base64 DocumentDescriptor with a resolved
content type.
"""

import base64
import io
import logging
import secrets
import time

from pypdf import PdfReader

from finchat.errors import FileTooLargeError, NoFileProvidedError
from finchat.models.schemas import MAX_FILE_SIZE, DocumentDescriptor

logger = logging.getLogger(__name__)

# Constants
GENERIC_MIME_TYPE = "application/octet-stream"
PDF_MIME_TYPE = "application/pdf"

# Checked in order when the declared type is missing or generic
EXTENSION_MIME_TYPES: tuple[tuple[str, str], ...] = (
    (".pdf", PDF_MIME_TYPE),
    (".txt", "text/plain"),
    (".csv", "text/csv"),
)


def resolve_mime_type(filename: str, declared_type: str | None) -> str:
    """Resolve the effective content type of an upload.

    Args:
        filename: The uploaded filename.
        declared_type: Content type reported by the client, if any.

    Returns:
        The declared type when it is specific, otherwise the type inferred
        from the filename extension, falling back to application/octet-stream.
    """
    declared = (declared_type or "").strip()
    if declared and declared != GENERIC_MIME_TYPE:
        return declared

    for extension, mime_type in EXTENSION_MIME_TYPES:
        if filename.endswith(extension):
            return mime_type
    return GENERIC_MIME_TYPE


def new_file_id() -> str:
    """Mint an opaque file identifier from the clock and a random suffix."""
    return f"{time.time_ns()}-{secrets.token_hex(4)}"


def _count_pdf_pages(content: bytes) -> int | None:
    """Count pages in a PDF, or None if it cannot be read.

    Args:
        content: Raw bytes of the PDF file.
    """
    try:
        return len(PdfReader(io.BytesIO(content)).pages)
    except Exception as e:
        logger.warning(f"Could not read PDF page count: {e}")
        return None


def encode_document(
    content: bytes | None,
    filename: str | None,
    declared_type: str | None = None,
    size: int | None = None,
) -> DocumentDescriptor:
    """Encode an uploaded file into a DocumentDescriptor.

    Args:
        content: Raw file bytes.
        filename: Original filename.
        declared_type: Content type reported by the client.
        size: Reported size in bytes. Defaults to ``len(content)``.

    Returns:
        DocumentDescriptor carrying the base64 bytes and resolved type.

    Raises:
        NoFileProvidedError: If there is no file name or no content.
        FileTooLargeError: If the file exceeds MAX_FILE_SIZE.
    """
    if not filename or not content:
        raise NoFileProvidedError()

    size_bytes = len(content) if size is None else size
    if size_bytes > MAX_FILE_SIZE or len(content) > MAX_FILE_SIZE:
        size_mb = max(size_bytes, len(content)) / (1024 * 1024)
        raise FileTooLargeError(
            f'File "{filename}" ({size_mb:.1f}MB) exceeds maximum allowed size (20MB)'
        )

    mime_type = resolve_mime_type(filename, declared_type)
    pages = _count_pdf_pages(content) if mime_type == PDF_MIME_TYPE else None

    return DocumentDescriptor(
        file_id=new_file_id(),
        name=filename,
        size_bytes=len(content),
        mime_type=mime_type,
        content=base64.b64encode(content).decode("ascii"),
        pages=pages,
    )
