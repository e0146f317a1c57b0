"""Document upload endpoint.

Encodes one uploaded file into a DocumentDescriptor the client later posts
back with its chat message. Nothing is stored server-side.
"""

import logging

from fastapi import APIRouter, File, UploadFile

from finchat.documents.encoder import encode_document
from finchat.errors import AssistantError, NoFileProvidedError, UnexpectedError
from finchat.models.schemas import DocumentDescriptor, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


@router.post(
    "/upload",
    response_model=DocumentDescriptor,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_document(file: UploadFile | None = File(None)) -> DocumentDescriptor:
    """Upload and encode a single document.

    Args:
        file: The uploaded file (multipart/form-data field ``file``).

    Returns:
        DocumentDescriptor with id, name, size, resolved type and base64 bytes.

    Raises:
        400: No file, or an empty file.
        413: File exceeds 20MB limit.
        500: Internal processing error.
    """
    if file is None or not file.filename:
        logger.warning("Upload rejected: no file provided")
        raise NoFileProvidedError()

    try:
        content = await file.read()
        descriptor = encode_document(
            content,
            file.filename,
            declared_type=file.content_type,
            size=file.size,
        )
    except AssistantError as e:
        logger.warning(f"Upload rejected for {file.filename}: {e}")
        raise
    except Exception as e:
        logger.exception(f"Failed to process upload {file.filename}: {e}")
        raise UnexpectedError("Failed to process file") from e

    logger.info(
        f"Encoded upload: {descriptor.name} "
        f"({descriptor.size_bytes} bytes, {descriptor.mime_type})"
    )
    return descriptor
