"""Document encoding for inline model attachments.

Turns uploaded files into self-contained, size-bounded descriptors.

Responsibilities:
    - Size validation against the 20MB upload limit
    - Base64 encoding of the raw bytes
    - Content type resolution from declared type and filename
    - Page counting for PDFs with pypdf

Document content is not extracted locally. Gemini reads the attached bytes
natively.
"""

from finchat.documents.encoder import (
    MAX_FILE_SIZE,
    encode_document,
    new_file_id,
    resolve_mime_type,
)

__all__ = ["MAX_FILE_SIZE", "encode_document", "new_file_id", "resolve_mime_type"]
