"""Failure taxonomy shared by the upload and chat boundaries.

Every error carries a closed ``FailureKind`` so callers branch on the kind
instead of matching error text, plus the HTTP status and the user-facing
message the boundary renders.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Closed set of failure kinds surfaced to callers."""

    NO_FILE_PROVIDED = "no_file_provided"
    FILE_TOO_LARGE = "file_too_large"
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    UPSTREAM_FAILURE = "upstream_failure"
    UNEXPECTED_FAILURE = "unexpected_failure"


class AssistantError(Exception):
    """Base class for failures that map onto a boundary response.

    Attributes:
        kind: The failure kind.
        status_code: HTTP status used by the API layer.
        message: Human-readable explanation returned to the client.
    """

    kind: FailureKind = FailureKind.UNEXPECTED_FAILURE
    status_code: int = 500
    message: str = "An unexpected error occurred. Please try again."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NoFileProvidedError(AssistantError):
    """Raised when an upload carries no file or an empty one."""

    kind = FailureKind.NO_FILE_PROVIDED
    status_code = 400
    message = "No file provided"


class FileTooLargeError(AssistantError):
    """Raised when an upload exceeds the document size limit."""

    kind = FailureKind.FILE_TOO_LARGE
    status_code = 413
    message = "File exceeds maximum allowed size (20MB)"


class MissingCredentialError(AssistantError):
    """Raised before any network call when no API key is configured."""

    kind = FailureKind.MISSING_CREDENTIAL
    status_code = 500
    message = (
        "GEMINI_API_KEY is not configured. "
        "Please add it to your environment variables."
    )


class InvalidCredentialError(AssistantError):
    """Raised when Gemini rejects the configured API key."""

    kind = FailureKind.INVALID_CREDENTIAL
    status_code = 401
    message = (
        "Invalid or missing GEMINI_API_KEY. "
        "Please check your environment variables."
    )


class UpstreamError(AssistantError):
    """Raised for network, quota, timeout and request failures."""

    kind = FailureKind.UPSTREAM_FAILURE
    status_code = 500
    message = "Failed to process your request. Please try again."


class UnexpectedError(AssistantError):
    """Catch-all for unanticipated failures during assembly or transport."""

    kind = FailureKind.UNEXPECTED_FAILURE
    status_code = 500
