"""Errors raised while generating a face swap, and fault classification."""

from __future__ import annotations

INVALID_CREDENTIAL_MESSAGE = "Invalid API Key. Please check your key in settings."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

# Substrings that mark an authorization failure when no status code is available.
AUTH_FAILURE_MARKERS = (
    "permission",
    "permission_denied",
    "403",
    "api key",
    "requested entity was not found",
)
AUTH_FAILURE_CODES = {401, 403}
AUTH_FAILURE_STATUSES = {"PERMISSION_DENIED", "UNAUTHENTICATED"}


class GenerationError(Exception):
    """Base class for failures classified by the generator itself."""


class MissingCredentialError(GenerationError):
    """No API key was supplied by the user or the environment."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "API Key is missing. Please enter your Google Gemini API Key in the settings."
        )


class ModelRefusalError(GenerationError):
    """The model answered with text instead of an image."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Model returned text instead of image: {text}")


class EmptyResponseError(GenerationError):
    """The model returned neither image data nor text."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "No image data found in the response. "
            "The model may have been blocked by safety filters."
        )


def is_auth_failure(exc: BaseException) -> bool:
    """Best-effort check for an authorization failure.

    Uses the status code carried by SDK errors when present and falls back to
    matching known phrases in the error message.
    """
    code = getattr(exc, "code", None)
    if isinstance(code, int) and code in AUTH_FAILURE_CODES:
        return True

    status = getattr(exc, "status", None)
    if isinstance(status, str) and status.upper() in AUTH_FAILURE_STATUSES:
        return True

    message = str(exc).lower()
    return any(marker in message for marker in AUTH_FAILURE_MARKERS)


def describe_fault(exc: BaseException) -> tuple[str, bool]:
    """Map a raised fault to a user-facing message.

    Returns:
        Tuple of (message, needs_credential)
    """
    if is_auth_failure(exc):
        return INVALID_CREDENTIAL_MESSAGE, True
    return str(exc) or UNEXPECTED_ERROR_MESSAGE, False
