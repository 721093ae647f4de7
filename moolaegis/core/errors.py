"""Error types for the Moolaegis service.

Every domain error carries an HTTP status and a stable machine-readable
``code`` so the API layer can translate it into a response without
inspecting message text. Clients map the codes to translated messages.
"""

from __future__ import annotations

from typing import Any, Optional


class MoolaegisError(Exception):
    """Base error for all domain exceptions."""

    status_code: int = 400
    code: str = "ERROR"

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ---------------------------------------------------------------------------
# Forecast
# ---------------------------------------------------------------------------


class ForecastInputError(MoolaegisError):
    """Raised when forecast inputs are outside the supported domain."""

    status_code = 422
    code = "INVALID_FORECAST_INPUT"


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


class UserNotFoundError(MoolaegisError):
    status_code = 404
    code = "USER_NOT_FOUND"

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class IncorrectPasswordError(MoolaegisError):
    status_code = 401
    code = "INCORRECT_PASSWORD"

    def __init__(self, message: str = "Incorrect password") -> None:
        super().__init__(message)


class UsernameTakenError(MoolaegisError):
    status_code = 409
    code = "USERNAME_TAKEN"

    def __init__(self, username: str) -> None:
        super().__init__(f"Username '{username}' already exists")


class EmailTakenError(MoolaegisError):
    status_code = 409
    code = "EMAIL_TAKEN"

    def __init__(self, email: str) -> None:
        super().__init__(f"Email '{email}' already exists")


class WeakPasswordError(MoolaegisError):
    status_code = 422
    code = "WEAK_PASSWORD"

    def __init__(self, min_length: int) -> None:
        super().__init__(f"Password too short: must be at least {min_length} characters", details={"n": min_length})


class InvalidEmailError(MoolaegisError):
    status_code = 422
    code = "INVALID_EMAIL"

    def __init__(self, email: str) -> None:
        super().__init__(f"Invalid email address: '{email}'")


class InvalidUsernameError(MoolaegisError):
    status_code = 422
    code = "INVALID_USERNAME"

    def __init__(self) -> None:
        super().__init__("Username must not be blank")


class InvalidTokenError(MoolaegisError):
    """Raised for missing, malformed, expired or wrong-type tokens."""

    status_code = 401
    code = "INVALID_TOKEN"

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------------
# Reports / uploads
# ---------------------------------------------------------------------------


class UnsupportedMediaError(MoolaegisError):
    status_code = 415
    code = "UNSUPPORTED_MEDIA_TYPE"


class PayloadTooLargeError(MoolaegisError):
    status_code = 413
    code = "PAYLOAD_TOO_LARGE"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Upload of {size} bytes exceeds the {limit} byte limit", details={"limit": limit})


class EmptyUploadError(MoolaegisError):
    status_code = 422
    code = "EMPTY_UPLOAD"

    def __init__(self) -> None:
        super().__init__("Uploaded file is empty")


# ---------------------------------------------------------------------------
# AI model calls
# ---------------------------------------------------------------------------


class AssistantUnavailableError(MoolaegisError):
    """Raised when the chat or OCR model call fails."""

    status_code = 502
    code = "ASSISTANT_UNAVAILABLE"
