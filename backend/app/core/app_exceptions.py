"""Application-specific exceptions for consistent error handling."""

from typing import Any


class QuestionSyncError(Exception):
    """Base error with a stable error code and HTTP status."""

    code = "QUESTION_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(QuestionSyncError):
    """Missing or malformed input, rejected before anything is persisted."""

    code = "VALIDATION_ERROR"
    status_code = 422


class NotFoundError(QuestionSyncError):
    """Parent question or referenced child row does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class UnknownTypeError(QuestionSyncError):
    """Stored type discriminator matches no registered variant."""

    code = "UNKNOWN_QUESTION_TYPE"
    status_code = 500


class TransportError(QuestionSyncError):
    """Cache or search backend unreachable or erroring."""

    code = "BACKEND_UNAVAILABLE"
    status_code = 503


class ConflictError(QuestionSyncError):
    """Write would violate a uniqueness rule (e.g. second singleton row)."""

    code = "CONFLICT"
    status_code = 409
