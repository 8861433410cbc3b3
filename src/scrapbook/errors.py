"""
Error classification for the scrapbook application.

Read paths never raise: missing or unreadable entries collapse into ``None``.
The classes below cover the failures that do propagate:

- ValidationError: bad input at the API boundary (HTTP 400)
- AuthenticationError: missing or invalid admin session (HTTP 401)
- StorageError: writes and deletes of authoritative records (HTTP 500)
- ImageProcessingError: HEIC conversion failures during upload (HTTP 500)

Photo deletions during a cascading entry delete are best effort and are
reported as ``PhotoDeletionFailure`` records instead of exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .logging_config import get_logger, log_error, log_security_event

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    STORAGE = "storage"
    IMAGE_PROCESSING = "image_processing"
    UNKNOWN = "unknown"


_DEFAULT_USER_MESSAGES = {
    ErrorCategory.AUTHENTICATION: "Unauthorized",
    ErrorCategory.VALIDATION: "Invalid request",
    ErrorCategory.STORAGE: "Storage operation failed",
    ErrorCategory.IMAGE_PROCESSING: "Failed to process image",
    ErrorCategory.UNKNOWN: "Unexpected error",
}


class ScrapbookError(Exception):
    """Base exception class for the scrapbook application."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.code = code or f"{category.value}_error"
        self.user_message = user_message or _DEFAULT_USER_MESSAGES[category]
        self.details = details or {}
        self.original_exception = original_exception

        self._log_error()

    def _log_error(self) -> None:
        error_context = {
            "category": self.category.value,
            "code": self.code,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

        log_error(self, error_context)

        if self.category is ErrorCategory.AUTHENTICATION:
            log_security_event(self.category.value, **error_context)


class AuthenticationError(ScrapbookError):
    """Missing, expired or invalid admin session."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.AUTHENTICATION,
            code=code or "auth_failed",
            user_message=user_message,
            details=details,
            original_exception=original_exception,
        )


class ValidationError(ScrapbookError):
    """Invalid or incomplete input."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            code=code or "validation_failed",
            user_message=user_message,
            details=details,
            original_exception=original_exception,
        )


class StorageError(ScrapbookError):
    """Failure writing or deleting an authoritative record or photo."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            code=code or "storage_error",
            user_message=user_message,
            details=details,
            original_exception=original_exception,
        )


class ImageProcessingError(ScrapbookError):
    """Failure converting an uploaded image."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.IMAGE_PROCESSING,
            code=code or "image_processing_failed",
            user_message=user_message,
            details=details,
            original_exception=original_exception,
        )


@dataclass(frozen=True)
class PhotoDeletionFailure:
    """A photo that could not be removed during a cascading entry delete."""

    url: str
    error: Exception
