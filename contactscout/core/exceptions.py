"""Custom exception classes for standardized error handling."""

from typing import Any


class BaseAPIException(Exception):
    """Base exception class for all API exceptions."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(BaseAPIException):
    """Caller input contained no usable domains."""

    def __init__(
        self,
        message: str = "Please enter at least one domain",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details=details,
        )


class UpstreamException(BaseAPIException):
    """Extraction provider kept failing after every retry attempt."""

    def __init__(
        self,
        last_error: BaseException | None = None,
        attempts: int = 0,
        message: str = "Failed to fetch data",
    ):
        self.last_error = last_error
        self.attempts = attempts
        super().__init__(
            message=message,
            error_code="UPSTREAM_ERROR",
            status_code=500,
        )


class PersistenceException(BaseAPIException):
    """Result store rejected a write."""

    def __init__(
        self,
        message: str = "Failed to save results",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            error_code="PERSISTENCE_ERROR",
            status_code=500,
            details=details,
        )
