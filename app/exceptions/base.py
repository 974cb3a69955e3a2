# ruff: noqa: D107
"""Base exception classes.

Every application error is an ``HTTPException`` whose ``detail`` carries the
message, a machine-readable code and optional details; the global handlers
in ``app.main`` turn it into the ``{success: false, error, details?}`` body.
"""

from typing import Any

from fastapi import HTTPException


class BaseAppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | str | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(
            status_code=status_code,
            detail={"message": message, "error_code": error_code, "details": details},
        )

    @property
    def public_message(self) -> str:
        """Message safe to show any client."""
        return self.message

    @property
    def public_details(self) -> str | None:
        """Details safe to show any client: only human-readable strings."""
        return self.details if isinstance(self.details, str) else None


class NotFoundError(BaseAppException):
    """Exception raised when a resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
        error_code: str = "NOT_FOUND",
    ):
        super().__init__(message=message, status_code=404, error_code=error_code, details=details)


class BadRequestError(BaseAppException):
    """Exception raised when a request is well-formed but cannot be honoured."""

    def __init__(
        self,
        message: str,
        error_code: str = "BAD_REQUEST",
        details: dict[str, Any] | str | None = None,
    ):
        super().__init__(message=message, status_code=400, error_code=error_code, details=details)


class ValidationError(BadRequestError):
    """Exception raised when validation fails."""

    def __init__(
        self,
        message: str = "Validation error",
        details: dict[str, Any] | str | None = None,
    ):
        super().__init__(message, error_code="VALIDATION_ERROR", details=details)
