# ruff: noqa: D107
"""Completion provider exceptions."""

from typing import Any

from .base import BaseAppException


class AIServiceError(BaseAppException):
    """Base exception for completion provider errors."""

    def __init__(
        self,
        message: str = "AI service error occurred",
        error_code: str = "AI_SERVICE_ERROR",
        details: dict[str, Any] | None = None,
        status_code: int = 502,
    ):
        super().__init__(message, status_code=status_code, error_code=error_code, details=details)


class UpstreamError(AIServiceError):
    """Exception raised when the provider answers with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.upstream_status = status_code
        self.body = body
        super().__init__(
            f"OpenRouter API error: {status_code} - {body}",
            "AI_UPSTREAM_ERROR",
            {"upstream_status": status_code, "body": body},
        )

    @property
    def public_message(self) -> str:
        # Never includes the provider body
        return "AI service error"

    @property
    def is_retryable(self) -> bool:
        return self.upstream_status == 429 or self.upstream_status >= 500


class EmptyResponseError(AIServiceError):
    """Exception raised when the provider returns no choices."""

    def __init__(self, message: str = "No response from OpenRouter API"):
        super().__init__(message, "AI_EMPTY_RESPONSE")


class AIConfigurationError(AIServiceError):
    """Exception raised when the completion client is not properly configured."""

    def __init__(
        self,
        message: str = "AI service is not properly configured",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "AI_CONFIGURATION_ERROR", details, status_code=503)
