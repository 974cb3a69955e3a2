"""
Unit tests for Exception classes.

This module contains unit tests for the custom exception classes used
throughout the application.
"""

from fastapi import HTTPException, status

from app.exceptions.ai import (
    AIConfigurationError,
    AIServiceError,
    EmptyResponseError,
    UpstreamError,
)
from app.exceptions.base import BadRequestError, BaseAppException, NotFoundError, ValidationError
from app.exceptions.chat import (
    ConversationNotFoundError,
    InvalidMessageRoleError,
    MessageNotFoundError,
    NoUserMessageError,
    TemplateNotFoundError,
)


class TestBaseAppException:
    """Test cases for BaseAppException."""

    def test_base_exception_default_values(self):
        """Test BaseAppException with default values."""
        exc = BaseAppException("Test error")

        assert isinstance(exc, HTTPException)
        assert exc.message == "Test error"
        assert exc.status_code == 500
        assert exc.error_code == "INTERNAL_ERROR"
        assert exc.details == {}
        assert exc.detail["message"] == "Test error"
        assert exc.detail["error_code"] == "INTERNAL_ERROR"

    def test_validation_error_with_string_details(self):
        exc = ValidationError(details="user_id query parameter is required")

        assert isinstance(exc, BadRequestError)
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.message == "Validation error"
        assert exc.detail["details"] == "user_id query parameter is required"
        assert exc.public_details == "user_id query parameter is required"

    def test_structured_details_are_not_public(self):
        exc = NotFoundError(details={"id": 3})

        assert exc.details == {"id": 3}
        assert exc.public_details is None

    def test_not_found_defaults(self):
        exc = NotFoundError()

        assert exc.status_code == status.HTTP_404_NOT_FOUND
        assert exc.error_code == "NOT_FOUND"


class TestChatExceptions:
    """Test cases for conversation and message exceptions."""

    def test_conversation_not_found(self):
        exc = ConversationNotFoundError(12)

        assert isinstance(exc, NotFoundError)
        assert exc.status_code == 404
        assert exc.message == "Conversation not found"
        assert exc.detail["details"] == {"conversation_id": 12}

    def test_message_not_found(self):
        exc = MessageNotFoundError(7)

        assert exc.status_code == 404
        assert exc.message == "Message not found"
        assert exc.error_code == "MESSAGE_NOT_FOUND"

    def test_template_not_found(self):
        exc = TemplateNotFoundError("nope")

        assert exc.status_code == 404
        assert exc.detail["details"] == {"template_id": "nope"}

    def test_invalid_role(self):
        exc = InvalidMessageRoleError()

        assert exc.status_code == 400
        assert exc.message == "Can only regenerate assistant messages"

    def test_no_user_message(self):
        exc = NoUserMessageError()

        assert exc.status_code == 400
        assert exc.message == "No user message found to regenerate from"


class TestAIExceptions:
    """Test cases for completion provider exceptions."""

    def test_upstream_error(self):
        exc = UpstreamError(500, "internal")

        assert isinstance(exc, AIServiceError)
        assert exc.status_code == status.HTTP_502_BAD_GATEWAY
        assert exc.message == "OpenRouter API error: 500 - internal"
        assert exc.upstream_status == 500
        assert exc.body == "internal"

    def test_upstream_error_retryable(self):
        assert UpstreamError(429, "").is_retryable is True
        assert UpstreamError(503, "").is_retryable is True
        assert UpstreamError(400, "").is_retryable is False
        assert UpstreamError(401, "").is_retryable is False

    def test_upstream_public_message_omits_body(self):
        exc = UpstreamError(401, "key sk-or-v1-abc")

        assert exc.public_message == "AI service error"
        assert "sk-or-v1-abc" in exc.message

    def test_fixed_messages_are_public(self):
        assert EmptyResponseError().public_message == "No response from OpenRouter API"
        assert AIConfigurationError().public_message == "AI service is not properly configured"

    def test_empty_response(self):
        exc = EmptyResponseError()

        assert exc.status_code == 502
        assert exc.message == "No response from OpenRouter API"

    def test_configuration_error(self):
        exc = AIConfigurationError()

        assert exc.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert exc.error_code == "AI_CONFIGURATION_ERROR"
