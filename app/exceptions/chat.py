"""Conversation and message exceptions."""

from .base import BadRequestError, NotFoundError


class ConversationNotFoundError(NotFoundError):
    """Raised when a conversation is not found."""

    def __init__(self, conversation_id: int | None = None, message: str = "Conversation not found"):
        details = {"conversation_id": conversation_id} if conversation_id is not None else None
        super().__init__(message=message, details=details, error_code="CONVERSATION_NOT_FOUND")


class MessageNotFoundError(NotFoundError):
    """Raised when a message is not found."""

    def __init__(self, message_id: int | None = None, message: str = "Message not found"):
        details = {"message_id": message_id} if message_id is not None else None
        super().__init__(message=message, details=details, error_code="MESSAGE_NOT_FOUND")


class TemplateNotFoundError(NotFoundError):
    """Raised when a prompt template id is unknown."""

    def __init__(self, template_id: str, message: str = "Template not found"):
        super().__init__(
            message=message, details={"template_id": template_id}, error_code="TEMPLATE_NOT_FOUND"
        )


class InvalidMessageRoleError(BadRequestError):
    """Raised when an operation is attempted on a message with the wrong role."""

    def __init__(self, message: str = "Can only regenerate assistant messages"):
        super().__init__(message, error_code="INVALID_MESSAGE_ROLE")


class NoUserMessageError(BadRequestError):
    """Raised when regeneration has no preceding user turn to replay."""

    def __init__(self, message: str = "No user message found to regenerate from"):
        super().__init__(message, error_code="NO_USER_MESSAGE")
