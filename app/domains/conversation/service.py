"""Conversation service layer."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.conversation.repository import ConversationRepository
from app.domains.message.repository import MessageRepository
from app.exceptions.ai import AIConfigurationError
from app.exceptions.base import ValidationError
from app.exceptions.chat import ConversationNotFoundError
from app.prompts.builder import ConversationContext
from app.schemas.chat import (
    ConversationCreate,
    ConversationCreated,
    ConversationDetail,
    ConversationResponse,
    ConversationUpdate,
    MessageResponse,
)
from app.services.completion_client import CompletionClient
from models.message import MessageRole


logger = logging.getLogger(__name__)


class ConversationService:
    """Service class for conversation lifecycle operations."""

    def __init__(self, db: AsyncSession, completion_client: CompletionClient | None = None):
        """Initialize conversation service.

        Args:
            db: Async database session for data operations.
            completion_client: Client used when a conversation is created with
                an initial message. Not needed for any other operation.
        """
        self.db = db
        self.conversations = ConversationRepository(db)
        self.messages = MessageRepository(db)
        self.completion_client = completion_client

    async def create_conversation(self, data: ConversationCreate) -> ConversationCreated:
        """Create a conversation and, if given, answer its first user turn.

        The conversation and the user message are committed before the
        completion call; a provider failure leaves them in place without an
        assistant reply.
        """
        if data.initial_message and self.completion_client is None:
            raise AIConfigurationError("AI service is not configured; cannot answer initial_message")

        logger.info(f"Creating new conversation for user {data.user_id}")

        conversation = await self.conversations.create(
            user_id=data.user_id,
            title=data.title,
            system_prompt=data.system_prompt,
        )

        if not data.initial_message:
            return ConversationCreated(conversation=ConversationResponse.model_validate(conversation))

        user_message = await self.messages.create(
            conversation.id, MessageRole.USER, data.initial_message
        )

        reply = await self.completion_client.send_message(
            data.initial_message,
            [],
            ConversationContext(conversation_id=conversation.id, user_id=conversation.user_id),
        )

        assistant_message = await self.messages.create(conversation.id, MessageRole.ASSISTANT, reply)

        return ConversationCreated(
            conversation=ConversationResponse.model_validate(conversation),
            messages=[
                MessageResponse.model_validate(user_message),
                MessageResponse.model_validate(assistant_message),
            ],
        )

    async def list_conversations(self, user_id: str | None) -> list[ConversationResponse]:
        """List a user's non-archived conversations, most recently updated first."""
        if not user_id or not user_id.strip():
            raise ValidationError(
                "Validation error", details="user_id query parameter is required"
            )

        logger.info(f"Fetching conversations for user {user_id}")
        conversations = await self.conversations.list_active_for_user(user_id)
        return [ConversationResponse.model_validate(c) for c in conversations]

    async def get_conversation(self, conversation_id: int) -> ConversationDetail:
        """Get a conversation with its messages, oldest first."""
        conversation = await self.conversations.get(conversation_id)
        if not conversation:
            raise ConversationNotFoundError(conversation_id)

        messages = await self.messages.list_for_conversation(conversation_id)
        return ConversationDetail(
            conversation=ConversationResponse.model_validate(conversation),
            messages=[MessageResponse.model_validate(m) for m in messages],
        )

    async def update_conversation(
        self, conversation_id: int, data: ConversationUpdate
    ) -> ConversationResponse:
        """Apply a partial title/archived update; always bumps ``updated_at``."""
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        logger.info(f"Updating conversation {conversation_id} with {updates}")

        conversation = await self.conversations.update(conversation_id, **updates)
        if not conversation:
            raise ConversationNotFoundError(conversation_id)
        return ConversationResponse.model_validate(conversation)

    async def delete_conversation(self, conversation_id: int) -> bool:
        """Delete a conversation and its messages.

        Idempotent: deleting an absent id is not an error.

        Returns:
            True if a row was deleted, False if it was already absent.
        """
        deleted = await self.conversations.delete(conversation_id)
        if deleted is None:
            logger.info(f"Conversation {conversation_id} already absent, nothing to delete")
            return False

        logger.info(f"Deleted conversation {conversation_id}")
        return True
