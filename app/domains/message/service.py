"""Message service layer: user turns, assistant replies and regeneration."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.conversation.repository import ConversationRepository
from app.domains.message.repository import MessageRepository
from app.exceptions.ai import AIConfigurationError
from app.exceptions.chat import (
    ConversationNotFoundError,
    InvalidMessageRoleError,
    MessageNotFoundError,
    NoUserMessageError,
)
from app.prompts.builder import ChatMessage, ConversationContext
from app.schemas.chat import MessageExchange, MessageResponse, RegenerationResult
from app.services.completion_client import CompletionClient
from models.message import Message, MessageRole


logger = logging.getLogger(__name__)


def to_chat_history(messages: list[Message]) -> list[ChatMessage]:
    """Map stored rows to ``{role, content}`` pairs, preserving order."""
    return [{"role": m.role, "content": m.content} for m in messages]


class MessageService:
    """Service class for exchanging messages with the completion provider."""

    def __init__(self, db: AsyncSession, completion_client: CompletionClient | None = None):
        """Initialize message service.

        Args:
            db: Async database session for data operations.
            completion_client: Shared completion client; required by
                operations that produce assistant replies.
        """
        self.db = db
        self.conversations = ConversationRepository(db)
        self.messages = MessageRepository(db)
        self.completion_client = completion_client

    def _require_client(self) -> CompletionClient:
        if self.completion_client is None:
            raise AIConfigurationError()
        return self.completion_client

    async def send_message(self, conversation_id: int, content: str) -> MessageExchange:
        """Store a user turn, ask the provider for a reply and store it.

        The user message is committed before the completion call and is kept
        if that call fails.

        Args:
            conversation_id: Target conversation.
            content: User message text.

        Returns:
            The new user message and assistant reply.
        """
        conversation = await self.conversations.get(conversation_id)
        if not conversation:
            raise ConversationNotFoundError(conversation_id)
        client = self._require_client()

        logger.info(f"Sending message to conversation {conversation_id}")

        # Snapshot taken before the new user turn, which is passed separately
        history = await self.messages.list_for_conversation(conversation_id)

        user_message = await self.messages.create(conversation_id, MessageRole.USER, content)

        reply = await client.send_message(
            content,
            to_chat_history(history),
            ConversationContext(conversation_id=conversation_id, user_id=conversation.user_id),
        )

        assistant_message = await self.messages.create(conversation_id, MessageRole.ASSISTANT, reply)
        await self.conversations.touch(conversation_id)

        return MessageExchange(
            user_message=MessageResponse.model_validate(user_message),
            assistant_message=MessageResponse.model_validate(assistant_message),
        )

    async def regenerate_message(self, message_id: int) -> RegenerationResult:
        """Produce a new assistant reply for the turn that led to ``message_id``.

        The original row is left untouched; the new row records its lineage
        through ``regenerated_from``.
        """
        logger.info(f"Regenerating message {message_id}")

        original = await self.messages.get(message_id)
        if not original:
            raise MessageNotFoundError(message_id)
        if original.role != MessageRole.ASSISTANT.value:
            raise InvalidMessageRoleError()

        conversation = await self.conversations.get(original.conversation_id)
        if not conversation:
            raise ConversationNotFoundError(original.conversation_id)

        all_messages = await self.messages.list_for_conversation(original.conversation_id)
        prefix = [m for m in all_messages if m.created_at < original.created_at]

        last_user_message = next(
            (m for m in reversed(prefix) if m.role == MessageRole.USER.value), None
        )
        if last_user_message is None:
            raise NoUserMessageError()
        client = self._require_client()

        history = [m for m in prefix if m.id != original.id]

        reply = await client.send_message(
            last_user_message.content,
            to_chat_history(history),
            ConversationContext(
                conversation_id=original.conversation_id,
                user_id=conversation.user_id,
                regeneration=True,
            ),
        )

        new_message = await self.messages.create(
            original.conversation_id,
            MessageRole.ASSISTANT,
            reply,
            regenerated_from=original.id,
        )
        await self.conversations.touch(original.conversation_id)

        return RegenerationResult(
            original_message=MessageResponse.model_validate(original),
            new_message=MessageResponse.model_validate(new_message),
        )

    async def list_regenerations(self, message_id: int) -> list[MessageResponse]:
        """Replies regenerated from ``message_id``, oldest first."""
        original = await self.messages.get(message_id)
        if not original:
            raise MessageNotFoundError(message_id)

        regenerated = await self.messages.list_regenerations(message_id)
        return [MessageResponse.model_validate(m) for m in regenerated]
