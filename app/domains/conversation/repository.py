"""Repository for conversation persistence operations."""

from typing import Any

from sqlalchemy import delete, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models.base import utcnow
from models.conversation import DEFAULT_CONVERSATION_TITLE, Conversation
from models.message import Message


class ConversationRepository:
    """Typed access to the ``conversations`` table.

    Every write commits and returns the affected row; updates and deletes
    return ``None`` when the id does not exist.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        user_id: str,
        title: str | None = None,
        system_prompt: str | None = None,
    ) -> Conversation:
        now = utcnow()
        conversation = Conversation(
            user_id=user_id,
            title=title or DEFAULT_CONVERSATION_TITLE,
            system_prompt=system_prompt,
            archived=False,
            created_at=now,
            updated_at=now,
        )
        self.db.add(conversation)
        await self._commit()
        await self.db.refresh(conversation)
        return conversation

    async def get(self, conversation_id: int) -> Conversation | None:
        query = select(Conversation).where(Conversation.id == conversation_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_active_for_user(self, user_id: str) -> list[Conversation]:
        """Non-archived conversations of a user, most recently updated first."""
        query = (
            select(Conversation)
            .where(Conversation.user_id == user_id, Conversation.archived.is_(False))
            .order_by(desc(Conversation.updated_at), desc(Conversation.id))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update(self, conversation_id: int, **fields: Any) -> Conversation | None:
        """Apply ``fields`` and bump ``updated_at``, even when nothing else changed."""
        conversation = await self.get(conversation_id)
        if conversation is None:
            return None

        for field, value in fields.items():
            setattr(conversation, field, value)
        conversation.updated_at = max(utcnow(), conversation.created_at)

        await self._commit()
        await self.db.refresh(conversation)
        return conversation

    async def touch(self, conversation_id: int) -> Conversation | None:
        return await self.update(conversation_id)

    async def delete(self, conversation_id: int) -> Conversation | None:
        """Delete a conversation and all of its messages in one transaction."""
        conversation = await self.get(conversation_id)
        if conversation is None:
            return None

        try:
            await self.db.execute(delete(Message).where(Message.conversation_id == conversation_id))
            await self.db.execute(delete(Conversation).where(Conversation.id == conversation_id))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return conversation

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
