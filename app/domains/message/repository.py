"""Repository for message persistence operations."""

from typing import Any

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models.base import utcnow
from models.message import Message, MessageRole


class MessageRepository:
    """Typed access to the ``messages`` table.

    The services only ever insert messages; ``update`` and ``delete`` exist
    for maintenance and return ``None`` when the id does not exist.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        conversation_id: int,
        role: MessageRole,
        content: str,
        regenerated_from: int | None = None,
    ) -> Message:
        message = Message(
            conversation_id=conversation_id,
            role=MessageRole(role).value,
            content=content,
            regenerated_from=regenerated_from,
            created_at=utcnow(),
        )
        self.db.add(message)
        await self._commit()
        await self.db.refresh(message)
        return message

    async def get(self, message_id: int) -> Message | None:
        query = select(Message).where(Message.id == message_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_conversation(self, conversation_id: int) -> list[Message]:
        """All messages of a conversation, oldest first."""
        query = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at, Message.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_regenerations(self, message_id: int) -> list[Message]:
        """Messages whose ``regenerated_from`` points at ``message_id``, oldest first."""
        query = (
            select(Message)
            .where(Message.regenerated_from == message_id)
            .order_by(Message.created_at, Message.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update(self, message_id: int, **fields: Any) -> Message | None:
        message = await self.get(message_id)
        if message is None:
            return None

        if "role" in fields:
            fields["role"] = MessageRole(fields["role"]).value
        for field, value in fields.items():
            setattr(message, field, value)

        await self._commit()
        await self.db.refresh(message)
        return message

    async def delete(self, message_id: int) -> Message | None:
        """Delete one message; replies regenerated from it lose their lineage pointer."""
        message = await self.get(message_id)
        if message is None:
            return None

        try:
            await self.db.execute(delete(Message).where(Message.id == message_id))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return message

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
