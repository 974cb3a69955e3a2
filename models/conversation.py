"""
Conversation model for chatbot threads.
"""

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text
from sqlalchemy.orm import relationship

from .base import BaseModel, utcnow

DEFAULT_CONVERSATION_TITLE = "New Conversation"


class Conversation(BaseModel):
    """
    Represents a user-owned conversation thread.

    Conversations exclusively own their messages; deleting a conversation
    removes every message that belongs to it.
    """

    __tablename__ = "conversations"
    __table_args__ = (
        Index("idx_conversations_user_archived_updated", "user_id", "archived", "updated_at"),
        {"sqlite_autoincrement": True},
    )

    user_id = Column(String(255), nullable=False)
    title = Column(String(255), nullable=True, default=DEFAULT_CONVERSATION_TITLE)
    system_prompt = Column(Text, nullable=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    archived = Column(Boolean, nullable=False, default=False)

    # Relationships
    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Message.created_at",
    )
