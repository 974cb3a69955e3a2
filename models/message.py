"""
Message model for conversation turns.
"""

import enum

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import BaseModel


class MessageRole(str, enum.Enum):
    """Message role enumeration."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """
    Represents one turn in a conversation.

    Messages are never edited after insert. A regenerated assistant reply is a
    new row whose ``regenerated_from`` points back at the reply it replaces.
    """

    __tablename__ = "messages"
    __table_args__ = (
        Index("idx_messages_conversation_created", "conversation_id", "created_at"),
        {"sqlite_autoincrement": True},
    )

    conversation_id = Column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False
    )
    # Stored as plain text ('system', 'user', 'assistant'), validated in the schema layer
    role = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    regenerated_from = Column(
        Integer, ForeignKey("messages.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    conversation = relationship("Conversation", back_populates="messages")
    regenerated_from_message = relationship(
        "Message", remote_side="Message.id", foreign_keys=[regenerated_from]
    )
