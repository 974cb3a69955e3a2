"""Chat schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_serializer

from models.message import MessageRole

from .base import BaseSchema, CamelSchema, to_utc_iso


class ConversationCreate(BaseSchema):
    """Schema for creating a conversation, optionally with a first user turn."""

    user_id: str = Field(..., description="Owning user identifier")
    title: str | None = Field(None, max_length=255, description="Optional conversation title")
    system_prompt: str | None = Field(None, description="Optional system prompt override")
    initial_message: str | None = Field(None, description="Optional first user message")


class ConversationUpdate(BaseSchema):
    """Schema for a partial conversation update."""

    title: str | None = Field(None, max_length=255)
    archived: bool | None = None


class MessageCreate(BaseSchema):
    """Schema for sending a user turn."""

    content: str = Field(..., description="Message content")
    role: Literal["user"] | None = Field(None, description="Only 'user' is accepted")


class ConversationResponse(CamelSchema):
    """Schema for conversation response."""

    id: int
    user_id: str
    title: str | None
    system_prompt: str | None
    created_at: datetime
    updated_at: datetime
    archived: bool

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return to_utc_iso(value)


class MessageResponse(CamelSchema):
    """Schema for message response."""

    id: int
    conversation_id: int
    role: MessageRole
    content: str
    created_at: datetime
    regenerated_from: int | None = None

    @field_serializer("created_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return to_utc_iso(value)


class ConversationCreated(CamelSchema):
    """Result of creating a conversation; messages present only with an initial turn."""

    conversation: ConversationResponse
    messages: list[MessageResponse] | None = None

    def to_json_dict(self) -> dict:
        data = self.model_dump(by_alias=True, mode="json")
        if self.messages is None:
            data.pop("messages")
        return data


class ConversationDetail(CamelSchema):
    """Conversation with its messages, oldest first."""

    conversation: ConversationResponse
    messages: list[MessageResponse] = Field(default_factory=list)


class MessageExchange(CamelSchema):
    """The user turn and the assistant reply produced by one send."""

    user_message: MessageResponse
    assistant_message: MessageResponse


class RegenerationResult(CamelSchema):
    """The untouched original reply and its regenerated sibling."""

    original_message: MessageResponse
    new_message: MessageResponse


class TemplateRender(BaseSchema):
    """Variables for rendering a prompt template."""

    variables: dict[str, str] = Field(default_factory=dict)


ConversationCreated.model_rebuild()
ConversationDetail.model_rebuild()
MessageExchange.model_rebuild()
RegenerationResult.model_rebuild()
