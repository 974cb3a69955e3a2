"""Assembly of the system message sent ahead of every completion request."""

import json
from datetime import UTC, datetime
from typing import Literal, TypedDict

from pydantic import BaseModel, ConfigDict, Field

from app.prompts.system_instructions import DEFAULT_SYSTEM_INSTRUCTION, SystemInstruction
from app.schemas.base import to_utc_iso

SERVICE_NAME = "Customer Support System"


class ChatMessage(TypedDict):
    role: Literal["system", "user", "assistant"]
    content: str


class ConversationContext(BaseModel):
    """Per-call context appended to the system message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    conversation_id: int | None = Field(default=None, alias="conversationId")
    user_id: str | None = Field(default=None, alias="userId")
    regeneration: bool | None = None

    def to_json(self) -> str:
        return json.dumps(
            self.model_dump(by_alias=True, exclude_none=True),
            separators=(",", ":"),
            ensure_ascii=False,
        )


def build_system_prompt(
    context: ConversationContext | None = None,
    instruction: SystemInstruction = DEFAULT_SYSTEM_INSTRUCTION,
    now: datetime | None = None,
) -> str:
    """Render the system prompt text.

    Sections, in order: instruction text, personality dump, rule bullets,
    a current-context header stamped with ``now`` and, when given, the
    serialized per-call context.
    """
    now = now or datetime.now(UTC)
    personality = json.dumps(
        instruction.personality.model_dump(by_alias=True), indent=2, ensure_ascii=False
    )
    rules = "\n".join(f"- {rule}" for rule in instruction.rules)
    context_line = f"- Context: {context.to_json()}" if context else ""

    return (
        f"{instruction.instruction}\n"
        f"\n"
        f"PERSONALITY DETAILS:\n"
        f"{personality}\n"
        f"\n"
        f"CONVERSATION RULES:\n"
        f"{rules}\n"
        f"\n"
        f"CURRENT CONTEXT:\n"
        f"- Service: {SERVICE_NAME}\n"
        f"- Timestamp: {to_utc_iso(now)}\n"
        f"{context_line}\n"
    )


def build_system_message(
    context: ConversationContext | None = None,
    instruction: SystemInstruction = DEFAULT_SYSTEM_INSTRUCTION,
) -> ChatMessage:
    """Build a fresh system-role message; never cached so the timestamp is current."""
    return {"role": "system", "content": build_system_prompt(context, instruction)}


def build_messages(
    user_text: str,
    history: list[ChatMessage] | tuple[ChatMessage, ...] = (),
    context: ConversationContext | None = None,
    instruction: SystemInstruction = DEFAULT_SYSTEM_INSTRUCTION,
) -> list[ChatMessage]:
    """System message, then history oldest to newest, then the new user turn."""
    return [
        build_system_message(context, instruction),
        *({"role": m["role"], "content": m["content"]} for m in history),
        {"role": "user", "content": user_text},
    ]
