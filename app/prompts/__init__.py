"""Static prompt data and the system-message builder."""

from .builder import (
    ChatMessage,
    ConversationContext,
    build_messages,
    build_system_message,
    build_system_prompt,
)
from .prompt_templates import (
    PROMPT_TEMPLATES,
    PromptTemplate,
    get_template_by_id,
    get_templates_by_category,
    process_template,
)
from .system_instructions import DEFAULT_SYSTEM_INSTRUCTION, ChatbotPersonality, SystemInstruction

__all__ = [
    "ChatMessage",
    "ConversationContext",
    "build_messages",
    "build_system_message",
    "build_system_prompt",
    "PROMPT_TEMPLATES",
    "PromptTemplate",
    "get_template_by_id",
    "get_templates_by_category",
    "process_template",
    "DEFAULT_SYSTEM_INSTRUCTION",
    "ChatbotPersonality",
    "SystemInstruction",
]
