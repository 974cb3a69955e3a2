"""Canned reply templates with ``{{variable}}`` placeholders."""

import re

from pydantic import BaseModel, ConfigDict


class PromptTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    template: str
    variables: tuple[str, ...]
    description: str


PROMPT_TEMPLATES: tuple[PromptTemplate, ...] = (
    PromptTemplate(
        id="greeting",
        name="Initial Greeting",
        category="conversation-flow",
        template="Halo! Saya AI Assistant {{service_name}}. Ada yang bisa saya bantu hari ini?",
        variables=("service_name",),
        description="Sapaan awal untuk memulai percakapan",
    ),
    PromptTemplate(
        id="clarification",
        name="Request Clarification",
        category="conversation-flow",
        template=(
            "Maaf, saya perlu klarifikasi lebih lanjut tentang {{topic}}. Bisakah Anda "
            "jelaskan lebih detail mengenai {{specific_aspect}}?"
        ),
        variables=("topic", "specific_aspect"),
        description="Meminta klarifikasi ketika informasi tidak jelas",
    ),
    PromptTemplate(
        id="escalation",
        name="Escalate to Human",
        category="escalation",
        template=(
            "Terima kasih atas kesabaran Anda. Saya akan menghubungkan Anda dengan specialist "
            "kami sekarang untuk penanganan yang lebih baik."
        ),
        variables=(),
        description="Eskalasi ke customer service manusia",
    ),
    PromptTemplate(
        id="confirmation",
        name="Confirm Information",
        category="conversation-flow",
        template="Baik, saya konfirmasi bahwa {{information}}. Apakah ini sudah benar?",
        variables=("information",),
        description="Konfirmasi informasi yang diberikan pengguna",
    ),
    PromptTemplate(
        id="solution-provided",
        name="Solution Provided",
        category="resolution",
        template="Saya sudah {{action}}. Apakah ada hal lain yang bisa saya bantu?",
        variables=("action",),
        description="Konfirmasi setelah memberikan solusi",
    ),
)


def process_template(template: str, variables: dict[str, str]) -> str:
    """Replace ``{{name}}`` placeholders with values.

    Placeholders without a matching variable are left as-is.
    """
    result = template
    for key, value in variables.items():
        result = re.sub(r"\{\{" + re.escape(key) + r"\}\}", lambda _m, v=str(value): v, result)
    return result


def get_template_by_id(template_id: str) -> PromptTemplate | None:
    return next((t for t in PROMPT_TEMPLATES if t.id == template_id), None)


def get_templates_by_category(category: str) -> list[PromptTemplate]:
    return [t for t in PROMPT_TEMPLATES if t.category == category]
