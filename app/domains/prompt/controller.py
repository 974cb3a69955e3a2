"""Read-only prompt template endpoints."""

from fastapi import APIRouter, Body, Path, Query

from app.exceptions.chat import TemplateNotFoundError
from app.prompts.prompt_templates import (
    PROMPT_TEMPLATES,
    get_template_by_id,
    get_templates_by_category,
    process_template,
)
from app.schemas.base import SuccessResponse
from app.schemas.chat import TemplateRender

router = APIRouter(prefix="/v1/chatbot/prompts", tags=["prompts"])


@router.get("/templates", response_model=SuccessResponse)
async def list_templates(category: str | None = Query(None, description="Filter by category")):
    templates = get_templates_by_category(category) if category else list(PROMPT_TEMPLATES)
    return SuccessResponse(data=[t.model_dump(mode="json") for t in templates])


@router.get("/templates/{template_id}", response_model=SuccessResponse)
async def get_template(template_id: str = Path(...)):
    template = get_template_by_id(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    return SuccessResponse(data=template.model_dump(mode="json"))


@router.post("/templates/{template_id}/render", response_model=SuccessResponse)
async def render_template(template_id: str = Path(...), body: TemplateRender = Body(...)):
    """Fill a template's ``{{variable}}`` placeholders."""
    template = get_template_by_id(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    content = process_template(template.template, body.variables)
    return SuccessResponse(data={"id": template.id, "content": content})
