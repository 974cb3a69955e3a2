"""Message API controller with FastAPI endpoints."""

import logging

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_optional_completion_client
from app.domains.message.service import MessageService
from app.schemas.base import SuccessResponse
from app.schemas.chat import MessageCreate
from app.services.completion_client import CompletionClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/chatbot", tags=["messages"])


@router.post("/conversations/{conversation_id}/messages", response_model=SuccessResponse)
async def send_message(
    conversation_id: int = Path(..., description="Conversation ID"),
    data: MessageCreate = Body(...),
    db: AsyncSession = Depends(get_db),
    completion_client: CompletionClient | None = Depends(get_optional_completion_client),
):
    """Send a user turn and receive the assistant reply.

    Returns:
        The stored user message and assistant message
    """
    service = MessageService(db, completion_client)
    result = await service.send_message(conversation_id, data.content)
    return SuccessResponse(data=result.to_json_dict())


@router.post("/messages/{message_id}/regenerate", response_model=SuccessResponse)
async def regenerate_message(
    message_id: int = Path(..., description="Assistant message ID"),
    db: AsyncSession = Depends(get_db),
    completion_client: CompletionClient | None = Depends(get_optional_completion_client),
):
    """Regenerate an assistant reply, keeping the original message."""
    service = MessageService(db, completion_client)
    result = await service.regenerate_message(message_id)
    return SuccessResponse(data=result.to_json_dict())


@router.get("/messages/{message_id}/regenerations", response_model=SuccessResponse)
async def list_regenerations(
    message_id: int = Path(..., description="Message ID"),
    db: AsyncSession = Depends(get_db),
):
    """List replies regenerated from a message."""
    service = MessageService(db)
    messages = await service.list_regenerations(message_id)
    return SuccessResponse(data=[m.to_json_dict() for m in messages])
