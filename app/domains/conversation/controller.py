"""Conversation API controller with FastAPI endpoints."""

import logging

from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_optional_completion_client
from app.domains.conversation.service import ConversationService
from app.schemas.base import StatusResponse, SuccessResponse
from app.schemas.chat import ConversationCreate, ConversationUpdate
from app.services.completion_client import CompletionClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/chatbot/conversations", tags=["conversations"])


@router.post("", response_model=SuccessResponse)
async def create_conversation(
    data: ConversationCreate = Body(...),
    db: AsyncSession = Depends(get_db),
    completion_client: CompletionClient | None = Depends(get_optional_completion_client),
):
    """Create a conversation, optionally answering an initial message."""
    service = ConversationService(db, completion_client)
    result = await service.create_conversation(data)
    return SuccessResponse(data=result.to_json_dict())


@router.get("", response_model=SuccessResponse)
async def list_conversations(
    user_id: str | None = Query(None, description="Owning user identifier"),
    db: AsyncSession = Depends(get_db),
):
    """List a user's non-archived conversations."""
    service = ConversationService(db)
    conversations = await service.list_conversations(user_id)
    return SuccessResponse(data=[c.to_json_dict() for c in conversations])


@router.get("/{conversation_id}", response_model=SuccessResponse)
async def get_conversation(
    conversation_id: int = Path(..., description="Conversation ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a conversation with all of its messages."""
    logger.info(f"Fetching conversation {conversation_id}")
    service = ConversationService(db)
    result = await service.get_conversation(conversation_id)
    return SuccessResponse(data=result.to_json_dict())


@router.patch("/{conversation_id}", response_model=SuccessResponse)
async def update_conversation(
    conversation_id: int = Path(..., description="Conversation ID"),
    data: ConversationUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Update a conversation's title and/or archived flag."""
    service = ConversationService(db)
    conversation = await service.update_conversation(conversation_id, data)
    return SuccessResponse(data=conversation.to_json_dict())


@router.delete("/{conversation_id}", response_model=StatusResponse)
async def delete_conversation(
    conversation_id: int = Path(..., description="Conversation ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a conversation and its messages."""
    logger.info(f"Deleting conversation {conversation_id}")
    service = ConversationService(db)
    await service.delete_conversation(conversation_id)
    return StatusResponse(message="Conversation deleted successfully")
