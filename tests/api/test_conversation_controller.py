"""
API tests for conversation controller.

This module contains API endpoint tests for creating, listing, fetching,
updating and deleting conversations.
"""

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy import func, select

from models import Message

BASE_URL = "/v1/chatbot/conversations"


class TestConversationController:
    """Test cases for conversation API endpoints."""

    @pytest.mark.asyncio
    async def test_create_conversation(self, client: AsyncClient):
        """Test creating a conversation without an initial message."""
        response = await client.post(BASE_URL, json={"user_id": "user-1"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        conversation = data["data"]["conversation"]
        assert conversation["userId"] == "user-1"
        assert conversation["title"] == "New Conversation"
        assert conversation["systemPrompt"] is None
        assert conversation["archived"] is False
        assert conversation["createdAt"].endswith("Z")
        assert conversation["createdAt"] == conversation["updatedAt"]
        assert "messages" not in data["data"]

    @pytest.mark.asyncio
    async def test_create_conversation_with_initial_message(
        self, client: AsyncClient, completion_client
    ):
        """Test that an initial message is answered and both turns are returned."""
        response = await client.post(
            BASE_URL, json={"user_id": "user-1", "title": "Support", "initial_message": "hi"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["conversation"]["title"] == "Support"
        assert data["conversation"]["createdAt"] == data["conversation"]["updatedAt"]
        assert [m["role"] for m in data["messages"]] == ["user", "assistant"]
        assert [m["content"] for m in data["messages"]] == ["hi", "hello"]
        assert all(m["conversationId"] == data["conversation"]["id"] for m in data["messages"])
        completion_client.send_message.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_conversation_missing_user_id(self, client: AsyncClient):
        response = await client.post(BASE_URL, json={"title": "No owner"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Validation error"
        assert "user_id" in data["details"]

    @pytest.mark.asyncio
    async def test_create_conversation_title_too_long(self, client: AsyncClient):
        response = await client.post(BASE_URL, json={"user_id": "u", "title": "x" * 256})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_create_with_initial_message_when_ai_unconfigured(
        self, unconfigured_client: AsyncClient
    ):
        response = await unconfigured_client.post(
            BASE_URL, json={"user_id": "user-1", "initial_message": "hi"}
        )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_create_without_initial_message_when_ai_unconfigured(
        self, unconfigured_client: AsyncClient
    ):
        response = await unconfigured_client.post(BASE_URL, json={"user_id": "user-1"})

        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.asyncio
    async def test_list_conversations(self, client: AsyncClient):
        """Test that archived conversations are filtered out."""
        first = (await client.post(BASE_URL, json={"user_id": "user-1", "title": "A"})).json()
        second = (await client.post(BASE_URL, json={"user_id": "user-1", "title": "B"})).json()
        await client.post(BASE_URL, json={"user_id": "user-2", "title": "Other"})

        second_id = second["data"]["conversation"]["id"]
        await client.patch(f"{BASE_URL}/{second_id}", json={"archived": True})

        response = await client.get(BASE_URL, params={"user_id": "user-1"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert [c["id"] for c in data["data"]] == [first["data"]["conversation"]["id"]]

    @pytest.mark.asyncio
    async def test_list_conversations_most_recent_first(self, client: AsyncClient):
        first = (await client.post(BASE_URL, json={"user_id": "user-1"})).json()
        second = (await client.post(BASE_URL, json={"user_id": "user-1"})).json()
        first_id = first["data"]["conversation"]["id"]
        second_id = second["data"]["conversation"]["id"]

        # Renaming bumps updatedAt, moving the first conversation to the top
        await client.patch(f"{BASE_URL}/{first_id}", json={"title": "Renamed"})

        response = await client.get(BASE_URL, params={"user_id": "user-1"})

        assert [c["id"] for c in response.json()["data"]] == [first_id, second_id]

    @pytest.mark.asyncio
    async def test_list_conversations_without_user_id(self, client: AsyncClient):
        response = await client.get(BASE_URL)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Validation error"
        assert data["details"] == "user_id query parameter is required"

    @pytest.mark.asyncio
    async def test_list_conversations_unknown_user(self, client: AsyncClient):
        response = await client.get(BASE_URL, params={"user_id": "nobody"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_get_conversation(self, client: AsyncClient, conversation_with_messages):
        conversation, messages = conversation_with_messages

        response = await client.get(f"{BASE_URL}/{conversation.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["conversation"]["id"] == conversation.id
        assert [m["id"] for m in data["messages"]] == [m.id for m in messages]
        assert data["messages"][0]["regeneratedFrom"] is None

    @pytest.mark.asyncio
    async def test_get_conversation_not_found(self, client: AsyncClient):
        response = await client.get(f"{BASE_URL}/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"success": False, "error": "Conversation not found"}

    @pytest.mark.asyncio
    async def test_get_conversation_invalid_id(self, client: AsyncClient):
        response = await client.get(f"{BASE_URL}/not-a-number")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Validation error"

    @pytest.mark.asyncio
    async def test_update_conversation(self, client: AsyncClient, test_conversation):
        response = await client.patch(
            f"{BASE_URL}/{test_conversation.id}", json={"title": "Renamed", "archived": True}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["title"] == "Renamed"
        assert data["archived"] is True
        assert data["updatedAt"] >= data["createdAt"]

    @pytest.mark.asyncio
    async def test_update_conversation_not_found(self, client: AsyncClient):
        response = await client.patch(f"{BASE_URL}/999", json={"title": "x"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Conversation not found"

    @pytest.mark.asyncio
    async def test_delete_conversation(self, client: AsyncClient, conversation_with_messages, test_db):
        conversation, _ = conversation_with_messages

        response = await client.delete(f"{BASE_URL}/{conversation.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "message": "Conversation deleted successfully",
        }

        follow_up = await client.get(f"{BASE_URL}/{conversation.id}")
        assert follow_up.status_code == status.HTTP_404_NOT_FOUND

        result = await test_db.execute(
            select(func.count()).select_from(Message).where(
                Message.conversation_id == conversation.id
            )
        )
        assert result.scalar_one() == 0

    @pytest.mark.asyncio
    async def test_delete_conversation_twice(self, client: AsyncClient, test_conversation):
        first = await client.delete(f"{BASE_URL}/{test_conversation.id}")
        second = await client.delete(f"{BASE_URL}/{test_conversation.id}")

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_200_OK
        assert second.json()["success"] is True
