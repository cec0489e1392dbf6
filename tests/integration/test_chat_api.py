"""Integration tests for the REST chat endpoint.

Tests POST /api/v1/chat with a full app setup: default agent routing,
explicit agent selection, conversation ids and error cases.
"""

import pytest
from httpx import AsyncClient

REMOTE_BASE_URL = "http://remote.example"


class TestChat:
    """Tests for POST /api/v1/chat."""

    @pytest.mark.asyncio
    async def test_chat_uses_default_agent(
        self, async_client: AsyncClient, mock_ollama_client
    ):
        """A message without agentId is answered by the local default agent."""
        response = await async_client.post(
            "/api/v1/chat", json={"message": "Hi there"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Hello from the local model"
        assert data["metadata"]["agentId"] == "assistant"
        assert data["metadata"]["model"] == "llama3.2:latest"
        assert data["conversationId"]

        messages = mock_ollama_client.chat.call_args.kwargs["messages"]
        assert messages[-1] == {"role": "user", "content": "Hi there"}

    @pytest.mark.asyncio
    async def test_chat_keeps_conversation_id(self, async_client: AsyncClient):
        """A provided conversationId is echoed back."""
        response = await async_client.post(
            "/api/v1/chat",
            json={"message": "Hi", "conversationId": "conv-1", "userId": "alice"},
        )

        assert response.status_code == 200
        assert response.json()["conversationId"] == "conv-1"

    @pytest.mark.asyncio
    async def test_chat_generates_distinct_conversation_ids(
        self, async_client: AsyncClient
    ):
        first = await async_client.post("/api/v1/chat", json={"message": "one"})
        second = await async_client.post("/api/v1/chat", json={"message": "two"})

        assert first.json()["conversationId"] != second.json()["conversationId"]

    @pytest.mark.asyncio
    async def test_chat_continues_local_conversation(
        self, async_client: AsyncClient, mock_ollama_client
    ):
        """The local agent remembers earlier turns of the same conversation."""
        await async_client.post(
            "/api/v1/chat", json={"message": "My name is Ada", "conversationId": "c"}
        )
        await async_client.post(
            "/api/v1/chat", json={"message": "What is my name?", "conversationId": "c"}
        )

        messages = mock_ollama_client.chat.call_args.kwargs["messages"]
        contents = [m["content"] for m in messages]
        assert "My name is Ada" in contents
        assert contents[-1] == "What is my name?"

    @pytest.mark.asyncio
    async def test_chat_routes_to_external_agent(
        self, async_client: AsyncClient, remote_http_client
    ):
        """agentId selects a registered external agent."""
        register = await async_client.post(
            "/api/v1/agents/register",
            json={"id": "reviewer", "name": "Code Reviewer", "url": REMOTE_BASE_URL},
        )
        assert register.status_code == 200

        response = await async_client.post(
            "/api/v1/chat", json={"message": "diff --git", "agentId": "reviewer"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Reviewed: diff --git"
        assert data["metadata"]["agentId"] == "reviewer"
        assert data["metadata"]["remote"] is True

    @pytest.mark.asyncio
    async def test_chat_missing_message(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/chat", json={"userId": "alice"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required field: message"}

    @pytest.mark.asyncio
    async def test_chat_empty_message(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/chat", json={"message": ""})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required field: message"

    @pytest.mark.asyncio
    async def test_chat_unknown_agent(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/chat", json={"message": "Hi", "agentId": "nope"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Agent not found: nope"}

    @pytest.mark.asyncio
    async def test_chat_agent_failure(
        self, async_client: AsyncClient, mock_ollama_client
    ):
        """An agent error becomes a 500 with the error message."""
        mock_ollama_client.chat.side_effect = RuntimeError("model crashed")

        response = await async_client.post("/api/v1/chat", json={"message": "Hi"})

        assert response.status_code == 500
        assert response.json() == {"error": "model crashed"}

    @pytest.mark.asyncio
    async def test_chat_records_tasks(self, async_client: AsyncClient, test_app):
        await async_client.post(
            "/api/v1/chat", json={"message": "Hi", "conversationId": "tracked"}
        )

        tasks = test_app.state.orchestrator.task_manager.list_by_context("tracked")
        assert len(tasks) == 1
        assert tasks[0].state == "completed"
        assert tasks[0].agent_id == "assistant"

    @pytest.mark.asyncio
    async def test_chat_malformed_body(self, async_client: AsyncClient):
        """Bodies that fail schema validation get a 400 with an error field."""
        response = await async_client.post(
            "/api/v1/chat", json={"message": ["not", "a", "string"]}
        )

        assert response.status_code == 400
        assert "error" in response.json()
