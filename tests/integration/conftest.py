"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that ensure
proper test isolation and mocking for API endpoint tests: the local agent's
Ollama client is mocked, and external agents are served by an
httpx.MockTransport instead of the network.
"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio

REMOTE_BASE_URL = "http://remote.example"


def fake_remote_agent(request: httpx.Request) -> httpx.Response:
    """Minimal external agent: a card endpoint and a JSON-RPC endpoint."""
    if request.method == "GET" and request.url.path == "/.well-known/agent-card.json":
        return httpx.Response(
            200,
            json={
                "name": "Code Reviewer",
                "description": "Reviews pull requests",
                "url": f"{REMOTE_BASE_URL}/rpc",
                "version": "1.0.0",
                "protocolVersion": "0.3.0",
                "capabilities": {},
                "skills": [
                    {
                        "id": "review",
                        "name": "code-review",
                        "description": "Review a diff",
                        "tags": ["code"],
                    },
                    {
                        "id": "lint",
                        "name": "code-lint",
                        "description": "Lint a file",
                        "tags": ["code"],
                    },
                ],
                "defaultInputModes": ["text/plain"],
                "defaultOutputModes": ["text/plain"],
            },
        )

    if request.method == "POST" and request.url.path == "/rpc":
        rpc = json.loads(request.content)
        message = rpc["params"]["message"]
        text = message["parts"][0]["text"]
        return httpx.Response(
            200,
            json={
                "jsonrpc": "2.0",
                "id": rpc["id"],
                "result": {
                    "kind": "task",
                    "id": "remote-task-1",
                    "contextId": message.get("contextId", "ctx"),
                    "status": {"state": "completed"},
                    "history": [
                        message,
                        {
                            "kind": "message",
                            "role": "agent",
                            "messageId": "m-2",
                            "parts": [{"kind": "text", "text": f"Reviewed: {text}"}],
                        },
                    ],
                    "artifacts": [],
                },
            },
        )

    return httpx.Response(404, json={"error": "not found"})


@pytest.fixture(autouse=True)
def mock_ollama_client():
    """Mock OllamaClient for all integration tests.

    This fixture patches the OllamaClient class before the app is created,
    ensuring the lifespan uses our mock instead of creating a real client.
    """
    with patch("swarmgate.app.OllamaClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.host = "http://localhost:11434"
        mock_instance.check_connection.return_value = True
        mock_instance.chat.return_value = (
            "Hello from the local model",
            {"done": True, "eval_count": 7, "prompt_eval_count": 12},
        )

        mock_client_class.return_value = mock_instance

        yield mock_instance


@pytest_asyncio.fixture
async def remote_http_client(test_app, async_client):
    """Route the agent service's outbound HTTP through the fake remote agent.

    Depends on async_client so the lifespan has already created the service.
    """
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_remote_agent))
    test_app.state.agent_service.http_client = client
    yield client
    await client.aclose()
