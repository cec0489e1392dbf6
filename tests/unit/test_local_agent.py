"""Unit tests for LocalAgent."""

from unittest.mock import AsyncMock

import pytest

from swarmgate.agents import LocalAgent
from swarmgate.orchestrator import AgentHandle, ChatTurn


@pytest.fixture
def mock_ollama_client():
    """Create a mock OllamaClient."""
    mock_client = AsyncMock()
    mock_client.chat.return_value = (
        "Paris.",
        {"done": True, "eval_count": 3, "prompt_eval_count": 20},
    )
    return mock_client


@pytest.fixture
def agent(mock_ollama_client) -> LocalAgent:
    return LocalAgent(
        agent_id="assistant",
        name="Assistant",
        ollama_client=mock_ollama_client,
        model="llama3.2:latest",
        system_prompt="Be brief.",
        max_history=4,
    )


def test_local_agent_is_an_agent_handle(agent):
    assert isinstance(agent, AgentHandle)


@pytest.mark.asyncio
async def test_handle_sends_system_prompt_and_text(agent, mock_ollama_client):
    result = await agent.handle("ctx", "Capital of France?")

    assert result.text == "Paris."
    assert result.metadata == {
        "model": "llama3.2:latest",
        "eval_count": 3,
        "prompt_eval_count": 20,
    }
    call = mock_ollama_client.chat.call_args.kwargs
    assert call["model"] == "llama3.2:latest"
    assert call["messages"] == [
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "Capital of France?"},
    ]


@pytest.mark.asyncio
async def test_memory_is_per_context(agent, mock_ollama_client):
    await agent.handle("ctx-a", "first")
    await agent.handle("ctx-b", "other")
    await agent.handle("ctx-a", "second")

    messages = mock_ollama_client.chat.call_args.kwargs["messages"]
    assert [m["content"] for m in messages] == ["Be brief.", "first", "Paris.", "second"]
    assert len(agent.conversation("ctx-b")) == 2


@pytest.mark.asyncio
async def test_memory_is_capped(agent):
    for i in range(5):
        await agent.handle("ctx", f"q{i}")

    turns = agent.conversation("ctx")
    assert len(turns) == 4
    assert turns[0] == ChatTurn(role="user", content="q3")


@pytest.mark.asyncio
async def test_explicit_history_replaces_memory(agent, mock_ollama_client):
    await agent.handle("ctx", "remembered")
    history = [ChatTurn(role="user", content="given"), ChatTurn(role="assistant", content="ok")]

    await agent.handle("ctx", "now", history=history)

    messages = mock_ollama_client.chat.call_args.kwargs["messages"]
    assert [m["content"] for m in messages] == ["Be brief.", "given", "ok", "now"]
    # Caller-managed history is not mixed into the agent's own memory
    assert len(agent.conversation("ctx")) == 2


@pytest.mark.asyncio
async def test_errors_propagate(agent, mock_ollama_client):
    mock_ollama_client.chat.side_effect = RuntimeError("model not found")

    with pytest.raises(RuntimeError, match="model not found"):
        await agent.handle("ctx", "hi")

    assert agent.conversation("ctx") == []
