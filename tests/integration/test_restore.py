"""Integration tests for startup: configured agents and agents restored from disk."""

import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from swarmgate import create_app
from swarmgate.agents import ExternalAgentDefinition
from swarmgate.store import RegisteredAgent, RegistryStore


@pytest.mark.asyncio
async def test_active_stored_agents_are_restored(test_settings):
    store = RegistryStore(test_settings.resolved_registry_dir)
    store.register(
        RegisteredAgent(id="kept", name="Kept", url="http://127.0.0.1:9/unreachable")
    )
    store.register(
        RegisteredAgent(
            id="retired",
            name="Retired",
            url="http://127.0.0.1:9/unreachable",
            status="inactive",
        )
    )

    app = create_app(settings=test_settings)
    async with app.router.lifespan_context(app):
        orchestrator = app.state.orchestrator
        assert orchestrator.get_agent("kept") is not None
        assert orchestrator.get_agent("retired") is None
        # The local agent stays the default
        assert orchestrator.get_default_agent().id == "assistant"


@pytest.mark.asyncio
async def test_configured_agents_are_registered_as_system(test_settings):
    test_settings.external_agents = [
        ExternalAgentDefinition(
            id="configured", name="Configured", url="http://127.0.0.1:9/unreachable"
        )
    ]

    app = create_app(settings=test_settings)
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v1/agents")

    assert "configured" in [agent["id"] for agent in response.json()["agents"]]
    stored = json.loads(
        (test_settings.resolved_registry_dir / "configured.json").read_text()
    )
    assert stored["created_by"] == "system"


@pytest.mark.asyncio
async def test_local_agent_can_be_disabled(test_settings):
    test_settings.local_agent_enabled = False

    app = create_app(settings=test_settings)
    async with app.router.lifespan_context(app):
        assert app.state.orchestrator.list_agents() == []
        assert not hasattr(app.state, "ollama_client")
        assert isinstance(app.state.http_client, httpx.AsyncClient)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post("/api/v1/chat", json={"message": "Hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "No agent registered"}


@pytest.mark.asyncio
async def test_configured_agent_keeps_user_registration(test_settings):
    store = RegistryStore(test_settings.resolved_registry_dir)
    store.register(
        RegisteredAgent(
            id="shared",
            name="Shared",
            url="http://127.0.0.1:9/unreachable",
            created_by="user",
            created_at="2024-05-01T12:00:00Z",
        )
    )
    test_settings.external_agents = [
        ExternalAgentDefinition(
            id="shared", name="Shared", url="http://127.0.0.1:9/unreachable"
        )
    ]

    app = create_app(settings=test_settings)
    async with app.router.lifespan_context(app):
        assert app.state.orchestrator.get_agent("shared") is not None

    stored = RegistryStore(test_settings.resolved_registry_dir).get("shared")
    assert stored.created_by == "user"
    assert stored.created_at == "2024-05-01T12:00:00Z"
