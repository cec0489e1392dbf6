"""Dependency injection providers for FastAPI endpoints.

Components are created by the application factory and lifespan and stored on
app.state; these providers hand them to route handlers.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from swarmgate.config import SwarmGateSettings
from swarmgate.orchestrator import Orchestrator
from swarmgate.protocol import PerAgentGateway
from swarmgate.services import AgentService


@lru_cache
def get_settings() -> SwarmGateSettings:
    """Get the application settings instance.

    Cached so the same settings instance is reused across all requests.
    Settings are loaded from environment variables with the SWARMGATE_ prefix.
    """
    return SwarmGateSettings()


def get_orchestrator(request: Request) -> Orchestrator:
    return request.app.state.orchestrator


def get_agent_service(request: Request) -> AgentService:
    """Get the AgentService created during application startup.

    Raises:
        HTTPException: If startup has not completed (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "agent_service"):
        raise HTTPException(status_code=503, detail="Agent service not initialized")
    return request.app.state.agent_service


def get_gateway(request: Request) -> PerAgentGateway:
    return get_agent_service(request).gateway
