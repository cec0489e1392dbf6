"""Health check and status endpoints."""

import logging

from fastapi import APIRouter, Request

from swarmgate.models.health import ChannelStatus, HealthResponse, StatusResponse
from swarmgate.ollama import OllamaClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of swarmgate. Also checks
    connectivity to the Ollama server if a local agent is configured.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    from swarmgate import __version__

    ollama_connected = None
    ollama_host = None

    if hasattr(request.app.state, "ollama_client"):
        ollama_client: OllamaClient = request.app.state.ollama_client
        ollama_host = ollama_client.host

        try:
            ollama_connected = await ollama_client.check_connection()
            logger.debug(f"Ollama connectivity check: {ollama_connected}")
        except Exception as e:
            logger.warning(f"Ollama connectivity check failed: {e}")
            ollama_connected = False

    return HealthResponse(
        status="ok",
        version=__version__,
        ollama_connected=ollama_connected,
        ollama_host=ollama_host,
    )


@router.get("/status", response_model=StatusResponse)
async def status(request: Request) -> StatusResponse:
    """Operational snapshot: agents, channels, queues and task counts."""
    state = request.app.state
    orchestrator = state.orchestrator
    channel_manager = state.channel_manager
    default_agent = orchestrator.get_default_agent()
    service = getattr(state, "agent_service", None)

    return StatusResponse(
        agents=len(orchestrator.list_agents()),
        default_agent=default_agent.id if default_agent else None,
        channels={
            name: ChannelStatus(**flags)
            for name, flags in channel_manager.get_status().items()
        },
        inbound_queue=state.bus.inbound_size,
        outbound_queue=state.bus.outbound_size,
        dropped_outbound=channel_manager.dropped_count,
        tasks=orchestrator.task_manager.counts(),
        cached_handlers=service.gateway.cached_agent_ids if service else [],
    )
