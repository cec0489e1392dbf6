"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from swarmgate.agents import LocalAgent
from swarmgate.bus import MessageBus
from swarmgate.channels import ChannelManager
from swarmgate.config import SwarmGateSettings
from swarmgate.ollama import OllamaClient
from swarmgate.orchestrator import InboundWorker, Orchestrator
from swarmgate.protocol import exclude_tags
from swarmgate.routers import agents, chat, gateway, health
from swarmgate.services import AgentService
from swarmgate.store import RegistryStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    Expensive objects (the shared HTTP client, the Ollama client, the agent
    service) are created once at startup and stored in app.state for reuse
    across all requests. Agents are registered before the inbound worker and
    the channels start, so no message arrives before an agent can answer it.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: SwarmGateSettings = app.state.settings

    http_client = httpx.AsyncClient(timeout=settings.remote_timeout)
    app.state.http_client = http_client

    store = RegistryStore(settings.resolved_registry_dir)
    app.state.registry_store = store

    service = AgentService(
        orchestrator=app.state.orchestrator,
        store=store,
        http_client=http_client,
        public_url=settings.resolved_public_url,
        skill_filter=exclude_tags(settings.external_skill_exclude_tags),
    )
    app.state.agent_service = service

    if settings.local_agent_enabled:
        ollama_client = OllamaClient(host=settings.ollama_host)
        app.state.ollama_client = ollama_client

        if await ollama_client.check_connection():
            logger.info("Successfully connected to Ollama")
        else:
            logger.warning("Could not connect to Ollama - check if server is running")

        service.add_local_agent(
            LocalAgent(
                agent_id=settings.local_agent_id,
                name=settings.local_agent_name,
                ollama_client=ollama_client,
                model=settings.local_agent_model,
                description=settings.local_agent_description,
                system_prompt=settings.local_agent_system_prompt,
                max_history=settings.max_history_messages,
            ),
            skills=settings.local_agent_skills,
            default=True,
        )
        logger.info(f"Local agent {settings.local_agent_id} using {settings.local_agent_model}")

    await service.restore(settings.external_agents)

    worker = InboundWorker(app.state.bus, app.state.orchestrator)
    app.state.inbound_worker = worker
    worker.start()
    await app.state.channel_manager.start_all()

    logger.info(f"swarmgate ready at {settings.resolved_public_url}")

    yield

    # Shutdown: Clean up resources
    await app.state.channel_manager.stop_all()
    await worker.stop()
    await http_client.aclose()
    if hasattr(app.state, "ollama_client"):
        await app.state.ollama_client.close()
        logger.info("Ollama client closed")


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location + ': ' if location else ''}{first.get('msg')}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


def create_app(settings: SwarmGateSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The message bus, channel manager and orchestrator are created here rather
    than in the lifespan so callers can register channels on
    ``app.state.channel_manager`` before the server starts.

    Args:
        settings: Optional SwarmGateSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from swarmgate.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="swarmgate",
        description="Multi-agent gateway routing chat channels and agent-to-agent calls",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.bus = MessageBus()
    app.state.channel_manager = ChannelManager(app.state.bus)
    app.state.orchestrator = Orchestrator()

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]

    app.include_router(health.router)
    app.include_router(chat.router)
    app.include_router(agents.router)
    app.include_router(gateway.router)

    return app
