"""Agent management endpoints: list, register, search and remove agents."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from swarmgate.agents import ExternalAgentDefinition
from swarmgate.dependencies import get_agent_service
from swarmgate.errors import ValidationError
from swarmgate.models.agents import (
    AgentListResponse,
    AgentSummary,
    ErrorResponse,
    OkResponse,
    RegisterAgentRequest,
    RegisterAgentResponse,
    RegisteredAgentItem,
    SkillSearchResponse,
)
from swarmgate.services import AgentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/agents", tags=["agents"])


@router.get("", response_model=AgentListResponse, response_model_exclude_none=True)
async def list_agents(
    service: AgentService = Depends(get_agent_service),
) -> AgentListResponse:
    """List every agent the orchestrator can route to."""
    agents = [AgentSummary(**item) for item in service.orchestrator.list_agents()]
    return AgentListResponse(agents=agents)


@router.get("/search", response_model=SkillSearchResponse)
async def search_agents(
    skill: str = Query(..., min_length=1, description="Substring of a skill name"),
    service: AgentService = Depends(get_agent_service),
) -> SkillSearchResponse:
    """Find active registered agents advertising a matching skill."""
    agents = [
        RegisteredAgentItem(
            id=agent.id,
            name=agent.name,
            url=agent.url,
            description=agent.description,
            status=agent.status,
            created_by=agent.created_by,
            created_at=agent.created_at,
            skills=agent.skill_names(),
        )
        for agent in service.find_by_skill(skill)
    ]
    return SkillSearchResponse(agents=agents)


@router.post(
    "/register",
    response_model=RegisterAgentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def register_agent(
    request_body: RegisterAgentRequest,
    service: AgentService = Depends(get_agent_service),
):
    """Register (or re-register) an external agent by URL.

    The agent's card is fetched if possible; a failed fetch does not fail the
    registration.
    """
    if not (request_body.id and request_body.name and request_body.url):
        return JSONResponse(
            status_code=400,
            content={"error": "Missing required fields: id, name, url"},
        )

    definition = ExternalAgentDefinition(
        id=request_body.id,
        name=request_body.name,
        url=request_body.url,
        description=request_body.description,
    )

    try:
        entry = await service.register_external(definition)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Failed to register agent {definition.id}: {e}")
        return JSONResponse(
            status_code=500, content={"error": str(e) or "Registration failed"}
        )

    return RegisterAgentResponse(agent_id=entry.id, has_card=entry.card is not None)


@router.delete(
    "/{agent_id}",
    response_model=OkResponse,
    responses={404: {"model": ErrorResponse}},
)
async def unregister_agent(
    agent_id: str,
    service: AgentService = Depends(get_agent_service),
):
    """Remove an agent from the registry, the orchestrator and the store."""
    if not service.unregister(agent_id):
        return JSONResponse(
            status_code=404, content={"error": f"Agent not found: {agent_id}"}
        )
    return OkResponse()
