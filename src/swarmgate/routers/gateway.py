"""Per-agent protocol endpoints: agent card and JSON-RPC."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from swarmgate.dependencies import get_gateway
from swarmgate.protocol import AGENT_CARD_PATH, JSONRPC_PATH, PerAgentGateway, to_wire

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agents/{agent_id}", tags=["gateway"])


def _not_found(agent_id: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"Agent not found: {agent_id}"})


@router.get(f"/{AGENT_CARD_PATH}")
async def get_agent_card(
    agent_id: str,
    gateway: PerAgentGateway = Depends(get_gateway),
) -> JSONResponse:
    """Return the externally visible card of an agent."""
    card = gateway.get_card(agent_id)
    if card is None:
        return _not_found(agent_id)
    return JSONResponse(content=to_wire(card))


@router.api_route(
    f"/{JSONRPC_PATH}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"]
)
async def jsonrpc(
    agent_id: str,
    request: Request,
    gateway: PerAgentGateway = Depends(get_gateway),
) -> JSONResponse:
    """Delegate a JSON-RPC request to the agent's protocol handler.

    Any method is routed to the handler, which answers requests that do not
    carry a JSON-RPC body with a JSON-RPC error.
    """
    handler = gateway.get_or_create_handler(agent_id)
    if handler is None:
        return _not_found(agent_id)

    body = await request.body()
    response = await handler.handle(body)
    logger.debug(f"JSON-RPC for agent {agent_id} answered request {response.get('id')}")
    return JSONResponse(content=response)
