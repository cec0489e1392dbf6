"""REST chat endpoint.

Synthesizes a normalized message on the ``rest`` channel and answers it
synchronously through the orchestrator.
"""

import logging
import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from swarmgate.dependencies import get_orchestrator
from swarmgate.errors import AgentNotFoundError
from swarmgate.models.agents import ErrorResponse
from swarmgate.models.chat import ChatRequest, ChatResponse
from swarmgate.orchestrator import NormalizedMessage, Orchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request_body: ChatRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    """Send a message to an agent and receive its reply.

    Args:
        request_body: Message plus optional userId, conversationId and agentId
        orchestrator: Injected orchestrator

    Returns:
        ChatResponse with the reply, the conversation id and agent metadata
    """
    if not request_body.message:
        return JSONResponse(
            status_code=400, content={"error": "Missing required field: message"}
        )

    normalized = NormalizedMessage(
        channel_id="rest",
        user_id=request_body.user_id or "anonymous",
        conversation_id=request_body.conversation_id or str(uuid.uuid4()),
        text=request_body.message,
        metadata={"agentId": request_body.agent_id} if request_body.agent_id else {},
    )

    try:
        response = await orchestrator.handle(normalized)
    except AgentNotFoundError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Chat request failed for {normalized.conversation_id}: {e}")
        return JSONResponse(
            status_code=500, content={"error": str(e) or "Internal server error"}
        )

    logger.info(
        f"Answered chat for {normalized.user_id} in {normalized.conversation_id}"
    )
    return ChatResponse(
        text=response.text,
        conversation_id=normalized.conversation_id,
        metadata=response.metadata or None,
    )
