"""Remote agents reached over the JSON-RPC agent protocol."""

import logging
import uuid
from typing import Any

import httpx
from a2a.types import (
    AgentCard,
    Message,
    MessageSendParams,
    Part,
    Role,
    SendMessageRequest,
    Task,
    TextPart,
)
from a2a.utils import get_message_text, get_text_parts
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from swarmgate.agents.registry import AgentEntry
from swarmgate.errors import TransportError
from swarmgate.orchestrator.types import AgentResult, ChatTurn
from swarmgate.protocol.wire import AGENT_CARD_PATH, to_wire

logger = logging.getLogger(__name__)


class ExternalAgentDefinition(BaseModel):
    """How to reach an external agent: its id, display name and base URL."""

    id: str
    name: str
    url: str
    description: str | None = None


def extract_text_from_result(result: dict[str, Any]) -> str:
    """Pull the reply text out of a ``message/send`` result.

    A message result yields its text parts. For a task, the status message is
    preferred, then the last agent message in history, then the artifacts.
    """
    if result.get("kind") == "message":
        return get_message_text(Message.model_validate(result))

    task = Task.model_validate(result)
    if task.status.message is not None:
        text = get_message_text(task.status.message)
        if text:
            return text
    for message in reversed(task.history or []):
        if message.role == Role.agent:
            return get_message_text(message)
    for artifact in reversed(task.artifacts or []):
        texts = get_text_parts(artifact.parts)
        if texts:
            return "\n".join(texts)
    return f"Task {task.id} ({task.status.state.value})"


class RemoteAgent:
    """Agent living behind another server's protocol endpoint."""

    def __init__(
        self,
        agent_id: str,
        name: str,
        rpc_url: str,
        http_client: httpx.AsyncClient,
        description: str | None = None,
    ):
        self.id = agent_id
        self.name = name
        self.description = description
        self.rpc_url = rpc_url
        self.http_client = http_client

    async def handle(
        self,
        context_id: str,
        text: str,
        history: list[ChatTurn] | None = None,
        options: dict[str, Any] | None = None,
    ) -> AgentResult:
        # The remote agent keeps its own history keyed by context id
        message = Message(
            role=Role.user,
            parts=[Part(root=TextPart(text=text))],
            message_id=str(uuid.uuid4()),
            context_id=context_id,
        )
        request = SendMessageRequest(
            id=str(uuid.uuid4()), params=MessageSendParams(message=message)
        )

        try:
            response = await self.http_client.post(self.rpc_url, json=to_wire(request))
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(f"Remote agent {self.id} unreachable: {e}") from e

        if not isinstance(body, dict):
            raise TransportError(
                f"Remote agent {self.id} sent a non-object response: {type(body).__name__}"
            )

        if body.get("error"):
            error = body["error"]
            if not isinstance(error, dict):
                error = {"message": error}
            raise TransportError(
                f"Remote agent {self.id} returned error {error.get('code')}: "
                f"{error.get('message')}"
            )

        result = body.get("result") or {}
        if not isinstance(result, dict):
            raise TransportError(f"Remote agent {self.id} sent a malformed result")
        try:
            reply = extract_text_from_result(result)
        except PydanticValidationError as e:
            raise TransportError(f"Remote agent {self.id} sent a malformed result") from e

        metadata: dict[str, Any] = {"remote": True}
        if result.get("kind") == "task":
            metadata["remoteTaskId"] = result.get("id")
            metadata["remoteState"] = (result.get("status") or {}).get("state")
        return AgentResult(text=reply, metadata=metadata)


async def fetch_agent_card(
    url: str, http_client: httpx.AsyncClient
) -> AgentCard | None:
    """Fetch the well-known card of the agent at ``url``.

    Failures are logged and reported as None; a missing card never stops
    registration.
    """
    card_url = f"{url.rstrip('/')}/{AGENT_CARD_PATH}"
    try:
        response = await http_client.get(card_url)
        if response.status_code != 200:
            logger.warning(f"Card fetch from {card_url} returned {response.status_code}")
            return None
        return AgentCard.model_validate(response.json())
    except (httpx.HTTPError, ValueError, PydanticValidationError) as e:
        logger.warning(f"Failed to fetch agent card from {card_url}: {e}")
        return None


async def connect_external_agent(
    definition: ExternalAgentDefinition, http_client: httpx.AsyncClient
) -> AgentEntry:
    """Build a registry entry for an external agent, fetching its card if possible."""
    card = await fetch_agent_card(definition.url, http_client)
    rpc_url = card.url if card is not None else definition.url
    handle = RemoteAgent(
        agent_id=definition.id,
        name=definition.name,
        rpc_url=rpc_url,
        http_client=http_client,
        description=definition.description or (card.description if card else None),
    )
    logger.info(
        f"Connected external agent {definition.id} at {definition.url}"
        + ("" if card else " (no card)")
    )
    return AgentEntry(
        id=definition.id,
        name=definition.name,
        description=handle.description,
        kind="external",
        url=definition.url,
        card=card,
        handle=handle,
    )


async def connect_external_agents(
    definitions: list[ExternalAgentDefinition], http_client: httpx.AsyncClient
) -> list[AgentEntry]:
    return [await connect_external_agent(d, http_client) for d in definitions]
