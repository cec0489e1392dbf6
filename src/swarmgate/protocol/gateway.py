"""Per-agent protocol gateway with a lazily built handler cache."""

import functools
import logging
from collections.abc import Awaitable, Callable

from a2a.server.tasks import InMemoryTaskStore
from a2a.types import AgentCard

from swarmgate.orchestrator.types import AgentResult, ChatTurn
from swarmgate.protocol.executor import GatewayExecutor
from swarmgate.protocol.handler import ProtocolHandler

logger = logging.getLogger(__name__)

# (agent_id, context_id, text, history) -> result
InvokeAgentFn = Callable[
    [str, str, str, list[ChatTurn] | None], Awaitable[AgentResult]
]
GetCardFn = Callable[[str], AgentCard | None]


class PerAgentGateway:
    """Serves one protocol handler per agent id.

    Handlers are built on first use and cached. Whenever an agent's card or
    routing changes, ``invalidate`` must be called so the next request
    rebuilds the handler from the current card.

    Each agent has its own task store, kept across rebuilds, so a task is
    only visible through the endpoint of the agent that ran it.
    """

    def __init__(self, get_card: GetCardFn, invoke_agent: InvokeAgentFn):
        self._get_card = get_card
        self._invoke_agent = invoke_agent
        self._handlers: dict[str, ProtocolHandler] = {}
        self._task_stores: dict[str, InMemoryTaskStore] = {}

    def get_card(self, agent_id: str) -> AgentCard | None:
        return self._get_card(agent_id)

    def task_store(self, agent_id: str) -> InMemoryTaskStore:
        return self._task_stores.setdefault(agent_id, InMemoryTaskStore())

    def get_or_create_handler(self, agent_id: str) -> ProtocolHandler | None:
        """Return the cached handler, building it if needed.

        Returns None if the agent has no card (unknown agent).
        """
        handler = self._handlers.get(agent_id)
        if handler is not None:
            return handler

        card = self._get_card(agent_id)
        if card is None:
            return None

        executor = GatewayExecutor(functools.partial(self._invoke_agent, agent_id))
        handler = ProtocolHandler(card, executor, self.task_store(agent_id))
        self._handlers[agent_id] = handler
        logger.debug(f"Built protocol handler for agent {agent_id}")
        return handler

    def invalidate(self, agent_id: str) -> None:
        if self._handlers.pop(agent_id, None) is not None:
            logger.debug(f"Invalidated protocol handler for agent {agent_id}")

    @property
    def cached_agent_ids(self) -> list[str]:
        return list(self._handlers)
