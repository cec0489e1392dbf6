"""Orchestrator: resolves the agent for a request and tracks the invocation."""

import logging
from typing import Any

from swarmgate.errors import AgentNotFoundError, NoDefaultAgentError
from swarmgate.orchestrator.tasks import TaskManager
from swarmgate.orchestrator.types import (
    AgentHandle,
    AgentResult,
    ChatTurn,
    NormalizedMessage,
    NormalizedResponse,
)

logger = logging.getLogger(__name__)


class Orchestrator:
    """Uniform entry point for invoking agents from any channel.

    Every call to ``invoke`` gets its own task, so concurrent invocations never
    share state. The agent map is only mutated through ``register_agent`` and
    ``unregister_agent``.
    """

    def __init__(self, task_manager: TaskManager | None = None):
        self._agents: dict[str, AgentHandle] = {}
        self._default_agent_id: str | None = None
        self.task_manager = task_manager or TaskManager()

    def register_agent(self, agent: AgentHandle, default: bool = False) -> None:
        """Add an agent.

        The first agent ever registered becomes the fallback agent, as does any
        agent registered with ``default=True``.
        """
        self._agents[agent.id] = agent
        if default or self._default_agent_id is None:
            self._default_agent_id = agent.id
        logger.info(
            f"Registered agent {agent.id} ({agent.name})"
            + (" as default" if self._default_agent_id == agent.id else "")
        )

    def unregister_agent(self, agent_id: str) -> bool:
        """Remove an agent. Returns False if it was not registered."""
        if self._agents.pop(agent_id, None) is None:
            return False

        if self._default_agent_id == agent_id:
            self._default_agent_id = next(iter(self._agents), None)
        logger.info(f"Unregistered agent {agent_id}")
        return True

    def get_agent(self, agent_id: str) -> AgentHandle | None:
        return self._agents.get(agent_id)

    def get_default_agent(self) -> AgentHandle | None:
        if self._default_agent_id is None:
            return None
        return self._agents.get(self._default_agent_id)

    def list_agents(self) -> list[dict[str, Any]]:
        agents = []
        for agent in self._agents.values():
            item: dict[str, Any] = {"id": agent.id, "name": agent.name}
            if agent.description:
                item["description"] = agent.description
            agents.append(item)
        return agents

    def resolve_agent(self, agent_id: str | None = None) -> AgentHandle:
        """Look up an agent by id, or fall back to the default agent.

        Raises:
            AgentNotFoundError: If agent_id is given but unknown
            NoDefaultAgentError: If agent_id is omitted and no agent is registered
        """
        if agent_id:
            agent = self._agents.get(agent_id)
            if agent is None:
                raise AgentNotFoundError(agent_id)
            return agent

        agent = self.get_default_agent()
        if agent is None:
            raise NoDefaultAgentError()
        return agent

    async def invoke(
        self,
        agent_id: str | None,
        context_id: str,
        text: str,
        history: list[ChatTurn] | None = None,
        options: dict[str, Any] | None = None,
    ) -> AgentResult:
        """Run one request against an agent, tracking it as a task.

        The agent is resolved before the task is created, so an unknown agent
        leaves no task behind. Errors raised by the agent are recorded on the
        task and re-raised unchanged.
        """
        agent = self.resolve_agent(agent_id)

        task = self.task_manager.create(context_id, agent.id)
        self.task_manager.update_state(task.id, "working")

        try:
            result = await agent.handle(context_id, text, history, options)
        except Exception as e:
            self.task_manager.update_state(task.id, "failed")
            logger.error(f"Agent {agent.id} failed on task {task.id}: {e}")
            raise

        self.task_manager.update_state(task.id, "completed")
        logger.debug(f"Agent {agent.id} completed task {task.id}")
        return AgentResult(
            text=result.text,
            metadata={**result.metadata, "agentId": agent.id},
        )

    async def handle(self, message: NormalizedMessage) -> NormalizedResponse:
        """Adapt a channel-facing message to ``invoke``.

        An ``agentId`` entry in the message metadata selects the agent;
        otherwise the default agent answers.
        """
        agent_id = message.metadata.get("agentId") if message.metadata else None
        result = await self.invoke(
            agent_id if isinstance(agent_id, str) else None,
            message.conversation_id,
            message.text,
        )
        return NormalizedResponse(text=result.text, metadata=result.metadata)
