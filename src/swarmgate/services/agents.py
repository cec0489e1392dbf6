"""AgentService: keeps the registry, orchestrator, store and gateway in step.

Every change to the set of agents goes through this service so that the
orchestrator's agent map, the card registry, the durable store and the
gateway's handler cache never disagree.
"""

import logging
from collections.abc import Iterable

import httpx
from a2a.types import AgentCard, AgentSkill

from swarmgate.agents import (
    AgentEntry,
    AgentRegistry,
    ExternalAgentDefinition,
    connect_external_agent,
)
from swarmgate.errors import ValidationError
from swarmgate.orchestrator import AgentHandle, AgentResult, ChatTurn, Orchestrator
from swarmgate.protocol import (
    PerAgentGateway,
    build_internal_card,
    filter_to_external_card,
    to_wire,
)
from swarmgate.protocol.cards import SkillFilter
from swarmgate.store import CreatedBy, RegisteredAgent, RegistryStore

logger = logging.getLogger(__name__)


class AgentService:
    """Registers and removes agents across all the components that track them."""

    def __init__(
        self,
        orchestrator: Orchestrator,
        store: RegistryStore,
        http_client: httpx.AsyncClient,
        public_url: str,
        skill_filter: SkillFilter | None = None,
        registry: AgentRegistry | None = None,
    ):
        self.orchestrator = orchestrator
        self.store = store
        self.http_client = http_client
        self.public_url = public_url.rstrip("/")
        self.skill_filter = skill_filter
        self.registry = registry or AgentRegistry()
        self.gateway = PerAgentGateway(
            get_card=self.get_external_card,
            invoke_agent=self.invoke,
        )

    def agent_base_url(self, agent_id: str) -> str:
        return f"{self.public_url}/agents/{agent_id}"

    def add_entry(self, entry: AgentEntry, default: bool = False) -> None:
        """Make an agent reachable through the orchestrator and the gateway."""
        self.registry.register(entry, default=default)
        self.orchestrator.register_agent(entry.handle, default=default)
        self.gateway.invalidate(entry.id)

    def add_local_agent(
        self,
        handle: AgentHandle,
        skills: Iterable[AgentSkill] = (),
        version: str = "0.1.0",
        default: bool = False,
    ) -> AgentEntry:
        """Register an in-process agent, building its card."""
        card = build_internal_card(
            name=handle.name,
            description=handle.description or "",
            url=f"{self.agent_base_url(handle.id)}/jsonrpc",
            version=version,
            skills=skills,
        )
        entry = AgentEntry(
            id=handle.id,
            name=handle.name,
            description=handle.description,
            kind="internal",
            url=card.url,
            card=card,
            handle=handle,
        )
        self.add_entry(entry, default=default)
        return entry

    async def register_external(
        self,
        definition: ExternalAgentDefinition,
        created_by: CreatedBy = "user",
        persist: bool = True,
    ) -> AgentEntry:
        """Connect to an external agent and register it.

        A card that cannot be fetched leaves ``entry.card`` unset; the agent is
        still registered and invocable.

        Raises:
            ValidationError: If the agent id cannot be stored
        """
        entry = await connect_external_agent(definition, self.http_client)

        if persist:
            record = RegisteredAgent(
                id=definition.id,
                name=definition.name,
                url=definition.url,
                description=definition.description,
                agent_card=to_wire(entry.card) if entry.card else None,
                created_by=created_by,
            )
            previous = self.store.get(definition.id)
            if previous is not None:
                # Re-registration refreshes the connection, not the provenance
                record.created_by = previous.created_by
                record.created_at = previous.created_at
            self.store.register(record)

        self.add_entry(entry)
        return entry

    async def restore(self, definitions: Iterable[ExternalAgentDefinition] = ()) -> None:
        """Reconnect configured agents and every active agent in the store."""
        for definition in definitions:
            try:
                await self.register_external(definition, created_by="system")
            except ValidationError as e:
                logger.error(f"Skipping configured agent {definition.id}: {e}")

        for stored in self.store.list_active():
            if self.registry.has(stored.id):
                continue
            await self.register_external(
                ExternalAgentDefinition(
                    id=stored.id,
                    name=stored.name,
                    url=stored.url,
                    description=stored.description,
                ),
                persist=False,
            )
        logger.info(f"Restored agents, {len(self.registry)} registered")

    def unregister(self, agent_id: str) -> bool:
        """Remove an agent everywhere. Returns False if it was unknown."""
        removed_stored = self.store.unregister(agent_id)
        removed_live = self.registry.remove(agent_id) is not None
        self.orchestrator.unregister_agent(agent_id)
        self.gateway.invalidate(agent_id)
        return removed_stored or removed_live

    def get_external_card(self, agent_id: str) -> AgentCard | None:
        """Card for outside callers, or None if the agent or its card is unknown."""
        entry = self.registry.get(agent_id)
        if entry is None or entry.card is None:
            return None
        return filter_to_external_card(
            entry.card,
            base_url=self.agent_base_url(agent_id),
            skill_filter=self.skill_filter,
        )

    async def invoke(
        self,
        agent_id: str,
        context_id: str,
        text: str,
        history: list[ChatTurn] | None = None,
    ) -> AgentResult:
        return await self.orchestrator.invoke(agent_id, context_id, text, history)

    def find_by_skill(self, query: str) -> list[RegisteredAgent]:
        return self.store.find_by_skill(query)
