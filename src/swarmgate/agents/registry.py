"""In-process registry of agents and their capability cards."""

import logging
from dataclasses import dataclass
from typing import Literal

from a2a.types import AgentCard

from swarmgate.orchestrator.types import AgentHandle

logger = logging.getLogger(__name__)


@dataclass
class AgentEntry:
    """A registered agent: its handle plus the card describing it.

    ``card`` is None for external agents whose card could not be fetched.
    """

    id: str
    name: str
    kind: Literal["internal", "external"]
    handle: AgentHandle
    card: AgentCard | None = None
    url: str | None = None
    description: str | None = None


class AgentRegistry:
    """Holds agent entries keyed by id, with a fallback default entry."""

    def __init__(self) -> None:
        self._entries: dict[str, AgentEntry] = {}
        self._default_id: str | None = None

    def register(self, entry: AgentEntry, default: bool = False) -> None:
        self._entries[entry.id] = entry
        if default or self._default_id is None:
            self._default_id = entry.id
        logger.debug(f"Registry: added {entry.kind} agent {entry.id}")

    def remove(self, agent_id: str) -> AgentEntry | None:
        entry = self._entries.pop(agent_id, None)
        if entry is not None and self._default_id == agent_id:
            self._default_id = next(iter(self._entries), None)
        return entry

    def get(self, agent_id: str) -> AgentEntry | None:
        return self._entries.get(agent_id)

    def get_default(self) -> AgentEntry | None:
        return self._entries.get(self._default_id) if self._default_id else None

    def has(self, agent_id: str) -> bool:
        return agent_id in self._entries

    def list_all(self) -> list[AgentEntry]:
        return list(self._entries.values())

    def list_internal(self) -> list[AgentEntry]:
        return [entry for entry in self._entries.values() if entry.kind == "internal"]

    def list_external(self) -> list[AgentEntry]:
        return [entry for entry in self._entries.values() if entry.kind == "external"]

    def __len__(self) -> int:
        return len(self._entries)
