"""File-backed store of registered external agents.

Each agent is one JSON file named after its id inside the registry
directory. Writes replace the whole file, so every operation touches a single
record and needs no cross-record transaction.
"""

import json
import logging
import re
from pathlib import Path

from swarmgate.errors import ValidationError
from swarmgate.store.types import AgentStatus, RegisteredAgent

logger = logging.getLogger(__name__)

_AGENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class RegistryStore:
    """Persists RegisteredAgent records as JSON files.

    ``unregister`` is a hard delete: the record's file is removed. Use
    ``set_status`` to keep a record around as inactive instead.
    """

    def __init__(self, registry_dir: Path):
        """Initialize the store.

        Args:
            registry_dir: Directory where agent JSON files are stored
        """
        self.registry_dir = registry_dir
        self.registry_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, agent_id: str) -> Path:
        if not _AGENT_ID_PATTERN.match(agent_id):
            raise ValidationError(f"Invalid agent id: {agent_id!r}")
        return self.registry_dir / f"{agent_id}.json"

    def register(self, agent: RegisteredAgent) -> None:
        """Insert or fully replace the record with this agent's id.

        Raises:
            ValidationError: If the agent id contains unsupported characters
        """
        file_path = self._path(agent.id)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(agent.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Stored registered agent {agent.id} ({agent.status})")

    def get(self, agent_id: str) -> RegisteredAgent | None:
        try:
            file_path = self._path(agent_id)
        except ValidationError:
            return None
        if not file_path.exists():
            return None
        return self._load(file_path)

    def list_active(self) -> list[RegisteredAgent]:
        """All records with status ``active``, in no particular order."""
        agents: list[RegisteredAgent] = []
        for file_path in self.registry_dir.glob("*.json"):
            try:
                agent = self._load(file_path)
            except Exception as e:
                logger.warning(f"Failed to load registered agent {file_path.stem}: {e}")
                continue
            if agent.status == "active":
                agents.append(agent)
        return agents

    def find_by_skill(self, query: str) -> list[RegisteredAgent]:
        """Active agents with a card skill whose name contains ``query``.

        Matching is a case-sensitive substring test; an agent with several
        matching skills is returned once.
        """
        matches = [
            agent
            for agent in self.list_active()
            if any(query in name for name in agent.skill_names())
        ]
        logger.debug(f"find_by_skill({query!r}) matched {len(matches)} agent(s)")
        return matches

    def unregister(self, agent_id: str) -> bool:
        """Delete the record. Returns False if there was nothing to delete."""
        try:
            file_path = self._path(agent_id)
        except ValidationError:
            return False
        if not file_path.exists():
            return False
        file_path.unlink()
        logger.info(f"Removed registered agent {agent_id}")
        return True

    def set_status(self, agent_id: str, status: AgentStatus) -> RegisteredAgent | None:
        """Change a record's status. Returns None if the id is unknown."""
        agent = self.get(agent_id)
        if agent is None:
            return None
        agent.status = status
        self.register(agent)
        return agent

    def _load(self, file_path: Path) -> RegisteredAgent:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return RegisteredAgent.from_dict(data)
