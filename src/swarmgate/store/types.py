"""Data types for the registered-agent store."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

AgentStatus = Literal["active", "inactive"]
CreatedBy = Literal["system", "user", "self-generated"]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class RegisteredAgent:
    """An external agent persisted so it survives restarts.

    ``agent_card`` is the card as served by the agent (camelCase JSON), or
    None if it could not be fetched at registration time.
    """

    id: str
    name: str
    url: str
    agent_card: dict[str, Any] | None = None
    description: str | None = None
    created_at: str = field(default_factory=_now)
    created_by: CreatedBy = "user"
    status: AgentStatus = "active"

    def skill_names(self) -> list[str]:
        if not self.agent_card:
            return []
        skills = self.agent_card.get("skills") or []
        return [
            skill["name"]
            for skill in skills
            if isinstance(skill, dict) and isinstance(skill.get("name"), str)
        ]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegisteredAgent":
        return cls(
            id=data["id"],
            name=data["name"],
            url=data["url"],
            agent_card=data.get("agent_card"),
            description=data.get("description"),
            created_at=data.get("created_at") or _now(),
            created_by=data.get("created_by", "user"),
            status=data.get("status", "active"),
        )
