"""Business logic services for swarmgate."""

from swarmgate.services.agents import AgentService

__all__ = ["AgentService"]
