"""Durable storage for registered external agents."""

from swarmgate.store.registry import RegistryStore
from swarmgate.store.types import AgentStatus, CreatedBy, RegisteredAgent

__all__ = ["RegistryStore", "RegisteredAgent", "AgentStatus", "CreatedBy"]
