"""Agent variants (local and remote) and the agent registry."""

from swarmgate.agents.local import LocalAgent
from swarmgate.agents.registry import AgentEntry, AgentRegistry
from swarmgate.agents.remote import (
    ExternalAgentDefinition,
    RemoteAgent,
    connect_external_agent,
    connect_external_agents,
    extract_text_from_result,
    fetch_agent_card,
)

__all__ = [
    "AgentEntry",
    "AgentRegistry",
    "ExternalAgentDefinition",
    "LocalAgent",
    "RemoteAgent",
    "connect_external_agent",
    "connect_external_agents",
    "extract_text_from_result",
    "fetch_agent_card",
]
