"""Agent-to-agent protocol: cards, JSON-RPC handling and the per-agent gateway."""

from swarmgate.protocol.cards import (
    build_internal_card,
    exclude_tags,
    filter_to_external_card,
)
from swarmgate.protocol.executor import GatewayExecutor
from swarmgate.protocol.gateway import PerAgentGateway
from swarmgate.protocol.handler import ProtocolHandler
from swarmgate.protocol.wire import AGENT_CARD_PATH, JSONRPC_PATH, to_wire

__all__ = [
    "AGENT_CARD_PATH",
    "JSONRPC_PATH",
    "GatewayExecutor",
    "PerAgentGateway",
    "ProtocolHandler",
    "build_internal_card",
    "exclude_tags",
    "filter_to_external_card",
    "to_wire",
]
