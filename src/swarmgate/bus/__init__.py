"""Message bus decoupling chat channels from the orchestrator."""

from swarmgate.bus.events import InboundMessage, OutboundMessage
from swarmgate.bus.queue import AsyncQueue, MessageBus

__all__ = ["AsyncQueue", "MessageBus", "InboundMessage", "OutboundMessage"]
