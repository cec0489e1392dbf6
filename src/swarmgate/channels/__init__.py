"""Chat channel adapters and the manager that dispatches replies to them."""

from swarmgate.channels.base import BaseChannel, ChannelConfig
from swarmgate.channels.manager import ChannelManager

__all__ = ["BaseChannel", "ChannelConfig", "ChannelManager"]
