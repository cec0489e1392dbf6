"""Base class for chat channel adapters."""

import abc
import logging
from dataclasses import dataclass, field
from typing import Any

from swarmgate.bus import InboundMessage, MessageBus, OutboundMessage

logger = logging.getLogger(__name__)


@dataclass
class ChannelConfig:
    """Common settings shared by every channel adapter."""

    enabled: bool = True
    allow_from: list[str] = field(default_factory=list)


class BaseChannel(abc.ABC):
    """A named transport that produces inbound and consumes outbound messages.

    Subclasses implement ``start``, ``stop`` and ``send``; incoming platform
    events are normalized and pushed onto the bus through ``handle_message``.
    """

    name: str = "base"

    def __init__(self, config: ChannelConfig, bus: MessageBus):
        self.config = config
        self.bus = bus
        self._running = False

    @abc.abstractmethod
    async def start(self) -> None:
        """Connect to the platform and begin receiving events."""

    @abc.abstractmethod
    async def stop(self) -> None:
        """Disconnect from the platform."""

    @abc.abstractmethod
    async def send(self, message: OutboundMessage) -> None:
        """Deliver an outbound message to the platform."""

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def is_allowed(self, sender_id: str) -> bool:
        """Check a sender against the allow list.

        Sender ids may carry several identities separated by ``|`` (for
        example a numeric id and a username); any one of them matching is
        enough. An empty allow list admits everyone.
        """
        if not self.config.allow_from:
            return True
        return any(part in self.config.allow_from for part in sender_id.split("|"))

    async def handle_message(
        self,
        sender_id: str,
        chat_id: str,
        content: str,
        media: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Normalize a platform event and publish it to the inbound queue."""
        if not self.is_allowed(sender_id):
            logger.warning(
                f"Ignoring message from {sender_id} on {self.name}: not in allow list"
            )
            return

        self.bus.publish_inbound(
            InboundMessage(
                channel=self.name,
                sender_id=sender_id,
                chat_id=chat_id,
                content=content,
                media=media or [],
                metadata=metadata or {},
            )
        )
