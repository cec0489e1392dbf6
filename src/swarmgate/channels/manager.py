"""ChannelManager: owns channel adapters and routes outbound messages to them."""

import asyncio
import logging

from swarmgate.bus import MessageBus, OutboundMessage
from swarmgate.channels.base import BaseChannel
from swarmgate.errors import ChannelNotFoundError

logger = logging.getLogger(__name__)


class ChannelManager:
    """Registry of channel adapters plus the outbound dispatch loop.

    The dispatch loop is the single consumer of the bus outbound queue, so
    messages for all channels leave in publish order. Messages naming an
    unregistered channel are dropped and counted in ``dropped_count``.
    """

    def __init__(self, bus: MessageBus):
        self.bus = bus
        self._channels: dict[str, BaseChannel] = {}
        self._dispatch_task: asyncio.Task[None] | None = None
        self.dropped_count = 0

    def register(self, channel: BaseChannel) -> None:
        """Add a channel, replacing any previous one with the same name."""
        self._channels[channel.name] = channel
        logger.info(f"Registered channel: {channel.name}")

    def get_channel(self, name: str) -> BaseChannel | None:
        return self._channels.get(name)

    @property
    def channels(self) -> dict[str, BaseChannel]:
        return dict(self._channels)

    @property
    def is_dispatching(self) -> bool:
        return self._dispatch_task is not None and not self._dispatch_task.done()

    def get_status(self) -> dict[str, dict[str, bool]]:
        """Snapshot of every registered channel's enabled/running flags."""
        return {
            name: {"enabled": channel.enabled, "running": channel.is_running}
            for name, channel in self._channels.items()
        }

    async def start_all(self) -> None:
        """Start the dispatch loop (once) and every channel concurrently."""
        if not self.is_dispatching:
            self._dispatch_task = asyncio.create_task(self._dispatch_outbound())
            logger.debug("Outbound dispatch loop started")

        await asyncio.gather(*(channel.start() for channel in self._channels.values()))
        logger.info(f"Started {len(self._channels)} channel(s)")

    async def stop_all(self) -> None:
        """Stop the dispatch loop and every channel concurrently."""
        task, self._dispatch_task = self._dispatch_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            logger.debug("Outbound dispatch loop stopped")

        await asyncio.gather(*(channel.stop() for channel in self._channels.values()))
        logger.info(f"Stopped {len(self._channels)} channel(s)")

    async def send(self, message: OutboundMessage) -> None:
        """Deliver a message to the channel it names.

        Raises:
            ChannelNotFoundError: If no channel with that name is registered
        """
        channel = self._channels.get(message.channel)
        if channel is None:
            raise ChannelNotFoundError(message.channel)
        await channel.send(message)

    async def _dispatch_outbound(self) -> None:
        while True:
            message = await self.bus.consume_outbound()
            try:
                await self.send(message)
            except ChannelNotFoundError:
                self.dropped_count += 1
                logger.warning(
                    f"Dropping outbound message for unknown channel: {message.channel}"
                )
            except Exception as e:
                logger.error(f"Error sending to channel {message.channel}: {e}")
