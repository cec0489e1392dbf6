"""Async FIFO queue and the inbound/outbound message bus built on it.

The queue keeps an explicit list of waiting consumers. An item enqueued while
consumers are waiting is handed directly to the one that has waited longest,
so a consumer arriving later can never overtake it.
"""

import asyncio
import logging
from collections import deque
from typing import Generic, TypeVar

from swarmgate.bus.events import InboundMessage, OutboundMessage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncQueue(Generic[T]):
    """Unbounded FIFO queue whose ``dequeue`` suspends until an item exists."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._waiters: deque[asyncio.Future[T]] = deque()

    def enqueue(self, item: T) -> None:
        """Append an item, or hand it to the oldest waiting consumer."""
        if not self._hand_off(item):
            self._items.append(item)

    def _hand_off(self, item: T) -> bool:
        """Give ``item`` to the oldest live waiter. False if nobody is waiting."""
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(item)
                return True
        return False

    async def dequeue(self) -> T:
        """Return the head item, waiting for one if the queue is empty."""
        if self._items:
            return self._items.popleft()

        waiter: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            return await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # Item was handed over but the consumer went away: it stays first in line
                item = waiter.result()
                if not self._hand_off(item):
                    self._items.appendleft(item)
            else:
                try:
                    self._waiters.remove(waiter)
                except ValueError:
                    pass
            raise

    @property
    def size(self) -> int:
        """Number of queued items not yet delivered."""
        return len(self._items)

    @property
    def waiting(self) -> int:
        """Number of consumers currently suspended in ``dequeue``."""
        return sum(1 for waiter in self._waiters if not waiter.done())


class MessageBus:
    """Decouples channel adapters from the orchestrator.

    Channels publish to the inbound queue; replies for asynchronous channels
    are published to the outbound queue and drained by the ChannelManager.
    """

    def __init__(self) -> None:
        self._inbound: AsyncQueue[InboundMessage] = AsyncQueue()
        self._outbound: AsyncQueue[OutboundMessage] = AsyncQueue()

    def publish_inbound(self, message: InboundMessage) -> None:
        logger.debug(f"Inbound message from {message.channel}:{message.chat_id}")
        self._inbound.enqueue(message)

    async def consume_inbound(self) -> InboundMessage:
        return await self._inbound.dequeue()

    def publish_outbound(self, message: OutboundMessage) -> None:
        logger.debug(f"Outbound message to {message.channel}:{message.chat_id}")
        self._outbound.enqueue(message)

    async def consume_outbound(self) -> OutboundMessage:
        return await self._outbound.dequeue()

    @property
    def inbound_size(self) -> int:
        return self._inbound.size

    @property
    def outbound_size(self) -> int:
        return self._outbound.size
