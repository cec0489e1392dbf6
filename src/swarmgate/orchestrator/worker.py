"""Background worker answering bus inbound messages through the orchestrator."""

import asyncio
import logging

from swarmgate.bus import InboundMessage, MessageBus, OutboundMessage
from swarmgate.orchestrator.orchestrator import Orchestrator
from swarmgate.orchestrator.types import NormalizedMessage

logger = logging.getLogger(__name__)


class InboundWorker:
    """Consumes inbound bus messages and publishes the agent replies outbound.

    Each inbound message is handled in order; the reply goes back to the
    channel and chat it came from.
    """

    def __init__(self, bus: MessageBus, orchestrator: Orchestrator):
        self.bus = bus
        self.orchestrator = orchestrator
        self._task: asyncio.Task[None] | None = None
        self.processed_count = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Inbound worker started")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Inbound worker stopped")

    async def process(self, message: InboundMessage) -> OutboundMessage:
        """Answer a single inbound message and publish the reply."""
        normalized = NormalizedMessage(
            channel_id=message.channel,
            user_id=message.sender_id,
            conversation_id=message.session_key,
            text=message.content,
            metadata=dict(message.metadata),
        )

        try:
            response = await self.orchestrator.handle(normalized)
            reply = OutboundMessage(
                channel=message.channel,
                chat_id=message.chat_id,
                content=response.text,
                metadata=response.metadata,
            )
        except Exception as e:
            logger.error(
                f"Failed to handle message from {message.session_key}: {e}"
            )
            reply = OutboundMessage(
                channel=message.channel,
                chat_id=message.chat_id,
                content=f"Sorry, something went wrong: {e}",
                metadata={"error": True},
            )

        self.bus.publish_outbound(reply)
        self.processed_count += 1
        return reply

    async def _run(self) -> None:
        while True:
            message = await self.bus.consume_inbound()
            await self.process(message)
