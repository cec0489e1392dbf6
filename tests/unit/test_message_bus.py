"""Unit tests for AsyncQueue and MessageBus."""

import asyncio

import pytest

from swarmgate.bus import AsyncQueue, InboundMessage, MessageBus, OutboundMessage


@pytest.mark.asyncio
async def test_queue_is_fifo():
    queue: AsyncQueue[int] = AsyncQueue()
    for i in range(3):
        queue.enqueue(i)

    assert queue.size == 3
    assert [await queue.dequeue() for _ in range(3)] == [0, 1, 2]
    assert queue.size == 0


@pytest.mark.asyncio
async def test_dequeue_waits_for_item():
    queue: AsyncQueue[str] = AsyncQueue()
    consumer = asyncio.create_task(queue.dequeue())
    await asyncio.sleep(0)

    assert not consumer.done()
    assert queue.waiting == 1

    queue.enqueue("hello")
    assert await asyncio.wait_for(consumer, timeout=1) == "hello"
    assert queue.size == 0


@pytest.mark.asyncio
async def test_waiters_are_served_in_arrival_order():
    queue: AsyncQueue[str] = AsyncQueue()
    waiters = []
    for _ in range(3):
        waiters.append(asyncio.create_task(queue.dequeue()))
        await asyncio.sleep(0)

    for item in ("a", "b", "c"):
        queue.enqueue(item)

    assert await asyncio.gather(*waiters) == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_late_consumer_cannot_overtake_waiter():
    """An item handed to a waiter is not stolen by a consumer arriving after."""
    queue: AsyncQueue[str] = AsyncQueue()
    waiter = asyncio.create_task(queue.dequeue())
    await asyncio.sleep(0)

    queue.enqueue("x")
    queue.enqueue("y")
    late = await queue.dequeue()

    assert await waiter == "x"
    assert late == "y"


@pytest.mark.asyncio
async def test_cancelled_waiter_is_skipped():
    queue: AsyncQueue[str] = AsyncQueue()
    cancelled = asyncio.create_task(queue.dequeue())
    await asyncio.sleep(0)
    cancelled.cancel()
    with pytest.raises(asyncio.CancelledError):
        await cancelled

    assert queue.waiting == 0
    queue.enqueue("kept")
    assert queue.size == 1
    assert await queue.dequeue() == "kept"


@pytest.mark.asyncio
async def test_item_of_cancelled_waiter_goes_to_next_waiter():
    queue: AsyncQueue[str] = AsyncQueue()
    first = asyncio.create_task(queue.dequeue())
    second = asyncio.create_task(queue.dequeue())
    await asyncio.sleep(0)

    queue.enqueue("a")
    first.cancel()
    with pytest.raises(asyncio.CancelledError):
        await first

    queue.enqueue("b")

    assert await asyncio.wait_for(second, timeout=1) == "a"
    assert await queue.dequeue() == "b"
    assert queue.size == 0


@pytest.mark.asyncio
async def test_message_bus_routes_both_directions():
    bus = MessageBus()
    inbound = InboundMessage(channel="cli", sender_id="u1", chat_id="c1", content="hi")
    outbound = OutboundMessage(channel="cli", chat_id="c1", content="hello")

    bus.publish_inbound(inbound)
    bus.publish_outbound(outbound)

    assert bus.inbound_size == 1
    assert bus.outbound_size == 1
    assert await bus.consume_inbound() is inbound
    assert await bus.consume_outbound() is outbound
    assert bus.inbound_size == 0
    assert bus.outbound_size == 0


def test_session_key_combines_channel_and_chat():
    message = InboundMessage(channel="telegram", sender_id="42", chat_id="99", content="x")
    assert message.session_key == "telegram:99"
