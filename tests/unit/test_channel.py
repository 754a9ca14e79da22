from __future__ import annotations

import asyncio

import pytest

from badge_forge.queue.channel import BoundedChannel, ChannelClosed

WAIT = 0.05


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        BoundedChannel(0)


@pytest.mark.asyncio
async def test_fifo_order():
    channel: BoundedChannel[int] = BoundedChannel(3)
    for item in (1, 2, 3):
        await channel.send(item)
    assert [await channel.receive() for _ in range(3)] == [1, 2, 3]


@pytest.mark.asyncio
async def test_receive_waits_for_send():
    channel: BoundedChannel[str] = BoundedChannel(1)
    receiver = asyncio.create_task(channel.receive())
    await asyncio.sleep(WAIT)
    assert not receiver.done()

    await channel.send("hello")
    assert await asyncio.wait_for(receiver, 1.0) == "hello"


@pytest.mark.asyncio
async def test_close_wakes_blocked_receiver():
    channel: BoundedChannel[str] = BoundedChannel(1)
    receiver = asyncio.create_task(channel.receive())
    await asyncio.sleep(WAIT)

    channel.close()
    with pytest.raises(ChannelClosed):
        await asyncio.wait_for(receiver, 1.0)


@pytest.mark.asyncio
async def test_close_wakes_blocked_sender_without_inserting():
    channel: BoundedChannel[str] = BoundedChannel(1)
    await channel.send("first")
    sender = asyncio.create_task(channel.send("second"))
    await asyncio.sleep(WAIT)

    channel.close()
    with pytest.raises(ChannelClosed):
        await asyncio.wait_for(sender, 1.0)

    assert channel.qsize() == 1
    assert await channel.receive() == "first"
    with pytest.raises(ChannelClosed):
        await channel.receive()


@pytest.mark.asyncio
async def test_send_after_close_raises():
    channel: BoundedChannel[int] = BoundedChannel(1)
    channel.close()
    assert channel.closed
    with pytest.raises(ChannelClosed):
        await channel.send(1)
