from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timezone

import pytest

from badge_forge.domain.models import UpdateRequest
from badge_forge.errors import QueueDeliveryError
from badge_forge.queue import BadgeUpdateQueue, ChannelClosed, InMemoryQueue

RECEIVE_TIMEOUT = 1.0
BLOCKED_TIMEOUT = 0.1
CONCURRENT_SUBMITS = 10


def _request(user_id: str, request_id: str | None = None) -> UpdateRequest:
    return UpdateRequest(
        user_id=user_id,
        request_id=request_id or str(uuid.uuid4()),
        created_at=datetime.now(timezone.utc),
    )


def test_in_memory_queue_satisfies_protocol():
    assert isinstance(InMemoryQueue(1), BadgeUpdateQueue)


@pytest.mark.asyncio
async def test_queue_starts_empty():
    queue = InMemoryQueue(10)
    assert await queue.list_pending() == []


@pytest.mark.asyncio
async def test_submit_is_pending_and_delivered():
    queue = InMemoryQueue(10)
    await queue.submit(_request("user123"))

    pending = await queue.list_pending()
    assert len(pending) == 1
    assert pending[0].user_id == "user123"

    received = await asyncio.wait_for(queue.receive(), RECEIVE_TIMEOUT)
    assert received.user_id == "user123"


@pytest.mark.asyncio
async def test_submit_fills_in_missing_fields():
    queue = InMemoryQueue(10)
    before = datetime.now(timezone.utc)

    returned = await queue.submit(UpdateRequest(user_id="user456"))

    pending = await queue.list_pending()
    received = await asyncio.wait_for(queue.receive(), RECEIVE_TIMEOUT)
    for request in (returned, pending[0], received):
        assert request.request_id
        assert request.created_at is not None
        assert request.created_at >= before
    assert pending[0].request_id == received.request_id == returned.request_id


@pytest.mark.asyncio
async def test_epoch_timestamp_is_treated_as_absent():
    queue = InMemoryQueue(10)
    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)

    returned = await queue.submit(UpdateRequest(user_id="user1", created_at=epoch))

    assert returned.created_at is not None
    assert returned.created_at > epoch


@pytest.mark.asyncio
async def test_supplied_fields_are_kept():
    queue = InMemoryQueue(10)
    created = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)

    returned = await queue.submit(
        UpdateRequest(user_id="user1", request_id="req-1", created_at=created)
    )

    assert returned.request_id == "req-1"
    assert returned.created_at == created


@pytest.mark.asyncio
async def test_mark_done_removes_request():
    queue = InMemoryQueue(10)
    await queue.submit(_request("user123", "test-request-id-123"))

    await queue.mark_done("test-request-id-123")

    assert await queue.list_pending() == []


@pytest.mark.asyncio
async def test_mark_done_unknown_id_is_noop():
    queue = InMemoryQueue(10)
    await queue.submit(_request("user123", "keep-me"))

    await queue.mark_done("non-existent-id")
    await queue.mark_done("non-existent-id")

    pending = await queue.list_pending()
    assert [request.request_id for request in pending] == ["keep-me"]


@pytest.mark.asyncio
async def test_concurrent_submit():
    queue = InMemoryQueue(100)

    await asyncio.gather(
        *(queue.submit(_request(f"user{i}")) for i in range(CONCURRENT_SUBMITS))
    )

    assert len(await queue.list_pending()) == CONCURRENT_SUBMITS


@pytest.mark.asyncio
async def test_concurrent_submit_and_mark_done():
    queue = InMemoryQueue(100)
    first_batch = [str(uuid.uuid4()) for _ in range(5)]
    for i, request_id in enumerate(first_batch):
        await queue.submit(_request(f"user{i}", request_id))

    await asyncio.gather(
        *(queue.submit(_request(f"user{i}")) for i in range(5, 10)),
        *(queue.mark_done(request_id) for request_id in first_batch),
    )

    pending = await queue.list_pending()
    assert len(pending) == 5
    assert {request.user_id for request in pending} == {f"user{i}" for i in range(5, 10)}


@pytest.mark.asyncio
async def test_same_user_different_requests():
    queue = InMemoryQueue(10)
    for _ in range(3):
        await queue.submit(UpdateRequest(user_id="same_user"))

    pending = await queue.list_pending()
    assert len(pending) == 3
    assert {request.user_id for request in pending} == {"same_user"}
    assert len({request.request_id for request in pending}) == 3


@pytest.mark.asyncio
async def test_backpressure_suspends_third_submit():
    queue = InMemoryQueue(2)

    await asyncio.wait_for(queue.submit(_request("user1")), RECEIVE_TIMEOUT)
    await asyncio.wait_for(queue.submit(_request("user2")), RECEIVE_TIMEOUT)

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(queue.submit(_request("user3")), BLOCKED_TIMEOUT)

    # Visible as pending even though the consumer cannot see it yet.
    assert len(await queue.list_pending()) == 3

    # A timed-out submit is not withdrawn: it lands once a slot frees up.
    received = [await asyncio.wait_for(queue.receive(), RECEIVE_TIMEOUT) for _ in range(3)]
    assert [request.user_id for request in received] == ["user1", "user2", "user3"]


@pytest.mark.asyncio
async def test_blocked_submit_resumes_when_consumer_drains():
    queue = InMemoryQueue(1)
    await queue.submit(_request("user1"))

    blocked = asyncio.create_task(queue.submit(_request("user2")))
    await asyncio.sleep(BLOCKED_TIMEOUT)
    assert not blocked.done()

    await queue.receive()
    returned = await asyncio.wait_for(blocked, RECEIVE_TIMEOUT)
    assert returned.user_id == "user2"


@pytest.mark.asyncio
async def test_submit_after_close_raises_delivery_error():
    queue = InMemoryQueue(10)
    queue.close()

    with pytest.raises(QueueDeliveryError):
        await queue.submit(_request("user1"))

    assert await queue.list_pending() == []


@pytest.mark.asyncio
async def test_close_while_blocked_drops_pending_entry():
    queue = InMemoryQueue(1)
    await queue.submit(_request("user1", "delivered"))

    blocked = asyncio.create_task(queue.submit(_request("user2", "stuck")))
    await asyncio.sleep(BLOCKED_TIMEOUT)
    assert len(await queue.list_pending()) == 2

    queue.close()
    with pytest.raises(QueueDeliveryError):
        await asyncio.wait_for(blocked, RECEIVE_TIMEOUT)

    pending = await queue.list_pending()
    assert [request.request_id for request in pending] == ["delivered"]


@pytest.mark.asyncio
async def test_receive_drains_buffer_after_close():
    queue = InMemoryQueue(10)
    await queue.submit(_request("user1"))
    queue.close()

    received = await queue.receive()
    assert received.user_id == "user1"
    with pytest.raises(ChannelClosed):
        await queue.receive()
