import asyncio

import pytest

from rpcwire.inprocess import ChannelClosed, InProcessError, InProcessTransport
from rpcwire.message import Message, TransportError


async def _relay(sender, receiver, data):
    await sender.send(Message(data))
    return (await receiver.recv()).data


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [bytes([1, 2, 3, 4, 5]), b"", bytes([42]) * 1_000_000],
    ids=["small", "empty", "large"],
)
async def test_round_trip(data):
    t1, t2 = InProcessTransport.pair()
    assert await _relay(t1, t2, data) == data


@pytest.mark.asyncio
async def test_bidirectional():
    t1, t2 = InProcessTransport.pair()
    assert await _relay(t1, t2, bytes([1, 2, 3])) == bytes([1, 2, 3])
    assert await _relay(t2, t1, bytes([4, 5, 6])) == bytes([4, 5, 6])


@pytest.mark.asyncio
async def test_multiple_messages():
    t1, t2 = InProcessTransport.pair()
    for i in range(100):
        data = bytes([i] * (i + 1))
        assert await _relay(t1, t2, data) == data


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [ChannelClosed, InProcessError, TransportError])
async def test_send_to_closed_peer_raises(error):
    t1, t2 = InProcessTransport.pair()
    await t2.close()
    with pytest.raises(error):
        await t1.send(Message([1, 2, 3]))


@pytest.mark.asyncio
async def test_close_drains_queued_then_fails():
    t1, t2 = InProcessTransport.pair()
    await t1.send(Message(b"first"))
    await t2.close()
    assert (await t2.recv()).data == b"first"
    with pytest.raises(ChannelClosed):
        await t2.recv()


@pytest.mark.asyncio
async def test_close_wakes_pending_recv():
    _, t2 = InProcessTransport.pair()
    pending = asyncio.create_task(t2.recv())
    await asyncio.sleep(0)
    await t2.close()
    done, _ = await asyncio.wait({pending}, timeout=1)
    assert done == {pending}
    with pytest.raises(ChannelClosed):
        pending.result()


@pytest.mark.asyncio
async def test_close_leaves_other_direction_open():
    t1, t2 = InProcessTransport.pair()
    await t2.close()
    assert await _relay(t2, t1, b"still") == b"still"


@pytest.mark.asyncio
async def test_concurrent_sends():
    t1, t2 = InProcessTransport.pair()

    async def sender():
        for i in range(10):
            await t1.send(Message([i]))
        return t1

    send_task = asyncio.create_task(sender())
    received = sorted([(await t2.recv()).data[0] for _ in range(10)])
    assert received == list(range(10))
    assert await send_task is t1