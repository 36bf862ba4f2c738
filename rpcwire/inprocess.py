"""Transport that passes messages through in-memory queues."""

from __future__ import annotations

import asyncio

from .message import Message, Transport, TransportError


class InProcessError(TransportError):
    """Base error for the in-process transport."""


class ChannelClosed(InProcessError):
    """The channel between the two ends has been closed."""

    def __init__(self, message: str = "channel closed") -> None:
        super().__init__(message)


_CLOSED = object()


class _Channel:
    """An unbounded one-way queue whose receiving end can be closed."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self.closed = False

    def put(self, msg: Message) -> None:
        if self.closed:
            raise ChannelClosed()
        self._queue.put_nowait(msg)

    async def get(self) -> Message:
        item = await self._queue.get()
        if item is _CLOSED:
            # Leave the marker for any later receiver.
            self._queue.put_nowait(_CLOSED)
            raise ChannelClosed()
        return item

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._queue.put_nowait(_CLOSED)


class InProcessTransport(Transport):
    """One end of an in-memory connection.

    Messages are handed over as objects with no framing; encoding of
    the payload is left to the caller.
    """

    def __init__(self, sender: _Channel, receiver: _Channel) -> None:
        self._sender = sender
        self._receiver = receiver

    @classmethod
    def pair(cls) -> tuple["InProcessTransport", "InProcessTransport"]:
        """Return two connected ends: what one sends, the other receives."""
        first_inbox = _Channel()
        second_inbox = _Channel()
        return cls(second_inbox, first_inbox), cls(first_inbox, second_inbox)

    async def send(self, msg: Message) -> None:
        self._sender.put(msg)

    async def recv(self) -> Message:
        return await self._receiver.get()

    async def close(self) -> None:
        """Stop accepting messages; ones already queued can still be read."""
        self._receiver.close()