"""Transport that carries messages as binary WebSocket frames."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Iterator

import websockets
from websockets import exceptions as ws_exceptions

from .message import Message, Transport, TransportError

# Largest message accepted from a peer.
DEFAULT_MAX_SIZE = 64 << 20

_CLOSED = object()


class WebSocketError(TransportError):
    """A failure in the WebSocket protocol or the underlying socket."""


class ConnectionClosed(WebSocketError):
    """The connection has been closed."""

    def __init__(self, message: str = "connection closed") -> None:
        super().__init__(message)


class UnexpectedMessageType(WebSocketError):
    """The peer sent something other than a binary frame."""

    def __init__(self, message: str = "unexpected message type") -> None:
        super().__init__(message)


def _io_error(detail: object) -> WebSocketError:
    return WebSocketError(f"IO error: {detail}")


@contextlib.contextmanager
def _wire_errors() -> Iterator[None]:
    """Turn library and socket failures into this module's errors."""
    try:
        yield
    except ws_exceptions.ConnectionClosed as exc:
        raise ConnectionClosed() from exc
    except ws_exceptions.WebSocketException as exc:
        raise WebSocketError(f"WebSocket error: {exc}") from exc
    except OSError as exc:
        raise _io_error(exc) from exc


class WebSocketTransport(Transport):
    """One end of a WebSocket connection, client or server side."""

    def __init__(self, connection) -> None:
        self._ws = connection

    @classmethod
    async def connect(cls, url: str) -> "WebSocketTransport":
        """Open a client connection to a WebSocket server at ``url``."""
        with _wire_errors():
            connection = await websockets.connect(url, max_size=DEFAULT_MAX_SIZE)
        return cls(connection)

    async def send(self, msg: Message) -> None:
        with _wire_errors():
            await self._ws.send(msg.data)

    async def recv(self) -> Message:
        with _wire_errors():
            data = await self._ws.recv()
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise UnexpectedMessageType()
        return Message(bytes(data))

    async def close(self) -> None:
        with _wire_errors():
            await self._ws.close()


def _parse_addr(addr: str) -> tuple[str, int]:
    host, sep, port_text = addr.rpartition(":")
    host = host.strip("[]")
    if not sep or not host:
        raise _io_error(f"invalid socket address {addr!r}")
    try:
        port = int(port_text)
    except ValueError:
        raise _io_error(f"invalid port in {addr!r}") from None
    if not 0 <= port <= 0xFFFF:
        raise _io_error(f"port out of range in {addr!r}")
    return host, port


class WebSocketListener:
    """Accepts incoming WebSocket connections as transports."""

    def __init__(self, server, queue: asyncio.Queue) -> None:
        self._server = server
        self._queue = queue

    @classmethod
    async def bind(cls, addr: str) -> "WebSocketListener":
        """Listen on ``host:port``; port 0 picks a free port."""
        host, port = _parse_addr(addr)
        queue: asyncio.Queue = asyncio.Queue()

        async def handler(connection) -> None:
            await queue.put(WebSocketTransport(connection))
            # Keep the connection open until either side closes it.
            await connection.wait_closed()

        try:
            server = await websockets.serve(
                handler, host, port, max_size=DEFAULT_MAX_SIZE
            )
        except OSError as exc:
            raise _io_error(exc) from exc
        return cls(server, queue)

    async def accept(self) -> WebSocketTransport:
        """Wait for the next client and return its transport."""
        item = await self._queue.get()
        if item is _CLOSED:
            self._queue.put_nowait(_CLOSED)
            raise ConnectionClosed("listener closed")
        return item

    def local_addr(self) -> tuple[str, int]:
        """Return the (host, port) the listener is bound to."""
        sockname = self._server.sockets[0].getsockname()
        return sockname[0], sockname[1]

    async def close(self) -> None:
        """Stop listening and close every accepted connection."""
        self._server.close()
        await self._server.wait_closed()
        self._queue.put_nowait(_CLOSED)

    async def __aenter__(self) -> "WebSocketListener":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()