"""Transport that frames messages over standard input and output."""

from __future__ import annotations

import asyncio
import struct
import sys
from typing import Protocol

from .message import Message, Transport, TransportError

_LENGTH = struct.Struct(">I")
MAX_FRAME_SIZE = 0xFFFFFFFF


class StdioError(TransportError):
    """An I/O failure while reading or writing frames."""


class _Writer(Protocol):
    def write(self, data: bytes) -> None: ...

    async def drain(self) -> None: ...


class _Reader(Protocol):
    async def readexactly(self, n: int) -> bytes: ...


def encode_frame(data: bytes) -> bytes:
    """Prefix data with its length as a 4-byte big-endian integer."""
    data = bytes(data)
    if len(data) > MAX_FRAME_SIZE:
        raise StdioError(f"IO error: frame of {len(data)} bytes is too large")
    return _LENGTH.pack(len(data)) + data


async def read_frame(reader: _Reader) -> bytes:
    """Read one length-prefixed frame and return its payload."""
    try:
        header = await reader.readexactly(_LENGTH.size)
        (length,) = _LENGTH.unpack(header)
        return await reader.readexactly(length)
    except asyncio.IncompleteReadError as exc:
        raise StdioError("IO error: unexpected end of stream") from exc
    except OSError as exc:
        raise StdioError(f"IO error: {exc}") from exc


class StdioTransport(Transport):
    """Length-prefixed message transport over a reader/writer pair.

    Each frame is a 4-byte big-endian length followed by the payload.
    """

    def __init__(self, reader: _Reader, writer: _Writer) -> None:
        self._reader = reader
        self._writer = writer
        self._read_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    @classmethod
    async def open(cls) -> "StdioTransport":
        """Create a transport on the process's stdin and stdout."""
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader()
        await loop.connect_read_pipe(
            lambda: asyncio.StreamReaderProtocol(reader), sys.stdin.buffer
        )
        write_transport, write_protocol = await loop.connect_write_pipe(
            asyncio.streams.FlowControlMixin, sys.stdout.buffer
        )
        writer = asyncio.StreamWriter(write_transport, write_protocol, reader, loop)
        return cls(reader, writer)

    async def send(self, msg: Message) -> None:
        frame = encode_frame(msg.data)
        async with self._write_lock:
            try:
                self._writer.write(frame)
                await self._writer.drain()
            except OSError as exc:
                raise StdioError(f"IO error: {exc}") from exc

    async def recv(self) -> Message:
        async with self._read_lock:
            return Message(await read_frame(self._reader))

    async def close(self) -> None:
        """Standard streams need no explicit closing."""