"""Message container and the abstract transport interface."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Iterable, Union

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


class TransportError(Exception):
    """Base class for every error raised by a transport."""


@dataclass(frozen=True)
class Message:
    """An opaque frame of bytes carried by a transport."""

    data: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    def __len__(self) -> int:
        return len(self.data)


class Transport(abc.ABC):
    """A bidirectional channel that moves whole messages."""

    @abc.abstractmethod
    async def send(self, msg: Message) -> None:
        """Send one message to the peer."""

    @abc.abstractmethod
    async def recv(self) -> Message:
        """Wait for and return the next message from the peer."""

    async def close(self) -> None:
        """Close the transport; the default does nothing."""

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()