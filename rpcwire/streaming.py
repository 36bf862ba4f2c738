"""A service that hands out a data stream in fixed-size chunks."""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional

from .mathsvc import U64_MAX

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024
TOTAL_CHUNKS = 10
STREAM_ID = 1


def _check_u64(n: int, what: str) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"expected an integer {what}, got {n!r}")
    if not 0 <= n <= U64_MAX:
        raise ValueError(f"{what} {n} is outside the unsigned 64-bit range")
    return n


class StreamingService:
    """Simulates streaming by serving numbered chunks on request.

    Every stream has ``TOTAL_CHUNKS`` chunks of ``chunk_size`` bytes;
    byte ``i`` of chunk ``k`` is ``(k + i) % 256``.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
            raise TypeError(f"expected an integer chunk size, got {chunk_size!r}")
        if chunk_size < 0:
            raise ValueError("chunk size must not be negative")
        self.chunk_size = chunk_size

    async def start_stream(self, size: int) -> int:
        """Open a stream of ``size`` bytes and return its id."""
        _check_u64(size, "size")
        logger.info("Starting stream of %d bytes", size)
        return STREAM_ID

    async def get_total_chunks(self, stream_id: int) -> int:
        """Return how many chunks the stream holds."""
        _check_u64(stream_id, "stream id")
        logger.info("Getting total chunks for stream %d", stream_id)
        return TOTAL_CHUNKS

    async def get_chunk(self, stream_id: int, chunk_index: int) -> Optional[bytes]:
        """Return one chunk, or None once the stream is exhausted."""
        _check_u64(stream_id, "stream id")
        _check_u64(chunk_index, "chunk index")
        logger.info("Sending chunk %d of stream %d", chunk_index, stream_id)
        if chunk_index >= TOTAL_CHUNKS:
            return None
        return bytes((chunk_index + i) % 256 for i in range(self.chunk_size))

    async def iter_chunks(self, stream_id: int) -> AsyncIterator[bytes]:
        """Yield every chunk of the stream in order."""
        index = 0
        while (chunk := await self.get_chunk(stream_id, index)) is not None:
            yield chunk
            index += 1