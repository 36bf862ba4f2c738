"""A counter service and a kernel that drives it through repeated increments."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

logger = logging.getLogger(__name__)

U32_MAX = (1 << 32) - 1
DEFAULT_ITERATIONS = 10


class _Incrementer(Protocol):
    async def increment(self, value: int) -> int: ...


def _check_u32(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"expected an integer, got {n!r}")
    if not 0 <= n <= U32_MAX:
        raise ValueError(f"{n} is outside the unsigned 32-bit range")
    return n


class CounterService:
    """Holds an unsigned 32-bit counter value."""

    def __init__(self, value: int = 0) -> None:
        self.value = _check_u32(value)
        self._lock = asyncio.Lock()

    async def increment(self, value: int) -> int:
        """Store ``value + 1`` and return it; raises OverflowError past 32 bits."""
        _check_u32(value)
        if value == U32_MAX:
            raise OverflowError(f"{value} + 1 does not fit in 32 unsigned bits")
        async with self._lock:
            self.value = value + 1
            logger.info("Counter set to %d", self.value)
            return self.value

    async def get_value(self) -> int:
        """Return the stored value."""
        async with self._lock:
            return self.value


async def run_kernel(service: _Incrementer, iterations: int = DEFAULT_ITERATIONS) -> int:
    """Starting from 0, call ``increment`` repeatedly and return the last value."""
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise TypeError(f"expected an integer iteration count, got {iterations!r}")
    if iterations < 0:
        raise ValueError("iteration count must not be negative")
    value = 0
    for _ in range(iterations):
        value = await service.increment(value)
    return value