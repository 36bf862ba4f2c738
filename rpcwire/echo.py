"""An echo service that also adds numbers."""

from __future__ import annotations

import logging

from .mathsvc import Calculator

logger = logging.getLogger(__name__)


class EchoServer:
    """Echoes messages back with a prefix and adds 32-bit integers."""

    def __init__(self) -> None:
        self._calculator = Calculator()

    async def echo(self, message: str) -> str:
        """Return ``message`` prefixed to show it came from the server."""
        logger.info("Received echo request: %s", message)
        return f"Server echo: {message}"

    async def add(self, a: int, b: int) -> int:
        """Return a + b; raises OverflowError past the 32-bit range."""
        logger.info("Received add request: %s + %s", a, b)
        result = await self._calculator.add(a, b)
        logger.info("Returning result: %d", result)
        return result