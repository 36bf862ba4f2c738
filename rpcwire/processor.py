"""A data processor: byte reversal, text transformation and arithmetic."""

from __future__ import annotations

import logging
from typing import Iterable

logger = logging.getLogger(__name__)


class DataProcessor:
    """Transforms bytes, text and number pairs."""

    async def process_data(self, data: Iterable[int]) -> bytes:
        """Return the bytes in reverse order."""
        data = bytes(data)
        logger.info("Processing %d bytes", len(data))
        return data[::-1]

    async def transform(self, text: str) -> str:
        """Return the text upper-cased and reversed."""
        logger.info("Transforming %r", text)
        return text.upper()[::-1]

    async def calculate(self, x: float, y: float, op: str) -> float:
        """Apply ``op`` (add, sub, mul, div) to x and y.

        Division by zero and unknown operations give 0.0.
        """
        x, y = float(x), float(y)
        logger.info("Calculating %s %s %s", x, op, y)
        if op == "add":
            return x + y
        if op == "sub":
            return x - y
        if op == "mul":
            return x * y
        if op == "div" and y != 0.0:
            return x / y
        return 0.0