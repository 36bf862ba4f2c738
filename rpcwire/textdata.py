"""A small data service: byte filtering and text analysis."""

from __future__ import annotations

import logging
from typing import Iterable

from .models import Analysis

logger = logging.getLogger(__name__)


def analyze_text(text: str) -> Analysis:
    """Count UTF-8 bytes, words, characters and upper-case letters."""
    return Analysis(
        length=len(text.encode("utf-8")),
        word_count=len(text.split()),
        char_count=len(text),
        uppercase_count=sum(1 for ch in text if ch.isupper()),
    )


class DataService:
    """Service that strips zero bytes and analyses text."""

    async def compress(self, data: Iterable[int]) -> bytes:
        """Return the data with every zero byte removed."""
        data = bytes(data)
        logger.info("Compressing %d bytes", len(data))
        return bytes(b for b in data if b != 0)

    async def analyze(self, text: str) -> Analysis:
        """Return an analysis of ``text``."""
        logger.info("Analyzing text: %r", text)
        return analyze_text(text)