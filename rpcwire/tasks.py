"""A task-processing service and the callbacks a server can invoke on its client."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .mathsvc import U64_MAX

logger = logging.getLogger(__name__)

STATUS_RUNNING = "Server is running"


def _check_task_id(task_id: int) -> int:
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        raise TypeError(f"expected an integer task id, got {task_id!r}")
    if not 0 <= task_id <= U64_MAX:
        raise ValueError(f"task id {task_id} is outside the unsigned 64-bit range")
    return task_id


class TaskProcessor:
    """Server side: processes tasks and reports its status."""

    async def process_task(self, task_id: int, data: str) -> str:
        """Process ``data`` for the given task and describe the outcome."""
        _check_task_id(task_id)
        logger.info("Processing task %d with data: %s", task_id, data)
        return f"Processed: {data}"

    async def get_status(self) -> str:
        """Return a short description of the server state."""
        logger.info("Status requested")
        return STATUS_RUNNING


class ClientCallbacks:
    """Client side: receives progress, completion and log notifications.

    Each notification is rendered as one line, kept in ``lines`` and
    written to ``out`` (standard output when not given).
    """

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out = out
        self.lines: list[str] = []

    def _emit(self, line: str) -> None:
        self.lines.append(line)
        out = self._out if self._out is not None else sys.stdout
        print(line, file=out)

    async def on_progress(self, task_id: int, percent: float) -> None:
        """Record how far a task has progressed."""
        _check_task_id(task_id)
        self._emit(f"[Client Callback] Task {task_id} progress: {float(percent):.1f}%")

    async def on_complete(self, task_id: int, result: str) -> None:
        """Record that a task has finished."""
        _check_task_id(task_id)
        self._emit(f"[Client Callback] Task {task_id} completed: {result}")

    async def log_message(self, level: str, message: str) -> None:
        """Record a log message sent by the server."""
        self._emit(f"[Client Callback] [{level}] {message}")