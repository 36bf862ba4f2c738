"""Async message transports (in-process, stdio, WebSocket) and sample RPC-style services."""

__version__ = "0.1.0"