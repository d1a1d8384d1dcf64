"""Registry of live push connections."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterator

from ..clock import now_ms
from .connection import PushConnection

logger = logging.getLogger(__name__)

CONNECTED_MESSAGE = "Connected to stock updates"

# 1001 "going away": the server is shutting down
CLOSE_GOING_AWAY = 1001


class ConnectionRegistry:
    """Tracks every open push connection.

    Connections are not tied to a user; every registered connection receives
    every broadcast.
    """

    def __init__(self) -> None:
        self._connections: set[PushConnection] = set()

    async def register(self, conn: PushConnection) -> None:
        """Confirm the connection to the client, then start including it in broadcasts."""
        await conn.send_text(
            json.dumps(
                {
                    "type": "connection",
                    "status": "connected",
                    "message": CONNECTED_MESSAGE,
                }
            )
        )
        self._connections.add(conn)
        logger.info("Push connection opened (%d active)", len(self._connections))

    def unregister(self, conn: PushConnection) -> None:
        """Forget a connection. Safe to call more than once."""
        if conn in self._connections:
            self._connections.discard(conn)
            logger.info("Push connection closed (%d active)", len(self._connections))

    def connections(self) -> list[PushConnection]:
        """Stable snapshot for enumeration while connections come and go."""
        return list(self._connections)

    async def handle_message(self, conn: PushConnection, raw: str) -> None:
        """Answer keep-alive pings. Anything else is logged and dropped."""
        try:
            message = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed push message: %.100r", raw)
            return

        if not isinstance(message, dict):
            logger.warning("Ignoring non-object push message: %.100r", raw)
            return

        msg_type = message.get("type")
        if msg_type == "ping":
            await conn.send_text(json.dumps({"type": "pong", "timestamp": now_ms()}))
        else:
            logger.debug("Ignoring push message of type %r", msg_type)

    async def close_all(self, code: int = CLOSE_GOING_AWAY, timeout: float = 5.0) -> None:
        """Close every connection, giving up after ``timeout`` seconds."""
        conns = self.connections()
        self._connections.clear()
        if not conns:
            return

        try:
            results = await asyncio.wait_for(
                asyncio.gather(*(c.close(code=code) for c in conns), return_exceptions=True),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Timed out closing %d push connections", len(conns))
            return

        failures = [r for r in results if isinstance(r, Exception)]
        for err in failures:
            logger.warning("Failed to close push connection: %s", err)
        logger.info("Closed %d push connections", len(conns) - len(failures))

    def __iter__(self) -> Iterator[PushConnection]:
        return iter(self.connections())

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, conn: object) -> bool:
        return conn in self._connections
