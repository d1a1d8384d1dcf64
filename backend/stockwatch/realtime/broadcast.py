"""Fan-out of tick payloads to every registered connection."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable, Mapping

from ..market.models import PriceQuote
from .connection import PushConnection
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)


def stock_update_message(quotes: Iterable[PriceQuote]) -> str:
    return json.dumps({"type": "stockUpdate", "stocks": [q.to_dict() for q in quotes]})


def user_update_message(users: Mapping[str, dict]) -> str:
    return json.dumps({"type": "userUpdate", "users": dict(users)})


class Broadcaster:
    """Best-effort, at-most-once delivery of each tick.

    Every connection gets the full quote list and the full user directory;
    filtering by subscription happens in the client. Connections are served
    concurrently and every send is bounded by ``send_timeout``, so a slow or
    hung viewer misses the tick without holding up anyone else. A connection
    that fails a send is logged and skipped. It is not removed here; the push
    endpoint unregisters it when its receive loop sees the disconnect.
    """

    def __init__(self, registry: ConnectionRegistry, send_timeout: float = 0.5) -> None:
        if send_timeout <= 0:
            raise ValueError("send_timeout must be positive")
        self._registry = registry
        self._send_timeout = send_timeout

    async def broadcast(self, quotes: Iterable[PriceQuote], users: Mapping[str, dict]) -> int:
        """Send ``stockUpdate`` then ``userUpdate`` to every connection.

        Returns the number of connections that received both messages.
        """
        stocks_payload = stock_update_message(quotes)
        users_payload = user_update_message(users)

        conns = self._registry.connections()
        if not conns:
            return 0

        results = await asyncio.gather(
            *(self._deliver(conn, stocks_payload, users_payload) for conn in conns)
        )
        delivered = sum(results)

        if delivered < len(conns):
            logger.debug("Tick delivered to %d/%d connections", delivered, len(conns))
        return delivered

    async def _deliver(self, conn: PushConnection, stocks_payload: str, users_payload: str) -> bool:
        # The two messages are independent: a failed stockUpdate still tries userUpdate.
        stocks_ok = await self._send(conn, stocks_payload)
        users_ok = await self._send(conn, users_payload)
        return stocks_ok and users_ok

    async def _send(self, conn: PushConnection, payload: str) -> bool:
        try:
            await asyncio.wait_for(conn.send_text(payload), timeout=self._send_timeout)
        except asyncio.TimeoutError:
            logger.warning("Push send timed out after %.2fs, skipping connection", self._send_timeout)
            return False
        except Exception as e:
            logger.warning("Push send failed, skipping connection: %s", e)
            return False
        return True
