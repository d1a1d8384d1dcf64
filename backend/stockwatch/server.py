"""uvicorn server that shuts the app's state down before the listener."""

from __future__ import annotations

import logging
import socket

import uvicorn

from .state import StockWatchState

logger = logging.getLogger(__name__)


class StockWatchServer(uvicorn.Server):
    """uvicorn.Server with StockWatch's shutdown order.

    Plain uvicorn closes the listener and every open connection before the
    app's lifespan shutdown runs, so the tick loop would keep sending on
    closing sockets. Here the tick loop is stopped and push connections are
    closed first, then uvicorn's own shutdown closes the listener. The
    lifespan shutdown that follows finds nothing left to do.
    """

    def __init__(self, config: uvicorn.Config, state: StockWatchState) -> None:
        super().__init__(config)
        self._state = state

    async def shutdown(self, sockets: list[socket.socket] | None = None) -> None:
        logger.info("Stopping tick loop and push connections before closing the listener")
        await self._state.shutdown()
        await super().shutdown(sockets=sockets)
