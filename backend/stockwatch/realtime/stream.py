"""WebSocket push endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)


def create_stream_router(registry: ConnectionRegistry) -> APIRouter:
    """Create the push router with a reference to the connection registry.

    This factory pattern lets us inject the registry without globals.
    """
    router = APIRouter(tags=["streaming"])

    @router.websocket("/ws")
    async def stream_updates(websocket: WebSocket) -> None:
        """Push channel for ``stockUpdate`` / ``userUpdate`` messages.

        Clients may send ``{"type": "ping"}`` and get ``{"type": "pong"}``
        back. Binary frames are ignored. Reconnecting after a drop is the
        client's job.
        """
        await websocket.accept()
        client = websocket.client.host if websocket.client else "unknown"
        logger.info("WebSocket client connected: %s", client)

        try:
            await registry.register(websocket)
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                raw = message.get("text")
                if raw is None:
                    logger.warning("Ignoring binary push frame from %s", client)
                    continue
                await registry.handle_message(websocket, raw)
        except WebSocketDisconnect:
            pass
        finally:
            registry.unregister(websocket)
            logger.info("WebSocket client disconnected: %s", client)

    return router
