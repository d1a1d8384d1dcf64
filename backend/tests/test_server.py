"""Tests for StockWatchServer shutdown ordering."""

import pytest
import uvicorn

from stockwatch.config import Settings
from stockwatch.main import create_app
from stockwatch.server import StockWatchServer


@pytest.mark.asyncio
class TestStockWatchServer:
    """The tick loop and push connections go down before the listener."""

    async def test_state_shut_down_before_listener(self, make_connection, monkeypatch):
        """By the time uvicorn closes the listener, ticks have stopped and sockets are closed."""
        app = create_app(Settings(tick_interval=60.0), seed=1)
        state = app.state.stockwatch
        await state.start()
        conn = make_connection()
        await state.registry.register(conn)

        seen = []

        async def listener_shutdown(self, sockets=None):
            seen.append((state.tick_loop.running, conn.closed_with, len(state.registry)))

        monkeypatch.setattr(uvicorn.Server, "shutdown", listener_shutdown)
        server = StockWatchServer(uvicorn.Config(app), state)
        await server.shutdown()

        assert seen == [(False, 1001, 0)]

    async def test_lifespan_shutdown_after_server_shutdown_is_noop(self, make_connection, monkeypatch):
        """The lifespan's own shutdown finds nothing left to stop or close."""
        app = create_app(Settings(tick_interval=60.0), seed=1)
        state = app.state.stockwatch
        await state.start()
        conn = make_connection()
        await state.registry.register(conn)

        async def listener_shutdown(self, sockets=None):
            pass

        monkeypatch.setattr(uvicorn.Server, "shutdown", listener_shutdown)
        await StockWatchServer(uvicorn.Config(app), state).shutdown()
        sent = len(conn.sent)

        await state.shutdown()

        assert len(conn.sent) == sent
        assert not state.tick_loop.running
