"""End-to-end tests for the /ws push endpoint."""

import time

import pytest
from fastapi.testclient import TestClient

from stockwatch.config import Settings
from stockwatch.main import create_app


@pytest.fixture
def app():
    return create_app(Settings(tick_interval=60.0), seed=1)


class TestPushEndpoint:
    """WebSocket round trips through the real app."""

    def test_connect_confirmation(self, app):
        """The first frame confirms the connection."""
        with TestClient(app) as client, client.websocket_connect("/ws") as ws:
            assert ws.receive_json() == {
                "type": "connection",
                "status": "connected",
                "message": "Connected to stock updates",
            }

    def test_ping_pong(self, app):
        """A ping is answered with a pong."""
        with TestClient(app) as client, client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "ping"})
            pong = ws.receive_json()
            assert pong["type"] == "pong"
            assert isinstance(pong["timestamp"], int)

    def test_malformed_message_keeps_connection(self, app):
        """Garbage is ignored and the connection keeps working."""
        with TestClient(app) as client, client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_text("not json")
            ws.send_json({"type": "ping"})
            assert ws.receive_json()["type"] == "pong"

    def test_binary_frame_keeps_connection(self, app):
        """Binary frames are ignored and the connection keeps working."""
        with TestClient(app) as client, client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_bytes(b'{"type": "ping"}')
            ws.send_json({"type": "ping"})
            assert ws.receive_json()["type"] == "pong"
            assert len(app.state.stockwatch.registry) == 1

    def test_tick_reaches_socket(self, app):
        """A tick pushes stockUpdate then userUpdate including new subscriptions."""
        state = app.state.stockwatch
        with TestClient(app) as client, client.websocket_connect("/ws") as ws:
            ws.receive_json()
            user = client.post("/login", json={"email": "a@b.com"}).json()
            client.post("/subscribe", json={"userId": user["id"], "ticker": "GOOG"})

            client.portal.call(state.tick_loop.tick)

            stocks = ws.receive_json()
            users = ws.receive_json()
            assert stocks["type"] == "stockUpdate"
            assert len(stocks["stocks"]) == 5
            assert users == {
                "type": "userUpdate",
                "users": {user["id"]: {"email": "a@b.com", "subscriptions": ["GOOG"]}},
            }

    def test_disconnect_unregisters(self, app):
        """Closing the socket removes it from the registry."""
        registry = app.state.stockwatch.registry
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()
                ws.send_json({"type": "ping"})
                ws.receive_json()
                assert len(registry) == 1
            # The endpoint unregisters once it sees the disconnect
            for _ in range(50):
                if len(registry) == 0:
                    break
                time.sleep(0.01)
            assert len(registry) == 0
