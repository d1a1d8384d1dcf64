"""Tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from stockwatch.config import Settings
from stockwatch.main import create_app


@pytest.fixture
def client():
    app = create_app(Settings(tick_interval=60.0), seed=1)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user(client):
    return client.post("/login", json={"email": "a@b.com"}).json()


class TestLogin:
    """POST /login."""

    def test_login_creates_user(self, client):
        """A new email gets a fresh user with no subscriptions."""
        response = client.post("/login", json={"email": "a@b.com"})
        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "a@b.com"
        assert body["id"].startswith("user_")
        assert body["subscriptions"] == []

    def test_login_is_idempotent(self, client, user):
        """Logging in again returns the same user."""
        again = client.post("/login", json={"email": "a@b.com"}).json()
        assert again["id"] == user["id"]

    @pytest.mark.parametrize("payload", [{}, {"email": ""}, {"email": None}])
    def test_missing_email(self, client, payload):
        """Missing email is a 400 with an error message."""
        response = client.post("/login", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Email is required"}

    def test_no_body(self, client):
        """A request with no JSON body is also a 400."""
        response = client.post("/login")
        assert response.status_code == 400
        assert "error" in response.json()


class TestSubscribe:
    """POST /subscribe and /unsubscribe."""

    def test_subscribe(self, client, user):
        """Subscribing returns success and shows on the user record."""
        response = client.post("/subscribe", json={"userId": user["id"], "ticker": "GOOG"})
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"/users/{user['id']}").json()["subscriptions"] == ["GOOG"]

    def test_subscribe_twice(self, client, user):
        """A second subscribe is a no-op success."""
        for _ in range(2):
            assert client.post("/subscribe", json={"userId": user["id"], "ticker": "GOOG"}).status_code == 200
        assert client.get(f"/users/{user['id']}").json()["subscriptions"] == ["GOOG"]

    def test_subscribe_unknown_user(self, client):
        """Unknown user ids are a 404."""
        response = client.post("/subscribe", json={"userId": "user_0", "ticker": "GOOG"})
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_subscribe_unsupported_ticker(self, client, user):
        """Tickers outside the supported set are a 400."""
        response = client.post("/subscribe", json={"userId": user["id"], "ticker": "AAPL"})
        assert response.status_code == 400
        assert "Unsupported stock" in response.json()["error"]

    def test_unsubscribe(self, client, user):
        """Unsubscribing removes the ticker."""
        client.post("/subscribe", json={"userId": user["id"], "ticker": "GOOG"})
        response = client.post("/unsubscribe", json={"userId": user["id"], "ticker": "GOOG"})
        assert response.json() == {"success": True}
        assert client.get(f"/users/{user['id']}").json()["subscriptions"] == []

    def test_unsubscribe_never_subscribed(self, client, user):
        """Removing an absent ticker still succeeds."""
        response = client.post("/unsubscribe", json={"userId": user["id"], "ticker": "NVDA"})
        assert response.status_code == 200

    def test_unsubscribe_unknown_user(self, client):
        """Unknown user ids are a 404."""
        response = client.post("/unsubscribe", json={"userId": "user_0", "ticker": "GOOG"})
        assert response.status_code == 404


class TestReadEndpoints:
    """GET endpoints."""

    def test_health(self, client):
        """Liveness probe reports OK with a timestamp."""
        body = client.get("/health").json()
        assert body["status"] == "OK"
        assert body["service"] == "stock-dashboard-server"
        assert body["timestamp"] > 10**12

    def test_stocks(self, client):
        """Current quotes are available for every ticker after startup."""
        stocks = client.get("/stocks").json()["stocks"]
        assert [s["ticker"] for s in stocks] == ["GOOG", "TSLA", "AMZN", "META", "NVDA"]
        assert all(s["price"] > 0 for s in stocks)

    def test_tickers(self, client):
        """The supported ticker list."""
        assert client.get("/tickers").json() == {"tickers": ["GOOG", "TSLA", "AMZN", "META", "NVDA"]}

    def test_unknown_user(self, client):
        """Unknown users are a 404."""
        assert client.get("/users/user_0").status_code == 404
