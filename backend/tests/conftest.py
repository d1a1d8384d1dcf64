"""Pytest configuration and fixtures."""

import json

import pytest


class FakeConnection:
    """In-memory stand-in for a WebSocket that records what it is sent."""

    def __init__(self, fail_sends: bool = False, fail_close: bool = False) -> None:
        self.sent: list[str] = []
        self.closed_with: int | None = None
        self.fail_sends = fail_sends
        self.fail_close = fail_close

    async def send_text(self, data: str) -> None:
        if self.fail_sends:
            raise ConnectionResetError("peer went away")
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        if self.fail_close:
            raise RuntimeError("already closed")
        self.closed_with = code

    @property
    def messages(self) -> list[dict]:
        return [json.loads(raw) for raw in self.sent]

    def of_type(self, msg_type: str) -> list[dict]:
        return [m for m in self.messages if m.get("type") == msg_type]


@pytest.fixture
def make_connection():
    """The FakeConnection class, for building or subclassing fakes."""
    return FakeConnection
