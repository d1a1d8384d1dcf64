"""The minimal interface a push connection must offer."""

from __future__ import annotations

from typing import Protocol


class PushConnection(Protocol):
    """Anything that can receive text frames and be closed.

    Starlette's ``WebSocket`` satisfies this, as do the fakes used in tests.
    """

    async def send_text(self, data: str) -> None: ...

    async def close(self, code: int = 1000, reason: str | None = None) -> None: ...
