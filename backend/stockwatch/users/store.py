"""In-memory user and subscription store."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..clock import now_ms
from ..errors import NotFoundError, ValidationError
from ..market.tickers import SUPPORTED_TICKERS, normalize_ticker
from .models import User

logger = logging.getLogger(__name__)


class SubscriptionStore:
    """Users keyed by email, with per-user ticker subscriptions.

    Lifecycle: created at startup, mutated by request handlers, read by the
    tick loop on every broadcast. Nothing is persisted; a restart loses all
    users.

    User ids are ``user_<unix ms>`` taken from ``clock`` at first login. If
    two users would get the same id, the later one is bumped forward a
    millisecond at a time until it is unique.
    """

    def __init__(
        self,
        strict_tickers: bool = True,
        supported_tickers: tuple[str, ...] = SUPPORTED_TICKERS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._strict = strict_tickers
        self._supported = frozenset(supported_tickers)
        self._clock = clock
        self._by_email: dict[str, User] = {}
        self._by_id: dict[str, User] = {}

    def login(self, email: str | None) -> User:
        """Return the user for ``email``, creating it on first sight."""
        email = (email or "").strip()
        if not email:
            raise ValidationError("Email is required")

        user = self._by_email.get(email)
        if user is not None:
            return user

        user = User(id=self._next_id(), email=email)
        self._by_email[email] = user
        self._by_id[user.id] = user
        logger.info("Created user %s for %s", user.id, email)
        return user

    def subscribe(self, user_id: str | None, ticker: str | None) -> None:
        """Add ``ticker`` to the user's subscriptions. No-op if already present."""
        user = self.get(user_id)
        ticker = self._clean_ticker(ticker)
        if ticker not in user.subscriptions:
            user.subscriptions.append(ticker)
            logger.debug("%s subscribed to %s", user.id, ticker)

    def unsubscribe(self, user_id: str | None, ticker: str | None) -> None:
        """Remove ``ticker`` from the user's subscriptions. No-op if absent."""
        user = self.get(user_id)
        ticker = normalize_ticker(ticker or "")
        if ticker in user.subscriptions:
            user.subscriptions.remove(ticker)
            logger.debug("%s unsubscribed from %s", user.id, ticker)

    def get(self, user_id: str | None) -> User:
        user = self._by_id.get(user_id or "")
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_by_email(self, email: str) -> User | None:
        return self._by_email.get(email.strip())

    def snapshot(self) -> dict[str, dict]:
        """Copy of every user as ``{id: {email, subscriptions}}``."""
        return {user.id: user.to_snapshot() for user in self._by_id.values()}

    def __len__(self) -> int:
        return len(self._by_id)

    # --- Internals ---

    def _next_id(self) -> str:
        stamp = self._clock()
        while f"user_{stamp}" in self._by_id:
            stamp += 1
        return f"user_{stamp}"

    def _clean_ticker(self, ticker: str | None) -> str:
        ticker = normalize_ticker(ticker or "")
        if not ticker:
            raise ValidationError("Ticker is required")
        if self._strict and ticker not in self._supported:
            supported = ", ".join(sorted(self._supported))
            raise ValidationError(f"Unsupported stock. Supported stocks: {supported}")
        return ticker
