"""In-memory cache of the latest quote per ticker."""

from __future__ import annotations

from ..clock import now_ms
from .models import PriceQuote


class PriceCache:
    """Latest PriceQuote for each ticker, overwritten every tick.

    Writer: TickLoop. Readers: Broadcaster, the ``/stocks`` endpoint.
    Everything runs on one event loop, so no locking is needed.
    """

    def __init__(self) -> None:
        self._quotes: dict[str, PriceQuote] = {}
        self._version: int = 0  # Monotonically increasing; bumped on every write

    def seed(self, ticker: str, price: float, timestamp: int | None = None) -> PriceQuote:
        """Record an initial quote with no change information."""
        quote = PriceQuote(
            ticker=ticker,
            price=round(price, 2),
            timestamp=timestamp or now_ms(),
        )
        return self._store(quote)

    def update(
        self,
        ticker: str,
        price: float,
        change: float,
        change_percent: float,
        timestamp: int | None = None,
    ) -> PriceQuote:
        """Overwrite the quote for a ticker. Returns the created PriceQuote."""
        quote = PriceQuote(
            ticker=ticker,
            price=round(price, 2),
            change=round(change, 4),
            change_percent=round(change_percent, 4),
            timestamp=timestamp or now_ms(),
        )
        return self._store(quote)

    def get(self, ticker: str) -> PriceQuote | None:
        """Latest quote for a single ticker, or None if unknown."""
        return self._quotes.get(ticker)

    def get_all(self) -> list[PriceQuote]:
        """All current quotes, in the order tickers were first seen."""
        return list(self._quotes.values())

    @property
    def version(self) -> int:
        return self._version

    def _store(self, quote: PriceQuote) -> PriceQuote:
        self._quotes[quote.ticker] = quote
        self._version += 1
        return quote

    def __len__(self) -> int:
        return len(self._quotes)

    def __contains__(self, ticker: str) -> bool:
        return ticker in self._quotes
