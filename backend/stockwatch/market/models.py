"""Data models for market data."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..clock import now_ms


@dataclass(frozen=True, slots=True)
class PriceQuote:
    """Immutable snapshot of a single ticker's simulated price.

    ``change`` and ``change_percent`` stay ``None`` until the ticker has been
    stepped at least once.
    """

    ticker: str
    price: float
    change: float | None = None
    change_percent: float | None = None
    timestamp: int = field(default_factory=now_ms)  # Unix milliseconds

    def to_dict(self) -> dict:
        """Serialize for JSON / WebSocket transmission."""
        data: dict = {
            "ticker": self.ticker,
            "price": self.price,
            "timestamp": self.timestamp,
        }
        if self.change is not None:
            data["change"] = self.change
        if self.change_percent is not None:
            data["changePercent"] = self.change_percent
        return data
