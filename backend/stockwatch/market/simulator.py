"""Bounded random-walk price simulator."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

import numpy as np

from .tickers import (
    DEFAULT_MAX_MOVE,
    PRICE_FLOOR,
    SEED_PRICE_MIN,
    SEED_PRICE_SPAN,
)

logger = logging.getLogger(__name__)

# (new_price, change, change_percent)
Step = tuple[float, float, float]


class RandomWalkSimulator:
    """Uniform random walk with a price floor.

    Math, per ticker per step:
        delta          = U(-max_move, +max_move)
        new_price      = max(floor, prev_price + delta)
        change_percent = delta / prev_price * 100

    ``change`` reports the drawn delta even when the floor clamps the price,
    so a clamped tick can show a larger move than the price actually made.
    """

    def __init__(
        self,
        tickers: Iterable[str],
        max_move: float = DEFAULT_MAX_MOVE,
        floor: float = PRICE_FLOOR,
        seed: int | None = None,
        seed_prices: Mapping[str, float] | None = None,
    ) -> None:
        if max_move <= 0:
            raise ValueError("max_move must be positive")
        if floor <= 0:
            raise ValueError("floor must be positive")

        self._max_move = max_move
        self._floor = floor
        self._rng = np.random.default_rng(seed)

        self._tickers: list[str] = []
        self._prices: dict[str, float] = {}

        seed_prices = seed_prices or {}
        for ticker in tickers:
            if ticker in self._prices:
                continue
            self._tickers.append(ticker)
            start = seed_prices.get(ticker)
            if start is None:
                start = SEED_PRICE_MIN + float(self._rng.uniform(0.0, SEED_PRICE_SPAN))
            self._prices[ticker] = max(self._floor, float(start))

    # --- Public API ---

    def step(self) -> dict[str, Step]:
        """Advance every ticker by one tick. Returns {ticker: (price, change, change_percent)}."""
        n = len(self._tickers)
        if n == 0:
            return {}

        deltas = self._rng.uniform(-self._max_move, self._max_move, size=n)

        result: dict[str, Step] = {}
        for ticker, delta in zip(self._tickers, deltas):
            prev = self._prices[ticker]
            delta = float(delta)
            new_price = max(self._floor, prev + delta)
            self._prices[ticker] = new_price
            result[ticker] = (new_price, delta, delta / prev * 100)

        logger.debug("Stepped %d tickers", n)
        return result

    def get_price(self, ticker: str) -> float | None:
        """Current price for a ticker, or None if not tracked."""
        return self._prices.get(ticker)

    def get_tickers(self) -> list[str]:
        return list(self._tickers)
