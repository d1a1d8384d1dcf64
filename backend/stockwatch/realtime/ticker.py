"""The recurring tick that drives price generation and broadcast."""

from __future__ import annotations

import asyncio
import logging

from ..market.cache import PriceCache
from ..market.simulator import RandomWalkSimulator
from ..users.store import SubscriptionStore
from .broadcast import Broadcaster

logger = logging.getLogger(__name__)


class TickLoop:
    """Runs a background asyncio task that steps the simulator every
    ``interval`` seconds, writes the results to the PriceCache and
    broadcasts the quotes plus the user snapshot.

    Lifecycle:
        loop = TickLoop(simulator, cache, store, broadcaster)
        await loop.start()
        # ... app runs ...
        await loop.stop()
    """

    def __init__(
        self,
        simulator: RandomWalkSimulator,
        price_cache: PriceCache,
        store: SubscriptionStore,
        broadcaster: Broadcaster,
        interval: float = 1.0,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._sim = simulator
        self._cache = price_cache
        self._store = store
        self._broadcaster = broadcaster
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._ticks = 0

    async def start(self) -> None:
        """Seed the cache, run one tick right away, then tick on the interval."""
        if self.running:
            return
        for ticker in self._sim.get_tickers():
            price = self._sim.get_price(ticker)
            if price is not None:
                self._cache.seed(ticker=ticker, price=price)
        await self.tick()
        self._task = asyncio.create_task(self._run_loop(), name="stock-tick-loop")
        logger.info(
            "Tick loop started: %d tickers, %.2fs interval",
            len(self._sim.get_tickers()),
            self._interval,
        )

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        if self._task is not None:
            logger.info("Tick loop stopped after %d ticks", self._ticks)
        self._task = None

    async def tick(self) -> int:
        """One cycle: step prices, cache them, broadcast. Returns connections reached."""
        for ticker, (price, change, change_percent) in self._sim.step().items():
            self._cache.update(
                ticker=ticker,
                price=price,
                change=change,
                change_percent=change_percent,
            )
        self._ticks += 1
        return await self._broadcaster.broadcast(self._cache.get_all(), self._store.snapshot())

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def ticks(self) -> int:
        return self._ticks

    async def _run_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.tick()
            except Exception:
                logger.exception("Tick failed")
