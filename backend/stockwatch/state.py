"""The server's owned in-memory state."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Settings
from .market.cache import PriceCache
from .market.simulator import RandomWalkSimulator
from .market.tickers import SUPPORTED_TICKERS
from .realtime.broadcast import Broadcaster
from .realtime.registry import ConnectionRegistry
from .realtime.ticker import TickLoop
from .users.store import SubscriptionStore


@dataclass
class StockWatchState:
    """Everything the server mutates, built at startup and torn down at shutdown."""

    settings: Settings
    price_cache: PriceCache
    simulator: RandomWalkSimulator
    store: SubscriptionStore
    registry: ConnectionRegistry
    broadcaster: Broadcaster
    tick_loop: TickLoop

    @classmethod
    def build(cls, settings: Settings, seed: int | None = None) -> "StockWatchState":
        cache = PriceCache()
        simulator = RandomWalkSimulator(SUPPORTED_TICKERS, max_move=settings.max_move, seed=seed)
        store = SubscriptionStore(strict_tickers=settings.strict_tickers)
        registry = ConnectionRegistry()
        broadcaster = Broadcaster(registry, send_timeout=settings.send_timeout)
        tick_loop = TickLoop(
            simulator=simulator,
            price_cache=cache,
            store=store,
            broadcaster=broadcaster,
            interval=settings.tick_interval,
        )
        return cls(
            settings=settings,
            price_cache=cache,
            simulator=simulator,
            store=store,
            registry=registry,
            broadcaster=broadcaster,
            tick_loop=tick_loop,
        )

    async def start(self) -> None:
        await self.tick_loop.start()

    async def shutdown(self) -> None:
        """Stop ticking before closing connections so nothing is sent on a closed socket."""
        await self.tick_loop.stop()
        await self.registry.close_all(timeout=self.settings.shutdown_timeout)
