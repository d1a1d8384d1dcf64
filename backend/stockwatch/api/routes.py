"""HTTP request handlers."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from ..clock import now_ms
from ..market.cache import PriceCache
from ..market.tickers import SUPPORTED_TICKERS
from ..users.store import SubscriptionStore
from .schemas import LoginRequest, SubscriptionRequest

logger = logging.getLogger(__name__)

SERVICE_NAME = "stock-dashboard-server"


def create_api_router(store: SubscriptionStore, price_cache: PriceCache) -> APIRouter:
    """Create the HTTP router bound to the given store and cache.

    Store errors propagate as ``StockWatchError`` and are rendered by the
    app-level exception handlers.
    """
    router = APIRouter(tags=["dashboard"])

    @router.post("/login")
    async def login(body: LoginRequest) -> dict:
        """Look up or create the user for an email."""
        return store.login(body.email).to_dict()

    @router.post("/subscribe")
    async def subscribe(body: SubscriptionRequest) -> dict:
        store.subscribe(body.user_id, body.ticker)
        return {"success": True}

    @router.post("/unsubscribe")
    async def unsubscribe(body: SubscriptionRequest) -> dict:
        store.unsubscribe(body.user_id, body.ticker)
        return {"success": True}

    @router.get("/users/{user_id}")
    async def get_user(user_id: str) -> dict:
        """Current record for a user, so a client can restore its session."""
        return store.get(user_id).to_dict()

    @router.get("/stocks")
    async def list_stocks() -> dict:
        return {"stocks": [q.to_dict() for q in price_cache.get_all()]}

    @router.get("/tickers")
    async def list_tickers() -> dict:
        return {"tickers": list(SUPPORTED_TICKERS)}

    @router.get("/health")
    async def health() -> dict:
        return {"status": "OK", "timestamp": now_ms(), "service": SERVICE_NAME}

    return router
