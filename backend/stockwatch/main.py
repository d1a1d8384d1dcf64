"""FastAPI application factory and uvicorn entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api import create_api_router, install_error_handlers
from .config import Settings, get_settings
from .realtime import create_stream_router
from .state import StockWatchState

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None, seed: int | None = None) -> FastAPI:
    """Build the app with its own state. Nothing is shared between apps."""
    settings = settings or get_settings()
    state = StockWatchState.build(settings, seed=seed)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await state.start()
        logger.info("StockWatch ready on %s:%d", settings.host, settings.port)
        try:
            yield
        finally:
            await state.shutdown()
            logger.info("StockWatch shut down")

    app = FastAPI(title="StockWatch", version="0.1.0", lifespan=lifespan)
    app.state.stockwatch = state

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)
    app.include_router(create_api_router(state.store, state.price_cache))
    app.include_router(create_stream_router(state.registry))

    # Mounted last so the API and /ws routes take precedence over files.
    if settings.static_dir:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def run() -> None:
    """Console entry point: ``stockwatch``."""
    import uvicorn

    from .server import StockWatchServer

    settings = get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    config = uvicorn.Config(app, host=settings.host, port=settings.port, log_config=None)
    StockWatchServer(config, app.state.stockwatch).run()


if __name__ == "__main__":
    run()
