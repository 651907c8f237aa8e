"""FastAPI application factory and uvicorn entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import Settings
from .hub import TickerHub
from .stream import create_api_router, create_stream_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None, hub: TickerHub | None = None) -> FastAPI:
    """Build the app. The hub's timers run for the lifetime of the app (lifespan)."""
    settings = settings or Settings.from_env()
    hub = hub or TickerHub(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await hub.start()
        try:
            yield
        finally:
            await hub.stop()

    app = FastAPI(title="tickerfeed", lifespan=lifespan)
    app.state.hub = hub
    app.include_router(create_api_router(hub))
    app.include_router(create_stream_router(hub))
    return app


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Serving on http://%s:%d (WebSocket at /ws)", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
