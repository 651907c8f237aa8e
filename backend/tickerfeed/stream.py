"""WebSocket endpoint and the small REST surface around it."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, WebSocket

from .hub import TickerHub
from .seed_prices import POPULAR_COUNT, SYMBOL_CATALOG

logger = logging.getLogger(__name__)


def _catalog_entry(symbol: str, name: str, sector: str | None = None) -> dict:
    entry = {"symbol": symbol, "name": name}
    if sector is not None:
        entry["sector"] = sector
    return entry


def create_stream_router(hub: TickerHub) -> APIRouter:
    """Create the WebSocket router bound to a hub.

    The socket is served on ``/ws`` and on ``/`` (where the browser
    client connects).
    """
    router = APIRouter(tags=["streaming"])

    async def ticker_socket(websocket: WebSocket) -> None:
        """One client session: greet, then feed frames to the connection manager until it goes away."""
        await websocket.accept()
        client_host = websocket.client.host if websocket.client else "unknown"
        client_id = await hub.connections.accept(websocket)
        logger.debug("Client %s remote address: %s", client_id, client_host)

        try:
            # A failed send elsewhere removes the session and closes the socket
            while client_id in hub.connections:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    hub.connections.on_disconnect(client_id)
                    break
                raw = message.get("text")
                if raw is None:
                    raw = message.get("bytes") or b""
                await hub.connections.on_message(client_id, raw)
        except Exception as e:
            hub.connections.on_error(client_id, e)

    router.add_api_websocket_route("/ws", ticker_socket)
    router.add_api_websocket_route("/", ticker_socket)
    return router


def create_api_router(hub: TickerHub) -> APIRouter:
    """Health check and symbol lookup endpoints."""
    router = APIRouter(tags=["api"])

    @router.get("/health")
    async def health() -> dict:
        return {
            "status": "ok",
            **hub.stats(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @router.get("/api/popular-stocks")
    async def popular_stocks() -> list[dict]:
        return [_catalog_entry(*row) for row in SYMBOL_CATALOG[:POPULAR_COUNT]]

    @router.get("/api/search/{query}")
    async def search(query: str) -> list[dict]:
        needle = query.lower()
        return [
            _catalog_entry(symbol, name)
            for symbol, name, _ in SYMBOL_CATALOG
            if needle in symbol.lower() or needle in name.lower()
        ]

    return router
