"""Targeted delivery of price records to subscribed clients."""

from __future__ import annotations

import asyncio
import logging

from .connections import ConnectionManager
from .interface import PriceStore
from .messages import encode, ticker_message
from .models import PriceRecord
from .registry import SubscriptionRegistry

logger = logging.getLogger(__name__)


class Broadcaster:
    """Sends ``ticker`` messages to exactly the clients that asked for a symbol.

    Sends are isolated per recipient: ConnectionManager.send_text never raises,
    and a recipient whose send fails is removed there, so one dead socket
    cannot hold up or abort delivery to the others.
    """

    def __init__(
        self,
        price_store: PriceStore,
        registry: SubscriptionRegistry,
        connections: ConnectionManager,
    ) -> None:
        self._store = price_store
        self._registry = registry
        self._connections = connections

    async def deliver_snapshot(self, client_id: str, symbol: str) -> bool:
        """Push the current record for ``symbol`` to one client, if the record exists."""
        record = self._store.snapshot(symbol)
        if record is None:
            return False
        return await self._connections.send_text(client_id, encode(ticker_message(record)))

    async def deliver_snapshots(self, client_id: str, symbols: list[str]) -> int:
        """Snapshot every symbol in order. Stops early if the client goes away."""
        sent = 0
        for symbol in symbols:
            if client_id not in self._connections:
                break
            if await self.deliver_snapshot(client_id, symbol):
                sent += 1
        return sent

    async def fan_out(self, record: PriceRecord) -> int:
        """Send ``record`` to every subscriber of its symbol. Returns the delivered count."""
        recipients = sorted(self._registry.subscribers_of(record.symbol))
        if not recipients:
            return 0

        text = encode(ticker_message(record))
        results = await asyncio.gather(
            *(self._connections.send_text(client_id, text) for client_id in recipients)
        )
        sent = sum(1 for ok in results if ok)
        if sent:
            logger.debug(
                "Sent %s update to %d clients: $%.2f", record.symbol, sent, record.price
            )
        return sent
