"""Composition root: owns every component and their background timers."""

from __future__ import annotations

import logging

from .broadcaster import Broadcaster
from .config import Settings
from .connections import ConnectionManager
from .interface import PriceStore
from .registry import SubscriptionRegistry
from .scheduler import PeriodicTask, TickScheduler
from .simulator import SimulatedPriceStore

logger = logging.getLogger(__name__)


class TickerHub:
    """Wires store, registry, connections, broadcaster and timers together.

    All state lives on this object and is only touched from the event loop
    that runs the WebSocket handlers and the timers.

    Lifecycle:
        hub = TickerHub(settings)
        await hub.start()
        # ... serve ...
        await hub.stop()
    """

    def __init__(self, settings: Settings | None = None, price_store: PriceStore | None = None) -> None:
        self.settings = settings or Settings()
        self.store = price_store or SimulatedPriceStore(seed=self.settings.simulator_seed)
        self.registry = SubscriptionRegistry(self.store)
        self.connections = ConnectionManager(self.registry, send_timeout=self.settings.send_timeout)
        self.broadcaster = Broadcaster(self.store, self.registry, self.connections)
        self.connections.on_subscribe = self.broadcaster.deliver_snapshots
        self.ticker = TickScheduler(
            self.store,
            self.registry,
            self.broadcaster,
            interval=self.settings.tick_interval,
        )
        self.sweeper = PeriodicTask(
            "connection-sweep",
            self.settings.sweep_interval,
            self.connections.sweep_dead,
        )

    async def start(self) -> None:
        self.ticker.start()
        self.sweeper.start()
        logger.info("Ticker hub started")

    async def stop(self) -> None:
        """Stop the timers first, then close client sockets."""
        await self.ticker.stop()
        await self.sweeper.stop()
        await self.connections.close_all()
        logger.info("Ticker hub stopped")

    def stats(self) -> dict:
        return {
            "activeClients": self.connections.client_count,
            "activeSymbols": list(self.registry.active_symbols()),
        }
