"""Periodic drivers: the price tick and the dead-connection sweep."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from .broadcaster import Broadcaster
from .interface import PriceStore
from .registry import SubscriptionRegistry

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Runs a callback on a fixed wall-clock cadence in a background asyncio task.

    The schedule is deadline-based: a slow run shortens the following sleep
    instead of pushing every later run back. A failing run is logged and the
    loop carries on.
    """

    def __init__(self, name: str, interval: float, callback: Callable[[], Any]) -> None:
        if interval <= 0:
            raise ValueError(f"{name} interval must be positive, got {interval}")
        self.name = name
        self._interval = interval
        self._callback = callback
        self._task: asyncio.Task | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run_loop(), name=self.name)
        logger.info("%s started (every %.1fs)", self.name, self._interval)

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("%s stopped", self.name)

    async def run_once(self) -> Any:
        result = self._callback()
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _run_loop(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while True:
            deadline += self._interval
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            try:
                await self.run_once()
            except Exception:
                logger.exception("%s run failed", self.name)
            # Skip missed slots rather than bursting to catch up
            if loop.time() - deadline > self._interval:
                deadline = loop.time()


class TickScheduler(PeriodicTask):
    """Advances every active symbol once per interval and fans the results out."""

    IDLE = "idle"
    RUNNING = "running"

    def __init__(
        self,
        price_store: PriceStore,
        registry: SubscriptionRegistry,
        broadcaster: Broadcaster,
        interval: float = 2.0,
    ) -> None:
        super().__init__("price-tick", interval, self.tick)
        self._store = price_store
        self._registry = registry
        self._broadcaster = broadcaster

    @property
    def state(self) -> str:
        return self.RUNNING if self._registry.active_symbols() else self.IDLE

    async def tick(self) -> int:
        """One advance-and-broadcast cycle. Returns how many symbols were advanced."""
        symbols = self._registry.active_symbols()
        if not symbols:
            return 0

        advanced = 0
        for symbol in symbols:
            # A client may have left while an earlier symbol was being sent
            if not self._registry.subscribers_of(symbol):
                continue
            try:
                record = self._store.advance(symbol)
                await self._broadcaster.fan_out(record)
            except Exception:
                logger.exception("Tick failed for %s", symbol)
                continue
            advanced += 1
        return advanced
