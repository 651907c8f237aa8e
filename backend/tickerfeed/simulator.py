"""Random-walk price simulator."""

from __future__ import annotations

import logging

import numpy as np

from .interface import PriceStore
from .models import PriceRecord, classify, now_ms, volatility_for
from .seed_prices import (
    BASE_PRICES,
    INITIAL_PERTURBATION,
    INITIAL_RANGE_SPREAD,
    PRICE_FLOOR,
    RANDOM_BASE_RANGE,
    VOLUME_BASELINE,
    VOLUME_STEP_MAX,
)

logger = logging.getLogger(__name__)


class SimulatedPriceStore(PriceStore):
    """PriceStore that invents prices with a bounded uniform random walk.

    Math, per tick:
        delta      ~ U(-vol, +vol)        vol = 2% for crypto pairs, 1% otherwise
        price'     = max(floor, price * (1 + delta))
        change     = price' - previous_close
        day_high'  = max(day_high, price')
        day_low'   = min(day_low, price')
        volume'    = volume + U[0, 10_000)

    previous_close stays fixed at the base price for the life of the process,
    so change/change_percent read as "since the session open".
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)
        self._records: dict[str, PriceRecord] = {}

    # --- Public API ---

    def ensure(self, symbol: str) -> PriceRecord:
        record = self._records.get(symbol)
        if record is not None:
            return record

        base = BASE_PRICES.get(symbol)
        if base is None:
            base = float(self._rng.uniform(*RANDOM_BASE_RANGE))

        perturbation = (self._rng.random() - 0.5) * base * INITIAL_PERTURBATION
        price = max(PRICE_FLOOR, base + perturbation)
        currency, exchange = classify(symbol)

        record = PriceRecord(
            symbol=symbol,
            price=price,
            previous_close=base,
            day_high=price * (1 + self._rng.random() * INITIAL_RANGE_SPREAD),
            day_low=max(PRICE_FLOOR, price * (1 - self._rng.random() * INITIAL_RANGE_SPREAD)),
            day_volume=int(self._rng.integers(*VOLUME_BASELINE)),
            time=now_ms(),
            currency=currency,
            exchange=exchange,
        )
        self._records[symbol] = record
        logger.info("Initialized %s at %.2f %s (%s)", symbol, price, currency, exchange)
        return record

    def advance(self, symbol: str) -> PriceRecord:
        current = self._records.get(symbol)
        if current is None:
            logger.warning("Advance requested for unknown symbol %s; initializing", symbol)
            return self.ensure(symbol)

        vol = volatility_for(symbol)
        delta = float(self._rng.uniform(-vol, vol))
        price = max(PRICE_FLOOR, current.price * (1 + delta))

        record = PriceRecord(
            symbol=symbol,
            price=price,
            previous_close=current.previous_close,
            day_high=max(current.day_high, price),
            day_low=min(current.day_low, price),
            day_volume=current.day_volume + int(self._rng.integers(0, VOLUME_STEP_MAX)),
            # Two ticks inside the same millisecond still get distinct stamps
            time=max(now_ms(), current.time + 1),
            currency=current.currency,
            exchange=current.exchange,
        )
        self._records[symbol] = record
        return record

    def snapshot(self, symbol: str) -> PriceRecord | None:
        return self._records.get(symbol)

    def symbols(self) -> list[str]:
        return list(self._records)
