"""Data models for market data."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass

# BTC-USD, ETH-USDT, SOL-EUR, ...
CRYPTO_PAIR = re.compile(r"^[A-Z0-9]+-(USD|USDT|USDC|EUR|GBP|BTC|ETH)$")

CRYPTO_VOLATILITY = 0.02
EQUITY_VOLATILITY = 0.01


def now_ms() -> int:
    """Wall-clock time in Unix milliseconds."""
    return int(time.time() * 1000)


def is_crypto(symbol: str) -> bool:
    """True when the symbol looks like a crypto pair (``BASE-QUOTE``)."""
    return CRYPTO_PAIR.match(symbol) is not None


def classify(symbol: str) -> tuple[str, str]:
    """Return ``(currency, exchange)`` for a symbol based on its shape."""
    match = CRYPTO_PAIR.match(symbol)
    if match is None:
        return "USD", "NASDAQ"
    quote = match.group(1)
    currency = "USD" if quote in ("USD", "USDT", "USDC") else quote
    return currency, "CRYPTO"


def volatility_for(symbol: str) -> float:
    """Half-width of the per-tick percentage move for a symbol."""
    return CRYPTO_VOLATILITY if is_crypto(symbol) else EQUITY_VOLATILITY


@dataclass(frozen=True, slots=True)
class PriceRecord:
    """Immutable snapshot of one symbol's live quote.

    A new record replaces the old one on every mutation, so a record handed to
    a caller never changes underneath it.
    """

    symbol: str
    price: float
    previous_close: float
    day_high: float
    day_low: float
    day_volume: int
    time: int  # Unix milliseconds
    currency: str = "USD"
    exchange: str = "NASDAQ"

    @property
    def change(self) -> float:
        """Absolute change against the previous close."""
        return self.price - self.previous_close

    @property
    def change_percent(self) -> float:
        """Percentage change against the previous close."""
        if self.previous_close == 0:
            return 0.0
        return self.change / self.previous_close * 100

    def to_dict(self) -> dict:
        """Serialize for the ``ticker`` WebSocket message."""
        return {
            "id": self.symbol,
            "price": round(self.price, 4),
            "previousClose": round(self.previous_close, 4),
            "change": round(self.change, 4),
            "changePercent": round(self.change_percent, 4),
            "dayHigh": round(self.day_high, 4),
            "dayLow": round(self.day_low, 4),
            "dayVolume": self.day_volume,
            "time": self.time,
            "currency": self.currency,
            "exchange": self.exchange,
        }
