"""Abstract interface for price stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import PriceRecord


class PriceStore(ABC):
    """Contract for the owner of the live price records.

    The simulator implements it today; an upstream feed can implement the same
    three operations without the registry or broadcaster noticing.

    Lifecycle of a symbol:
        store.ensure("AAPL")          # first subscription anywhere
        store.snapshot("AAPL")        # immediate delivery to a new subscriber
        store.advance("AAPL")         # once per tick while someone listens
    """

    @abstractmethod
    def ensure(self, symbol: str) -> PriceRecord:
        """Create the record for ``symbol`` if it does not exist yet.

        Idempotent: an existing record is returned untouched.
        """

    @abstractmethod
    def advance(self, symbol: str) -> PriceRecord:
        """Move ``symbol`` one step and return the new record.

        A symbol that was never ensured is initialized instead of failing.
        """

    @abstractmethod
    def snapshot(self, symbol: str) -> PriceRecord | None:
        """Current record for ``symbol``, or None if it was never ensured."""

    @abstractmethod
    def symbols(self) -> list[str]:
        """Every symbol that has a record."""

    def __len__(self) -> int:
        return len(self.symbols())

    def __contains__(self, symbol: str) -> bool:
        return self.snapshot(symbol) is not None
