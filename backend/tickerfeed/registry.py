"""Per-client symbol subscriptions."""

from __future__ import annotations

import logging

from .interface import PriceStore

logger = logging.getLogger(__name__)


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


class SubscriptionRegistry:
    """Owns the set of symbols each connected client wants.

    The global active-symbol set is never stored: it is recomputed as the union
    of every live client's set whenever it is asked for, so unsubscribes and
    disconnects are visible on the very next query.
    """

    def __init__(self, price_store: PriceStore) -> None:
        self._store = price_store
        self._subscriptions: dict[str, set[str]] = {}

    def register_client(self, client_id: str) -> None:
        """Start tracking a client with an empty subscription set."""
        self._subscriptions.setdefault(client_id, set())

    def remove_client(self, client_id: str) -> None:
        """Forget a client and everything it was subscribed to. No-op if unknown."""
        dropped = self._subscriptions.pop(client_id, None)
        if dropped:
            logger.debug("Dropped %d subscriptions for %s", len(dropped), client_id)

    def subscribe(self, client_id: str, symbols: object) -> list[str]:
        """Add ``symbols`` to a client's set. Returns the symbols that were new for it.

        Malformed requests (unknown client, ``symbols`` not a list) are logged
        and ignored; they are the client's problem, not the server's.
        """
        wanted = self._clean(client_id, symbols, "subscribe")
        if wanted is None:
            return []

        current = self._subscriptions[client_id]
        active = set(self.active_symbols())
        added: list[str] = []
        for symbol in wanted:
            if symbol in current:
                continue
            if symbol not in active:
                self._store.ensure(symbol)
            current.add(symbol)
            added.append(symbol)

        if added:
            logger.info(
                "Client %s subscribed to %s (%d active symbols)",
                client_id,
                ", ".join(added),
                len(self.active_symbols()),
            )
        return added

    def unsubscribe(self, client_id: str, symbols: object) -> list[str]:
        """Remove ``symbols`` from a client's set. Returns the symbols actually removed.

        Price records are kept even when nobody wants the symbol any more.
        """
        unwanted = self._clean(client_id, symbols, "unsubscribe")
        if unwanted is None:
            return []

        current = self._subscriptions[client_id]
        removed = [symbol for symbol in unwanted if symbol in current]
        current.difference_update(removed)
        if removed:
            logger.info("Client %s unsubscribed from %s", client_id, ", ".join(removed))
        return removed

    def active_symbols(self) -> tuple[str, ...]:
        """Sorted union of every live client's subscriptions."""
        union: set[str] = set()
        for symbols in self._subscriptions.values():
            union.update(symbols)
        return tuple(sorted(union))

    def subscribers_of(self, symbol: str) -> set[str]:
        """Ids of live clients subscribed to ``symbol``."""
        return {client_id for client_id, symbols in self._subscriptions.items() if symbol in symbols}

    def symbols_of(self, client_id: str) -> set[str]:
        """A copy of one client's subscriptions (empty if unknown)."""
        return set(self._subscriptions.get(client_id, ()))

    @property
    def client_count(self) -> int:
        return len(self._subscriptions)

    def __contains__(self, client_id: str) -> bool:
        return client_id in self._subscriptions

    # --- Internal ---

    def _clean(self, client_id: str, symbols: object, action: str) -> list[str] | None:
        """Validate a request and return its normalized, de-duplicated symbols."""
        if client_id not in self._subscriptions:
            logger.warning("Ignoring %s from unknown client %s", action, client_id)
            return None
        if not isinstance(symbols, list):
            logger.warning("Invalid %s request from %s: symbols=%r", action, client_id, symbols)
            return None

        cleaned: list[str] = []
        for raw in symbols:
            if not isinstance(raw, str) or not raw.strip():
                logger.warning("Skipping invalid symbol %r from %s", raw, client_id)
                continue
            symbol = normalize_symbol(raw)
            if symbol not in cleaned:
                cleaned.append(symbol)
        return cleaned
