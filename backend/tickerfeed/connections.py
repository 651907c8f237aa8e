"""WebSocket client sessions."""

from __future__ import annotations

import asyncio
import logging
import secrets
import string
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from fastapi.websockets import WebSocketState

from .messages import (
    PING,
    SUBSCRIBE,
    UNSUBSCRIBE,
    ProtocolError,
    connection_message,
    encode,
    error_message,
    parse_message,
    pong_message,
)
from .registry import SubscriptionRegistry

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase

# Called with (client_id, newly_subscribed_symbols)
SubscribeHook = Callable[[str, list[str]], Awaitable[Any]]


def is_open(connection: Any) -> bool:
    """True while both sides of a Starlette WebSocket are connected."""
    return (
        getattr(connection, "client_state", None) == WebSocketState.CONNECTED
        and getattr(connection, "application_state", None) == WebSocketState.CONNECTED
    )


@dataclass
class ClientSession:
    client_id: str
    connection: Any
    connected_at: float = field(default_factory=time.time)
    last_seen: float = field(default_factory=time.monotonic)

    def touch(self) -> None:
        self.last_seen = time.monotonic()


class ConnectionManager:
    """Owns live client sessions and the per-client message protocol.

    Every way a client can go away (clean close, socket error, failed send,
    sweep) ends in remove(), which also clears the client's subscriptions.
    """

    def __init__(
        self,
        registry: SubscriptionRegistry,
        send_timeout: float = 5.0,
        on_subscribe: SubscribeHook | None = None,
    ) -> None:
        self._registry = registry
        self._send_timeout = send_timeout
        self._sessions: dict[str, ClientSession] = {}
        self._issued: set[str] = set()
        self.on_subscribe = on_subscribe

    # --- Lifecycle ---

    async def accept(self, connection: Any) -> str:
        """Register an already-accepted WebSocket and greet it. Returns its client id."""
        client_id = self._new_client_id()
        self._sessions[client_id] = ClientSession(client_id=client_id, connection=connection)
        self._registry.register_client(client_id)
        logger.info("Client %s connected (%d active)", client_id, len(self._sessions))
        await self.send_json(client_id, connection_message(client_id))
        return client_id

    def on_disconnect(self, client_id: str) -> None:
        if self.remove(client_id):
            logger.info("Client %s disconnected (%d active)", client_id, len(self._sessions))

    def on_error(self, client_id: str, exc: BaseException | None = None) -> None:
        if self.remove(client_id):
            logger.warning("Client %s dropped after error: %s", client_id, exc)

    def remove(self, client_id: str) -> bool:
        """Drop a session and its subscriptions. Returns False if it was already gone."""
        session = self._sessions.pop(client_id, None)
        self._registry.remove_client(client_id)
        return session is not None

    def sweep_dead(self) -> int:
        """Remove sessions whose socket is no longer open. Returns how many were removed."""
        dead = [cid for cid, session in self._sessions.items() if not is_open(session.connection)]
        for client_id in dead:
            self.remove(client_id)
        if dead:
            logger.info("Cleaned up %d dead connections", len(dead))
        return len(dead)

    async def close_all(self) -> None:
        """Best-effort close of every socket; used at shutdown."""
        for client_id in list(self._sessions):
            session = self._sessions.pop(client_id)
            self._registry.remove_client(client_id)
            await self._close_quietly(client_id, session.connection, code=1001)

    # --- Inbound ---

    async def on_message(self, client_id: str, raw: str | bytes) -> None:
        """Handle one frame from a client. Protocol errors are answered, never raised."""
        session = self._sessions.get(client_id)
        if session is None:
            return
        session.touch()

        try:
            message = parse_message(raw)
        except ProtocolError as e:
            logger.warning("Invalid message from %s: %s", client_id, e)
            await self.send_json(client_id, error_message(str(e)))
            return

        kind = message.get("type")
        logger.debug("Message from %s: %s", client_id, message)

        if kind == SUBSCRIBE:
            added = self._registry.subscribe(client_id, message.get("symbols"))
            if added and self.on_subscribe is not None:
                await self.on_subscribe(client_id, added)
        elif kind == UNSUBSCRIBE:
            self._registry.unsubscribe(client_id, message.get("symbols"))
        elif kind == PING:
            await self.send_json(client_id, pong_message())
        else:
            await self.send_json(client_id, error_message(f"Unknown message type: {kind}"))

    # --- Outbound ---

    async def send_json(self, client_id: str, message: dict) -> bool:
        return await self.send_text(client_id, encode(message))

    async def send_text(self, client_id: str, text: str) -> bool:
        """Send one frame to one client. Returns False (and drops the client) on any failure."""
        session = self._sessions.get(client_id)
        if session is None:
            return False
        if not is_open(session.connection):
            self.on_error(client_id, ConnectionError("socket not open"))
            return False

        try:
            async with asyncio.timeout(self._send_timeout):
                await session.connection.send_text(text)
        except Exception as e:
            self.on_error(client_id, e)
            # The session is gone; hang up so the peer does not keep talking to nothing
            await self._close_quietly(client_id, session.connection, code=1011)
            return False
        return True

    # --- Queries ---

    @property
    def client_count(self) -> int:
        return len(self._sessions)

    def client_ids(self) -> list[str]:
        return list(self._sessions)

    def session(self, client_id: str) -> ClientSession | None:
        return self._sessions.get(client_id)

    def __contains__(self, client_id: str) -> bool:
        return client_id in self._sessions

    # --- Internal ---

    async def _close_quietly(self, client_id: str, connection: Any, code: int) -> None:
        if not is_open(connection):
            return
        try:
            async with asyncio.timeout(self._send_timeout):
                await connection.close(code=code)
        except Exception as e:
            logger.debug("Close failed for %s: %s", client_id, e)

    def _new_client_id(self) -> str:
        # Ids are never reused, so this set grows by one per connection accepted
        # over the life of the process.
        while True:
            suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
            client_id = f"client_{suffix}"
            if client_id not in self._issued:
                self._issued.add(client_id)
                return client_id
