"""Fixtures for tickerfeed tests: a fake WebSocket and wired-up components."""

import asyncio
import json

import pytest
from fastapi.websockets import WebSocketState

from tickerfeed.broadcaster import Broadcaster
from tickerfeed.connections import ConnectionManager
from tickerfeed.registry import SubscriptionRegistry
from tickerfeed.simulator import SimulatedPriceStore


class FakeWebSocket:
    """Stand-in for a Starlette WebSocket: records frames, can fail or stall on send."""

    def __init__(self, fail: bool = False, delay: float = 0.0) -> None:
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED
        self.fail = fail
        self.delay = delay
        self.sent: list[str] = []
        self.close_code: int | None = None

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        if self.delay:
            await asyncio.sleep(self.delay)
        self.sent.append(data)

    async def close(self, code: int = 1000) -> None:
        self.close_code = code
        self.drop()

    def drop(self) -> None:
        """Simulate the peer going away without a close event reaching the server."""
        self.client_state = WebSocketState.DISCONNECTED
        self.application_state = WebSocketState.DISCONNECTED

    def messages(self, kind: str | None = None) -> list[dict]:
        decoded = [json.loads(frame) for frame in self.sent]
        if kind is None:
            return decoded
        return [m for m in decoded if m["type"] == kind]


@pytest.fixture
def store():
    return SimulatedPriceStore(seed=1234)


@pytest.fixture
def registry(store):
    return SubscriptionRegistry(store)


@pytest.fixture
def connections(registry):
    return ConnectionManager(registry, send_timeout=0.2)


@pytest.fixture
def broadcaster(store, registry, connections):
    broadcaster = Broadcaster(store, registry, connections)
    connections.on_subscribe = broadcaster.deliver_snapshots
    return broadcaster


@pytest.fixture
def make_socket():
    """Factory for FakeWebSocket instances."""
    return FakeWebSocket
