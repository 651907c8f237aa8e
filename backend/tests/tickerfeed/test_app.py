"""End-to-end tests through the FastAPI app."""

import time

import pytest
from fastapi.testclient import TestClient

from tickerfeed.config import Settings
from tickerfeed.main import create_app


@pytest.fixture
def client():
    settings = Settings(tick_interval=0.1, sweep_interval=30.0, simulator_seed=99)
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def _connect(ws) -> str:
    ack = ws.receive_json()
    assert ack["type"] == "connection"
    assert ack["status"] == "connected"
    return ack["clientId"]


class TestWebSocket:
    """Client scenarios over a real WebSocket session."""

    def test_subscribe_snapshot_then_tick(self, client):
        """Snapshot arrives right away, then a tick update with later time and no less volume."""
        with client.websocket_connect("/ws") as ws:
            client_id = _connect(ws)
            assert client_id.startswith("client_")

            ws.send_json({"type": "subscribe", "symbols": ["AAPL"]})
            snapshot = ws.receive_json()
            update = ws.receive_json()

        assert snapshot["type"] == "ticker"
        assert update["type"] == "ticker"
        assert snapshot["data"]["id"] == update["data"]["id"] == "AAPL"
        assert update["data"]["time"] > snapshot["data"]["time"]
        assert update["data"]["dayVolume"] >= snapshot["data"]["dayVolume"]
        for field in ("price", "change", "changePercent", "dayHigh", "dayLow", "currency"):
            assert field in update["data"]

    def test_ping_pong(self, client):
        with client.websocket_connect("/ws") as ws:
            _connect(ws)
            before = int(time.time() * 1000)
            ws.send_json({"type": "ping"})
            pong = ws.receive_json()
            after = int(time.time() * 1000)

        assert pong["type"] == "pong"
        assert before <= pong["timestamp"] <= after

    def test_malformed_json_then_valid_subscribe(self, client):
        """A bad frame gets an error and the same socket can still subscribe."""
        with client.websocket_connect("/ws") as ws:
            _connect(ws)
            ws.send_text("{this is not json")
            error = ws.receive_json()
            ws.send_json({"type": "subscribe", "symbols": ["MSFT"]})
            ticker = ws.receive_json()

        assert error == {"type": "error", "message": "Invalid JSON message"}
        assert ticker["type"] == "ticker"
        assert ticker["data"]["id"] == "MSFT"

    def test_unknown_type(self, client):
        with client.websocket_connect("/ws") as ws:
            _connect(ws)
            ws.send_json({"type": "launch"})
            error = ws.receive_json()

        assert error == {"type": "error", "message": "Unknown message type: launch"}

    def test_root_path_also_serves_socket(self, client):
        """Browser clients connect at the root path."""
        with client.websocket_connect("/") as ws:
            assert _connect(ws).startswith("client_")

    def test_clients_only_get_their_symbols(self, client):
        with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
            _connect(a)
            _connect(b)
            a.send_json({"type": "subscribe", "symbols": ["AAPL"]})
            b.send_json({"type": "subscribe", "symbols": ["ETH-USD"]})
            a_msgs = [a.receive_json() for _ in range(3)]
            b_msgs = [b.receive_json() for _ in range(3)]

        assert {m["data"]["id"] for m in a_msgs} == {"AAPL"}
        assert {m["data"]["id"] for m in b_msgs} == {"ETH-USD"}
        assert b_msgs[0]["data"]["exchange"] == "CRYPTO"


class TestHttp:
    """Health and symbol lookup endpoints."""

    def test_health(self, client):
        with client.websocket_connect("/ws") as ws:
            _connect(ws)
            ws.send_json({"type": "subscribe", "symbols": ["AAPL", "TSLA"]})
            ws.receive_json()
            ws.receive_json()
            body = client.get("/health").json()

        assert body["status"] == "ok"
        assert body["activeClients"] == 1
        assert body["activeSymbols"] == ["AAPL", "TSLA"]
        assert "timestamp" in body

    def test_health_idle(self, client):
        body = client.get("/health").json()
        assert body["activeClients"] == 0
        assert body["activeSymbols"] == []

    def test_popular_stocks(self, client):
        body = client.get("/api/popular-stocks").json()
        assert len(body) == 15
        assert body[0] == {"symbol": "AAPL", "name": "Apple Inc.", "sector": "Technology"}

    def test_search_matches_symbol_or_name(self, client):
        symbols = {entry["symbol"] for entry in client.get("/api/search/alpha").json()}
        assert symbols == {"GOOGL", "GOOG"}
        assert client.get("/api/search/AMD").json() == [
            {"symbol": "AMD", "name": "Advanced Micro Devices"}
        ]

    def test_search_no_match(self, client):
        assert client.get("/api/search/zzzz").json() == []
