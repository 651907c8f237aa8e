"""WebSocket message envelope: parsing and builders."""

from __future__ import annotations

import json

from .models import PriceRecord, now_ms

# Client -> server
SUBSCRIBE = "subscribe"
UNSUBSCRIBE = "unsubscribe"
PING = "ping"

# Server -> client
CONNECTION = "connection"
TICKER = "ticker"
PONG = "pong"
ERROR = "error"


class ProtocolError(ValueError):
    """A client sent something the server cannot act on."""


def parse_message(raw: str | bytes) -> dict:
    """Decode one client frame into a message dict.

    Raises ProtocolError when the frame is not a JSON object.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProtocolError("Invalid JSON message") from e
    if not isinstance(data, dict):
        raise ProtocolError("Invalid JSON message")
    return data


def connection_message(client_id: str) -> dict:
    return {
        "type": CONNECTION,
        "status": "connected",
        "clientId": client_id,
        "timestamp": now_ms(),
    }


def ticker_message(record: PriceRecord) -> dict:
    return {"type": TICKER, "data": record.to_dict()}


def pong_message() -> dict:
    return {"type": PONG, "timestamp": now_ms()}


def error_message(message: str) -> dict:
    return {"type": ERROR, "message": message}


def encode(message: dict) -> str:
    return json.dumps(message)
