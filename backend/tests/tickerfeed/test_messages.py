"""Tests for the message envelope helpers."""

import json

import pytest

from tickerfeed.messages import ProtocolError, encode, error_message, parse_message, ticker_message
from tickerfeed.models import PriceRecord


class TestParse:
    def test_parses_object(self):
        assert parse_message('{"type": "ping"}') == {"type": "ping"}

    def test_parses_bytes(self):
        assert parse_message(b'{"type": "ping"}') == {"type": "ping"}

    @pytest.mark.parametrize("raw", ["", "{", "not json", "[]", "42", '"ping"', b"\xff\xfe"])
    def test_rejects_non_objects(self, raw):
        """Anything that is not a JSON object is a protocol error."""
        with pytest.raises(ProtocolError, match="Invalid JSON message"):
            parse_message(raw)


class TestBuilders:
    def test_ticker_message(self):
        record = PriceRecord(
            symbol="AAPL",
            price=150.0,
            previous_close=150.0,
            day_high=151.0,
            day_low=149.0,
            day_volume=10,
            time=1,
        )
        message = json.loads(encode(ticker_message(record)))
        assert message["type"] == "ticker"
        assert message["data"]["id"] == "AAPL"

    def test_error_message(self):
        assert error_message("nope") == {"type": "error", "message": "nope"}
