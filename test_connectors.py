#!/usr/bin/env python3
"""
Tests for exchange snapshot providers and the connector registry.
"""

import math

import pytest
import requests

from conftest import COINBASE_BOOK, GEMINI_BOOK, KRAKEN_DEPTH, FakeResponse
from book_cost.connector_registry import get_connector, list_connectors
from book_cost.connectors import CoinbaseSnapshot, GeminiSnapshot, KrakenSnapshot
from book_cost.connectors.base import to_level
from book_cost.rate_limiter import RateLimiter
from book_cost.settings import Settings
from book_cost.types import FetchStatus, OrderBook, PriceLevel


def test_to_level_coerces_text():
    assert to_level("50000.10", "0.25") == PriceLevel(50000.10, 0.25)
    assert to_level(100, 2).quantity == 2.0


@pytest.mark.parametrize("price,qty", [
    ("abc", "1"), ("100", None), (None, "1"), ("0", "1"), ("100", "0"),
    ("-1", "1"), ("100", "-2"), ("nan", "1"), ("inf", "1"),
    (10**400, "1"), ("100", 10**400),
])
def test_to_level_rejects_invalid(price, qty):
    assert to_level(price, qty) is None


def test_coinbase_fetch_normalizes(http_routes):
    http_routes["api.exchange.coinbase.com"] = FakeResponse(COINBASE_BOOK)
    provider = CoinbaseSnapshot("https://api.exchange.coinbase.com", timeout=3.0)

    result = provider.fetch_result()
    assert result.status is FetchStatus.OK
    assert result.book.asks == (PriceLevel(50000.0, 0.5), PriceLevel(50100.0, 1.5))
    assert result.book.bids[1] == PriceLevel(48900.5, 2.5)
    assert all(l.venue == "coinbase" for l in result.book.bids + result.book.asks)

    call = http_routes.calls[0]
    assert call["url"] == "https://api.exchange.coinbase.com/products/BTC-USD/book"
    assert call["params"] == {"level": "2"}
    assert call["timeout"] == 3.0


def test_gemini_fetch_normalizes(http_routes):
    http_routes["api.gemini.com"] = FakeResponse(GEMINI_BOOK)
    provider = GeminiSnapshot("https://api.gemini.com")

    book = provider.fetch()
    assert book.bids == (PriceLevel(49050.0, 0.75),)
    assert book.asks == (PriceLevel(50050.0, 0.25),)
    assert http_routes.calls[0]["url"] == "https://api.gemini.com/v1/book/BTCUSD"


def test_kraken_fetch_normalizes(http_routes):
    http_routes["api.kraken.com"] = FakeResponse(KRAKEN_DEPTH)
    provider = KrakenSnapshot("https://api.kraken.com")

    book = provider.fetch()
    assert book.bids == (PriceLevel(48990.0, 0.4),)
    assert book.asks == (PriceLevel(50010.0, 0.6),)
    assert http_routes.calls[0]["params"] == {"pair": "XBTUSD"}


def test_kraken_error_payload_is_failure(http_routes):
    http_routes["api.kraken.com"] = FakeResponse({"error": ["EQuery:Unknown asset pair"], "result": {}})
    result = KrakenSnapshot("https://api.kraken.com").fetch_result()
    assert result.status is FetchStatus.FAILED
    assert "Unknown asset pair" in result.error
    assert result.book.is_empty()


def test_malformed_entries_dropped_individually():
    provider = CoinbaseSnapshot("https://example.test")
    book = provider.parse({
        "bids": [["100", "1", 1], ["bad", "1", 1], ["101"], None, ["102", "0", 1], ["103", "2", 1]],
        "asks": [{"price": "1"}, ["104", "3", 1]],
    })
    assert [l.price for l in book.bids] == [100.0, 103.0]
    assert [l.price for l in book.asks] == [104.0]


def test_oversized_number_dropped_without_failing_fetch(http_routes):
    """An integer too large for a float loses only its own level."""
    http_routes["api.exchange.coinbase.com"] = FakeResponse({
        "bids": [["49000", "1", 1]],
        "asks": [[10**400, "1", 1], ["50000", "0.5", 1]],
    })
    provider = CoinbaseSnapshot("https://api.exchange.coinbase.com")

    result = provider.fetch_result()
    assert result.status is FetchStatus.OK
    assert [l.price for l in result.book.asks] == [50000.0]
    assert [l.price for l in result.book.bids] == [49000.0]


def test_gemini_drops_entries_missing_fields():
    book = GeminiSnapshot("https://example.test").parse({
        "bids": [{"price": "10"}, {"amount": "1"}, {"price": "11", "amount": "x"}, {"price": "12", "amount": "1"}],
        "asks": [],
    })
    assert book.bids == (PriceLevel(12.0, 1.0),)
    assert book.asks == ()


def test_missing_sides_give_empty_book():
    assert CoinbaseSnapshot("https://example.test").parse({}) == OrderBook.empty()


@pytest.mark.parametrize("outcome", [
    requests.ConnectionError("connection refused"),
    requests.Timeout("read timed out"),
    FakeResponse({"message": "down"}, status_code=503),
    FakeResponse(text="<html>oops</html>"),
    FakeResponse(["not", "an", "object"]),
    FakeResponse({"bids": "garbage", "asks": []}),
])
def test_transport_or_parse_failure_returns_empty_book(http_routes, outcome):
    http_routes["api.exchange.coinbase.com"] = outcome
    provider = CoinbaseSnapshot("https://api.exchange.coinbase.com")

    result = provider.fetch_result()
    assert result.status is FetchStatus.FAILED
    assert result.error
    assert result.book.is_empty()


def test_failed_fetch_is_empty_through_plain_fetch(http_routes):
    provider = GeminiSnapshot("https://api.gemini.com")
    assert provider.fetch() == OrderBook.empty()


def test_rate_limited_fetch_skips_network(http_routes):
    http_routes["api.gemini.com"] = FakeResponse(GEMINI_BOOK)
    provider = GeminiSnapshot("https://api.gemini.com")

    first = provider.fetch_result()
    second = provider.fetch_result()
    assert first.status is FetchStatus.OK
    assert second.status is FetchStatus.RATE_LIMITED
    assert second.book.is_empty()
    assert len(http_routes.calls) == 1


def test_failed_fetch_still_consumes_window(http_routes):
    provider = CoinbaseSnapshot("https://api.exchange.coinbase.com")
    assert provider.fetch_result().status is FetchStatus.FAILED
    assert provider.fetch_result().status is FetchStatus.RATE_LIMITED


def test_providers_do_not_share_limiters(http_routes):
    http_routes["api.exchange.coinbase.com"] = FakeResponse(COINBASE_BOOK)
    http_routes["api.gemini.com"] = FakeResponse(GEMINI_BOOK)
    coinbase = get_connector("coinbase")
    gemini = get_connector("gemini")
    assert coinbase.limiter is not gemini.limiter
    assert coinbase.fetch_result().status is FetchStatus.OK
    assert gemini.fetch_result().status is FetchStatus.OK


def test_registry_builds_from_settings():
    settings = Settings(asset="eth", quote="usd", timeout=1.5, cooldown=0.25)
    settings.base_urls["kraken"] = "http://localhost:8000"
    provider = get_connector("Kraken", settings)

    assert isinstance(provider, KrakenSnapshot)
    assert provider.base_url == "http://localhost:8000"
    assert provider.pair() == "ETHUSD"
    assert provider.timeout == 1.5
    assert math.isclose(provider.limiter.cooldown, 0.25)


def test_registry_rejects_unknown_exchange():
    assert list_connectors() == ["coinbase", "gemini", "kraken"]
    with pytest.raises(ValueError, match="Unknown exchange"):
        get_connector("binance")


def test_injected_limiter_is_used():
    limiter = RateLimiter()
    provider = CoinbaseSnapshot("https://example.test", limiter=limiter)
    assert provider.limiter is limiter
    assert "BTC-USD" in repr(provider)
