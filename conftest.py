"""
Shared fixtures: a stubbed requests.get routed by URL fragment.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

import pytest
import requests


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error", response=self)

    def json(self):
        if self.text is not None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self.text, 0)
        return self._payload


class Routes(dict):
    """URL fragment -> FakeResponse or exception instance, plus the calls seen."""

    def __init__(self):
        super().__init__()
        self.calls = []


COINBASE_BOOK = {
    "bids": [["49000.00", "1.0", 3], ["48900.50", "2.5", 1]],
    "asks": [["50000.00", "0.5", 2], ["50100.00", "1.5", 4]],
    "sequence": 1,
}

GEMINI_BOOK = {
    "bids": [{"price": "49050.00", "amount": "0.75", "timestamp": "1700000000"}],
    "asks": [{"price": "50050.00", "amount": "0.25", "timestamp": "1700000000"}],
}

KRAKEN_DEPTH = {
    "error": [],
    "result": {
        "XXBTZUSD": {
            "bids": [["48990.0", "0.4", 1700000000]],
            "asks": [["50010.0", "0.6", 1700000000]],
        }
    },
}


@pytest.fixture
def http_routes(monkeypatch):
    """Stub requests.get for connectors. Unmapped URLs raise ConnectionError."""
    routes = Routes()

    def fake_get(url, params=None, timeout=None, **kwargs):
        routes.calls.append({"url": url, "params": params, "timeout": timeout})
        for fragment, outcome in routes.items():
            if fragment in url:
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        raise requests.ConnectionError(f"no route to {url}")

    monkeypatch.setattr("book_cost.connectors.base.requests.get", fake_get)
    return routes


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Keep the developer's environment out of settings resolution."""
    for key in ("BOOK_COST_ASSET", "BOOK_COST_QUOTE", "BOOK_COST_TIMEOUT", "BOOK_COST_COOLDOWN",
                "BOOK_COST_LOG_LEVEL", "COINBASE_BASE_URL", "GEMINI_BASE_URL", "KRAKEN_BASE_URL"):
        monkeypatch.delenv(key, raising=False)
