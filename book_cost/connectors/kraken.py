# book_cost/connectors/kraken.py
"""
Kraken public Depth: {"error": [], "result": {"XXBTZUSD": {"bids": [[price, volume, ts]], ...}}}
"""

from typing import Any, Dict, Tuple

from .base import SnapshotProvider
from book_cost.types import OrderBook

# Kraken's names where they differ from the common ticker
KRAKEN_ASSETS = {"BTC": "XBT", "DOGE": "XDG"}


class KrakenSnapshot(SnapshotProvider):
    name = "kraken"

    def pair(self) -> str:
        return f"{KRAKEN_ASSETS.get(self.asset, self.asset)}{self.quote}"

    def endpoint(self) -> Tuple[str, Dict[str, str]]:
        return f"{self.base_url}/0/public/Depth", {"pair": self.pair()}

    def parse(self, data: Any) -> OrderBook:
        data = self.require_object(data)
        if data.get("error"):
            raise ValueError(f"kraken error: {data['error']}")

        # result is keyed by Kraken's canonical pair name, which may not match the request
        result = self.require_object(data.get("result"))
        for pair_data in result.values():
            pair_data = self.require_object(pair_data)
            return OrderBook(
                bids=self.normalize_side(pair_data.get("bids"), lambda e: (e[0], e[1])),
                asks=self.normalize_side(pair_data.get("asks"), lambda e: (e[0], e[1])),
            )
        return OrderBook.empty()
