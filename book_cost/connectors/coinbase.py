# book_cost/connectors/coinbase.py
"""
Coinbase Exchange level-2 book: {"bids": [[price, size, num_orders], ...], ...}
"""

from typing import Any, Dict, Tuple

from .base import SnapshotProvider
from book_cost.types import OrderBook


class CoinbaseSnapshot(SnapshotProvider):
    name = "coinbase"

    def product_id(self) -> str:
        return f"{self.asset}-{self.quote}"

    def endpoint(self) -> Tuple[str, Dict[str, str]]:
        return f"{self.base_url}/products/{self.product_id()}/book", {"level": "2"}

    def parse(self, data: Any) -> OrderBook:
        data = self.require_object(data)
        return OrderBook(
            bids=self.normalize_side(data.get("bids"), lambda e: (e[0], e[1])),
            asks=self.normalize_side(data.get("asks"), lambda e: (e[0], e[1])),
        )
