# book_cost/connectors/gemini.py
"""
Gemini v1 book: {"bids": [{"price": "...", "amount": "...", "timestamp": "..."}], ...}
"""

from typing import Any, Dict, Tuple

from .base import SnapshotProvider
from book_cost.types import OrderBook


class GeminiSnapshot(SnapshotProvider):
    name = "gemini"

    def endpoint(self) -> Tuple[str, Dict[str, str]]:
        return f"{self.base_url}/v1/book/{self.asset}{self.quote}", {}

    def parse(self, data: Any) -> OrderBook:
        data = self.require_object(data)
        return OrderBook(
            bids=self.normalize_side(data.get("bids"), lambda e: (e["price"], e["amount"])),
            asks=self.normalize_side(data.get("asks"), lambda e: (e["price"], e["amount"])),
        )
