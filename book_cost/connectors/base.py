# book_cost/connectors/base.py
"""
Snapshot provider contract shared by every exchange connector.

A provider owns one RateLimiter and turns one public REST depth endpoint into
a normalized OrderBook. Denied, failed and genuinely empty fetches all come
back from fetch() as an empty book; fetch_result() tells them apart.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from book_cost.rate_limiter import RateLimiter
from book_cost.types import FetchStatus, OrderBook, PriceLevel, ProviderResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


def to_level(price: Any, quantity: Any, venue: Optional[str] = None) -> Optional[PriceLevel]:
    """Coerce textual or numeric price/quantity into a PriceLevel, None if invalid."""
    try:
        p = float(price)
        q = float(quantity)
    except (TypeError, ValueError, OverflowError):
        return None
    if not (math.isfinite(p) and math.isfinite(q)) or p <= 0 or q <= 0:
        return None
    return PriceLevel(p, q, venue)


class SnapshotProvider(ABC):
    """One exchange's public order book, fetched at most once per cooldown."""

    name: str = ""

    def __init__(self, base_url: str, asset: str = "BTC", quote: str = "USD",
                 timeout: float = DEFAULT_TIMEOUT_SECONDS,
                 limiter: Optional[RateLimiter] = None):
        self.base_url = base_url.rstrip('/')
        self.asset = asset.upper()
        self.quote = quote.upper()
        self.timeout = timeout
        self.limiter = limiter or RateLimiter()

    @abstractmethod
    def endpoint(self) -> Tuple[str, Dict[str, str]]:
        """Return (url, query params) of the depth request."""

    @abstractmethod
    def parse(self, data: Any) -> OrderBook:
        """Map the exchange's decoded JSON into an OrderBook."""

    def fetch(self) -> OrderBook:
        return self.fetch_result().book

    def fetch_result(self) -> ProviderResult:
        if not self.limiter.allow():
            logger.debug(f"{self.name}: rate limited, next call in {self.limiter.wait_time():.2f}s")
            return ProviderResult(self.name, FetchStatus.RATE_LIMITED)

        url, params = self.endpoint()
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            book = self.parse(resp.json())
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"{self.name}: failed to fetch order book from {url}: {e}")
            return ProviderResult(self.name, FetchStatus.FAILED, error=str(e))

        logger.info(f"{self.name}: {len(book.bids)} bids, {len(book.asks)} asks")
        return ProviderResult(self.name, FetchStatus.OK, book)

    def normalize_side(self, entries: Any,
                       extract: Callable[[Any], Tuple[Any, Any]]) -> Tuple[PriceLevel, ...]:
        """Build levels from raw entries, dropping the malformed ones individually."""
        if entries is None:
            return ()
        if not isinstance(entries, (list, tuple)):
            raise ValueError(f"expected a list of levels, got {type(entries).__name__}")

        levels: List[PriceLevel] = []
        dropped = 0
        for entry in entries:
            try:
                price, quantity = extract(entry)
            except (KeyError, IndexError, TypeError):
                dropped += 1
                continue
            level = to_level(price, quantity, self.name)
            if level is None:
                dropped += 1
                continue
            levels.append(level)

        if dropped:
            logger.debug(f"{self.name}: dropped {dropped} malformed levels")
        return tuple(levels)

    @staticmethod
    def require_object(data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    def __repr__(self):
        return f"{type(self).__name__}({self.asset}-{self.quote} @ {self.base_url})"
