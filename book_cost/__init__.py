# book_cost/__init__.py
"""
Market order cost estimation over combined exchange order books.
"""

from .aggregator import BookAggregator
from .fill import simulate_buy, simulate_sell
from .rate_limiter import RateLimiter
from .types import CombinedBook, FetchStatus, FillResult, OrderBook, PriceLevel, ProviderResult

__all__ = [
    "BookAggregator", "simulate_buy", "simulate_sell", "RateLimiter",
    "CombinedBook", "FetchStatus", "FillResult", "OrderBook", "PriceLevel", "ProviderResult",
]
