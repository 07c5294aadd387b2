# book_cost/connectors/__init__.py
"""
Public order book connectors, one per exchange.
"""

from .base import SnapshotProvider
from .coinbase import CoinbaseSnapshot
from .gemini import GeminiSnapshot
from .kraken import KrakenSnapshot

__all__ = ["SnapshotProvider", "CoinbaseSnapshot", "GeminiSnapshot", "KrakenSnapshot"]
