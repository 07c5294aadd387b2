# book_cost/types.py
"""
Normalized order book types shared by connectors, the aggregator and the
fill simulator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

FILL_TOLERANCE = 1e-9


@dataclass(frozen=True)
class PriceLevel:
    """One (price, quantity) entry. Equal prices from two venues stay two levels."""
    price: float
    quantity: float
    venue: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class OrderBook:
    """Bids and asks of one venue. Level order carries no meaning."""
    bids: Tuple[PriceLevel, ...] = ()
    asks: Tuple[PriceLevel, ...] = ()

    @classmethod
    def empty(cls) -> "OrderBook":
        return cls()

    def is_empty(self) -> bool:
        return not self.bids and not self.asks


class FetchStatus(Enum):
    OK = "ok"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one provider fetch. `book` is empty unless status is OK."""
    venue: str
    status: FetchStatus
    book: OrderBook = field(default_factory=OrderBook.empty)
    error: Optional[str] = None


@dataclass(frozen=True)
class CombinedBook:
    """Concatenation of every provider's levels for one request cycle."""
    bids: Tuple[PriceLevel, ...] = ()
    asks: Tuple[PriceLevel, ...] = ()
    results: Tuple[ProviderResult, ...] = ()

    def venues_with(self, status: FetchStatus) -> Tuple[str, ...]:
        return tuple(r.venue for r in self.results if r.status is status)


@dataclass(frozen=True)
class FillResult:
    """
    Notional exchanged by a greedy walk, plus how much of the request filled.
    `fills` lists the quantity taken from each consumed level, in walk order.
    """
    notional: float
    requested_qty: float
    filled_qty: float
    fills: Tuple[PriceLevel, ...] = field(default=(), compare=False)

    @property
    def complete(self) -> bool:
        # tolerate float residue left over from summing many small takes
        return self.shortfall <= FILL_TOLERANCE

    @property
    def shortfall(self) -> float:
        return max(self.requested_qty - self.filled_qty, 0.0)

    @property
    def average_price(self) -> Optional[float]:
        if self.filled_qty <= 0:
            return None
        return self.notional / self.filled_qty
