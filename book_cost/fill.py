# book_cost/fill.py
"""
Greedy market-order walk over one side of a combined book.
"""

from typing import Iterable, List

from book_cost.types import FillResult, PriceLevel


def _walk(levels: List[PriceLevel], qty: float) -> FillResult:
    remaining = qty
    notional = 0.0
    filled = 0.0
    fills: List[PriceLevel] = []
    for level in levels:
        if remaining <= 0:
            break
        take = min(remaining, level.quantity)
        notional += take * level.price
        filled += take
        remaining -= take
        fills.append(PriceLevel(level.price, take, level.venue))
    return FillResult(notional=notional, requested_qty=qty, filled_qty=filled, fills=tuple(fills))


def simulate_buy(asks: Iterable[PriceLevel], qty: float) -> FillResult:
    """Cost of buying `qty`, cheapest ask first. Equal prices keep their input order."""
    return _walk(sorted(asks, key=lambda l: l.price), qty)


def simulate_sell(bids: Iterable[PriceLevel], qty: float) -> FillResult:
    """Revenue of selling `qty`, highest bid first. Equal prices keep their input order."""
    # reverse=True keeps the sort stable for equal keys
    return _walk(sorted(bids, key=lambda l: l.price, reverse=True), qty)
