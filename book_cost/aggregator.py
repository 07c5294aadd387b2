# book_cost/aggregator.py
"""
Merge provider snapshots into one virtual book by concatenation.

Levels are never merged across venues: two $100 asks from two exchanges stay
two levels, so the fill walk sees each venue's liquidity separately.
"""

import logging
import threading
import time
from typing import List, Optional, Sequence

from book_cost.connectors import SnapshotProvider
from book_cost.types import CombinedBook, FetchStatus, PriceLevel, ProviderResult

logger = logging.getLogger(__name__)


def concatenate(results: Sequence[ProviderResult]) -> CombinedBook:
    """Concatenate bids and asks of every result, in the order given."""
    bids: List[PriceLevel] = []
    asks: List[PriceLevel] = []
    for result in results:
        bids.extend(result.book.bids)
        asks.extend(result.book.asks)
    return CombinedBook(bids=tuple(bids), asks=tuple(asks), results=tuple(results))


class BookAggregator:
    """
    Fetches every provider concurrently and waits for all of them before
    combining. A provider still running after `deadline` seconds counts as
    FAILED with an empty book; its daemon thread is abandoned and cannot hold
    up interpreter exit.
    """

    def __init__(self, deadline: Optional[float] = None):
        self.deadline = deadline

    def combine(self, providers: Sequence[SnapshotProvider]) -> CombinedBook:
        if not providers:
            return CombinedBook()

        slots: List[Optional[ProviderResult]] = [None] * len(providers)
        threads = [
            threading.Thread(target=self._fetch_into, args=(p, slots, i),
                             name=f"book-fetch-{p.name}", daemon=True)
            for i, p in enumerate(providers)
        ]
        for t in threads:
            t.start()

        started = time.monotonic()
        for t in threads:
            if self.deadline is None:
                t.join()
            else:
                t.join(timeout=max(self.deadline - (time.monotonic() - started), 0))

        results = [
            slot if slot is not None else ProviderResult(
                p.name, FetchStatus.FAILED, error="no response before aggregation deadline")
            for p, slot in zip(providers, slots)
        ]
        for r in results:
            self._log_result(r)
        return concatenate(results)

    @staticmethod
    def _fetch_into(provider: SnapshotProvider, slots: List[Optional[ProviderResult]], index: int):
        try:
            slots[index] = provider.fetch_result()
        except Exception as e:
            logger.exception(f"{provider.name}: unexpected error during fetch")
            slots[index] = ProviderResult(provider.name, FetchStatus.FAILED, error=str(e))

    @staticmethod
    def _log_result(result: ProviderResult):
        if result.status is FetchStatus.OK:
            logger.info("%s: ok (%d bids, %d asks)", result.venue,
                        len(result.book.bids), len(result.book.asks))
        elif result.status is FetchStatus.RATE_LIMITED:
            logger.info("%s: rate limited, contributing no levels", result.venue)
        else:
            logger.warning("%s: fetch failed (%s), contributing no levels",
                           result.venue, result.error)
