# book_cost/rate_limiter.py
"""
Single-winner rate limiter: at most one permitted call per cooldown window.

Not a token bucket. When several callers race inside the same window only the
one whose compare-and-swap lands first is allowed; every other caller is
denied, even if enough time had elapsed from its own point of view.
"""

import threading
import time
from typing import Callable, Optional

DEFAULT_COOLDOWN_SECONDS = 2.0


class RateLimiter:
    """
    Gate for one exchange. State is the monotonic timestamp (ns) of the last
    permitted call, created here and mutated only by allow().
    """

    def __init__(self, cooldown: float = DEFAULT_COOLDOWN_SECONDS,
                 clock: Callable[[], int] = time.monotonic_ns):
        self.cooldown_ns = int(cooldown * 1_000_000_000)
        self._clock = clock
        self._last_ns: Optional[int] = None
        # guards the compare-and-swap only
        self._swap_lock = threading.Lock()

    @property
    def cooldown(self) -> float:
        return self.cooldown_ns / 1_000_000_000

    def allow(self) -> bool:
        now = self._clock()
        last = self._last_ns
        if last is not None and now - last < self.cooldown_ns:
            return False
        return self._compare_and_swap(last, now)

    def wait_time(self) -> float:
        """Seconds until the window reopens, 0.0 if a call would be allowed now."""
        last = self._last_ns
        if last is None:
            return 0.0
        remaining = self.cooldown_ns - (self._clock() - last)
        return max(remaining, 0) / 1_000_000_000

    def _compare_and_swap(self, expected: Optional[int], new: int) -> bool:
        with self._swap_lock:
            if self._last_ns != expected:
                return False
            self._last_ns = new
            return True
