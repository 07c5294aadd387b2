# book_cost/connector_registry.py
# Builds snapshot providers by exchange name. Each provider gets its own
# RateLimiter, created here and kept for the provider's lifetime.

from typing import Dict, List, Optional, Type
import logging

from book_cost.connectors import CoinbaseSnapshot, GeminiSnapshot, KrakenSnapshot, SnapshotProvider
from book_cost.rate_limiter import RateLimiter
from book_cost.settings import Settings

logger = logging.getLogger(__name__)

CONNECTORS: Dict[str, Type[SnapshotProvider]] = {
    "coinbase": CoinbaseSnapshot,
    "gemini": GeminiSnapshot,
    "kraken": KrakenSnapshot,
}

DEFAULT_EXCHANGES = ("coinbase", "gemini")


def list_connectors() -> List[str]:
    """List the exchange names get_connector() accepts."""
    return list(CONNECTORS)


def get_connector(name: str, settings: Optional[Settings] = None) -> SnapshotProvider:
    """Return a provider for `name` configured from settings (defaults if omitted)."""
    settings = settings or Settings()
    try:
        cls = CONNECTORS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown exchange {name!r}. Available: {', '.join(list_connectors())}"
        ) from None

    venue = cls.name
    provider = cls(
        settings.base_url(venue),
        asset=settings.asset,
        quote=settings.quote,
        timeout=settings.timeout,
        limiter=RateLimiter(settings.cooldown),
    )
    logger.debug(f"Created connector {provider!r}")
    return provider


def get_connectors(names, settings: Optional[Settings] = None) -> List[SnapshotProvider]:
    return [get_connector(n, settings) for n in names]
