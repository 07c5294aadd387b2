"""
Load runtime settings from book_cost.properties and the environment.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

DEFAULT_PROPERTIES_FILE = Path(__file__).parent.parent / 'book_cost.properties'

DEFAULT_BASE_URLS = {
    "coinbase": "https://api.exchange.coinbase.com",
    "gemini": "https://api.gemini.com",
    "kraken": "https://api.kraken.com",
}


@dataclass
class Settings:
    """Resolved configuration. Defaults reproduce the plain two-exchange run."""
    asset: str = "BTC"
    quote: str = "USD"
    timeout: float = 5.0
    cooldown: float = 2.0
    log_level: str = "WARNING"
    base_urls: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BASE_URLS))

    def base_url(self, venue: str) -> str:
        return self.base_urls.get(venue, DEFAULT_BASE_URLS[venue])


def load_properties(props_file: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines, skipping comments and `your_...` placeholders."""
    values: Dict[str, str] = {}
    if not props_file.exists():
        return values

    with open(props_file, 'r') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            if '=' in line:
                key, value = line.split('=', 1)
                key = key.strip()
                value = value.strip()
                if value and not value.startswith('your_'):
                    values[key] = value
    return values


def get_setting(key_name: str, properties: Mapping[str, str],
                environ: Mapping[str, str]) -> Optional[str]:
    """
    Look up one setting.
    Priority: properties file > environment variable
    """
    if key_name in properties:
        return properties[key_name]

    env_value = environ.get(key_name)
    if env_value and env_value.strip() and not env_value.startswith('your_'):
        return env_value.strip()

    return None


def _positive_float(key_name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key_name} must be a number, got {raw!r}") from None
    if not value > 0:
        raise ValueError(f"{key_name} must be positive, got {raw!r}")
    return value


def load_settings(props_file: Optional[Path] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the properties file, then the environment, then defaults."""
    properties = load_properties(props_file or DEFAULT_PROPERTIES_FILE)
    environ = os.environ if environ is None else environ
    settings = Settings()

    def lookup(key_name: str) -> Optional[str]:
        return get_setting(key_name, properties, environ)

    if lookup('BOOK_COST_ASSET'):
        settings.asset = lookup('BOOK_COST_ASSET').upper()
    if lookup('BOOK_COST_QUOTE'):
        settings.quote = lookup('BOOK_COST_QUOTE').upper()
    if lookup('BOOK_COST_TIMEOUT'):
        settings.timeout = _positive_float('BOOK_COST_TIMEOUT', lookup('BOOK_COST_TIMEOUT'))
    if lookup('BOOK_COST_COOLDOWN'):
        settings.cooldown = _positive_float('BOOK_COST_COOLDOWN', lookup('BOOK_COST_COOLDOWN'))
    if lookup('BOOK_COST_LOG_LEVEL'):
        settings.log_level = lookup('BOOK_COST_LOG_LEVEL').upper()

    for venue in DEFAULT_BASE_URLS:
        url = lookup(f'{venue.upper()}_BASE_URL')
        if url:
            settings.base_urls[venue] = url.rstrip('/')

    return settings
