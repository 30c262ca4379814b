"""
config.py - Constants and client configuration.

Endpoints are the ones the public site itself calls:
https://www.vinted.{domain}/api/v2/...
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

# Cookie holding the anonymous session token
SESSION_COOKIE_NAME = "_vinted_fr_session"

# Site root hit to obtain a fresh session cookie
AUTH_URL = "https://vinted.de"

CATALOG_ITEMS_URL = "https://www.vinted.be/api/v2/catalog/items"
USERS_URL         = "https://www.vinted.be/api/v2/users"
ITEMS_URL         = "https://www.vinted.de/api/v2/items"

# Response markers
RATE_LIMIT_MARKER    = "Request rate limit exceeded"
STATUS_FIELD         = "message_code"
STALE_TOKEN_SENTINEL = "invalid_authentication_token"
NOT_FOUND_SENTINEL   = "not_found"

# Cache-buster parameter stripped from search queries
IGNORED_QUERY_PARAMS = ("time",)

DEFAULT_TIMEOUT            = 15  # seconds
DEFAULT_BOOST_WORKERS      = 8
DEFAULT_BOOST_MAX_FAILURES = 10

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:135.0) Gecko/20100101 Firefox/135.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15",
]


def parse_proxy_list(raw: str) -> List[str]:
    """Splits a semicolon-separated proxy list, e.g. '1.2.3.4:8080;user:pass@5.6.7.8:3128'."""
    return [p.strip() for p in (raw or "").split(";") if p.strip()]


@dataclass
class ClientConfig:
    """Runtime settings for a Vinted client."""

    timeout:            float = DEFAULT_TIMEOUT
    proxies:            List[str] = field(default_factory=list)
    proxy_list_url:     Optional[str] = None
    boost_workers:      int   = DEFAULT_BOOST_WORKERS
    boost_max_failures: int   = DEFAULT_BOOST_MAX_FAILURES
    boost_backoff:      float = 0.0
    log_level:          str   = "INFO"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Builds a config from VINTED_* environment variables."""
        env = os.environ
        return cls(
            timeout=float(env.get("VINTED_TIMEOUT", DEFAULT_TIMEOUT)),
            proxies=parse_proxy_list(env.get("VINTED_PROXIES", "")),
            proxy_list_url=env.get("VINTED_PROXY_LIST_URL") or None,
            boost_workers=int(env.get("VINTED_BOOST_WORKERS", DEFAULT_BOOST_WORKERS)),
            boost_max_failures=int(env.get("VINTED_BOOST_MAX_FAILURES", DEFAULT_BOOST_MAX_FAILURES)),
            boost_backoff=float(env.get("VINTED_BOOST_BACKOFF", 0.0)),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
