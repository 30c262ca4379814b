"""
proxy_manager.py - Proxy source used for every outgoing request.

  - Proxies come from a list given by the caller and/or a URL serving
    one IP:PORT per line
  - A random proxy is picked for each request (random.choice)
  - The URL list is cached and reloaded every RECHECK_INTERVAL
  - An empty string means direct connection
"""
import random
import threading
import time
from typing import Dict, Iterable, List, Optional

import requests

from .logger import get_logger

logger = get_logger("proxy")

RECHECK_INTERVAL = 6 * 60 * 60
FETCH_TIMEOUT    = 10  # seconds


class ProxyManager:
    """
    Thread-safe random proxy picker.
    """

    def __init__(self, proxies: Optional[Iterable[str]] = None, proxy_list_url: Optional[str] = None):
        self._static:     List[str] = [p.strip() for p in (proxies or []) if p and p.strip()]
        self._url:        Optional[str] = proxy_list_url
        self._fetched:    List[str] = []
        self._last_check: float = 0.0
        self._lock        = threading.Lock()

    # ── Public interface ────────────────────────────────────────────────────

    def get_proxy(self) -> str:
        """
        Returns a random proxy descriptor, or "" for a direct connection.
        Call before every HTTP request.
        """
        pool = self._pool()
        if not pool:
            return ""
        if len(pool) == 1:
            return pool[0]
        return random.choice(pool)

    @staticmethod
    def to_dict(proxy_str: str) -> Dict[str, str]:
        """Converts 'IP:PORT' or 'http://IP:PORT' into a proxies mapping for requests."""
        if not proxy_str:
            return {}
        if "://" not in proxy_str:
            proxy_str = f"http://{proxy_str}"
        return {"http": proxy_str, "https": proxy_str}

    # ── Internals ───────────────────────────────────────────────────────────

    def _pool(self) -> List[str]:
        if self._url and time.time() - self._last_check > RECHECK_INTERVAL:
            self._reload()
        with self._lock:
            return self._static + self._fetched

    def _reload(self):
        fetched = self._fetch_from_url(self._url)
        logger.info(f"Fetched {len(fetched)} proxies from URL")
        with self._lock:
            self._fetched    = fetched
            self._last_check = time.time()

    def _fetch_from_url(self, url: str) -> List[str]:
        """Downloads a proxy list (one IP:PORT per line, '#' starts a comment)."""
        try:
            r = requests.get(url, timeout=FETCH_TIMEOUT)
        except requests.RequestException as e:
            logger.warning(f"Cannot fetch proxy list from URL: {e}")
            return []
        if r.status_code != 200:
            logger.warning(f"Proxy list URL answered {r.status_code}")
            return []
        lines = []
        for line in r.text.strip().splitlines():
            line = line.strip()
            if line and not line.startswith("#") and ":" in line:
                lines.append(line)
        return lines
