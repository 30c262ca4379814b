"""
transport.py - Plain HTTP GET over requests.Session.

The session never stores cookies: the only cookie sent is the one passed
explicitly in the headers, so unauthenticated calls stay unauthenticated.
"""
import random
from dataclasses import dataclass, field
from http.cookiejar import DefaultCookiePolicy
from typing import Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

from .config import DEFAULT_TIMEOUT, USER_AGENTS
from .logger import get_logger
from .proxy_manager import ProxyManager

logger = get_logger("transport")


@dataclass
class HttpResponse:
    status:  int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    text:    str = ""

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers)


def build_headers() -> dict:
    """Browser-like headers sent with every request."""
    return {
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "application/json, text/plain, */*",
        "Accept-Language": "en-US,en;q=0.9",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    }


class Transport:
    """Performs GET requests and returns status, headers and body text."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(build_headers())
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    def get(self, url: str, headers: Optional[Mapping[str, str]] = None, proxy: str = "") -> HttpResponse:
        """GET url, optionally through proxy. Network errors propagate as requests exceptions."""
        logger.debug(f"GET {url} (proxy: {proxy or 'direct'})")
        r = self.session.get(
            url,
            headers=dict(headers or {}),
            proxies=ProxyManager.to_dict(proxy) or None,
            timeout=self.timeout,
            allow_redirects=True,
        )
        return HttpResponse(status=r.status_code, headers=r.headers, text=r.text)

    def close(self):
        self.session.close()
