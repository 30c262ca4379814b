"""
session.py - Holds the anonymous Vinted session token.

A token is obtained by a plain GET on the site root: Vinted answers with
a set-cookie header carrying _vinted_fr_session.
"""
import threading
from typing import Optional

from .config import AUTH_URL, SESSION_COOKIE_NAME
from .exceptions import SessionAcquisitionError
from .logger import get_logger

logger = get_logger("session")


def extract_session_cookie(set_cookie: Optional[str], name: str = SESSION_COOKIE_NAME) -> str:
    """Returns the value of cookie `name` from a raw set-cookie header."""
    if not set_cookie or name not in set_cookie:
        raise SessionAcquisitionError("Cannot fetch cookie")
    marker = f"{name}="
    if marker not in set_cookie:
        raise SessionAcquisitionError("Cannot fetch cookie")
    token = set_cookie.split(marker, 1)[1].split(";", 1)[0]
    if not token:
        raise SessionAcquisitionError("Cannot fetch cookie")
    return token


class SessionManager:
    """Owns the single session token shared by all authenticated requests."""

    def __init__(self, transport, proxy_source, auth_url: str = AUTH_URL):
        self._transport    = transport
        self._proxy_source = proxy_source
        self._auth_url     = auth_url
        self._token: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def token(self) -> Optional[str]:
        return self._token

    def ensure_session(self) -> str:
        """Returns the held token, fetching one first if there is none."""
        token = self._token
        if token:
            return token
        with self._lock:
            if not self._token:
                self._token = self._acquire()
            return self._token

    def refresh(self, stale_token: Optional[str] = None) -> str:
        """
        Drops the held token and fetches a new one.
        If stale_token is given and another caller already replaced it,
        the newer token is returned without a second request.
        """
        with self._lock:
            if stale_token is not None and self._token and self._token != stale_token:
                logger.debug("Session already refreshed by another caller")
                return self._token
            self._token = self._acquire()
            return self._token

    def _acquire(self) -> str:
        proxy = self._proxy_source.get_proxy() if self._proxy_source else ""
        logger.info(f"Fetching session cookie from {self._auth_url} (proxy: {proxy or 'direct'})")
        response = self._transport.get(self._auth_url, headers={}, proxy=proxy)
        token = extract_session_cookie(response.headers.get("set-cookie"))
        logger.info("Session cookie acquired")
        return token
