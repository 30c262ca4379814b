"""
requester.py - Authenticated GET against the Vinted API.

Every response is classified into one ResponseKind. Only a stale token is
handled here (one session refresh, then the call is retried); every other
failure is raised to the caller.
"""
import enum
import json
from typing import Any, NamedTuple

from .config import (
    NOT_FOUND_SENTINEL,
    RATE_LIMIT_MARKER,
    SESSION_COOKIE_NAME,
    STALE_TOKEN_SENTINEL,
    STATUS_FIELD,
)
from .exceptions import (
    AuthenticationError,
    GatewayError,
    MalformedJsonError,
    NotFoundError,
    RateLimitError,
)
from .logger import get_logger

logger = get_logger("requester")

# Refreshes allowed per call before a rejected token becomes an error
MAX_AUTH_RETRIES = 1


class ResponseKind(enum.Enum):
    SUCCESS        = "success"
    RATE_LIMITED   = "rate_limited"
    GATEWAY_ERROR  = "gateway_error"
    MALFORMED_JSON = "malformed_json"
    STALE_TOKEN    = "stale_token"
    NOT_FOUND      = "not_found"


class Classification(NamedTuple):
    kind:    ResponseKind
    payload: Any = None


def classify(text: str) -> Classification:
    """Classifies a response body. Checks run in a fixed priority order."""
    if RATE_LIMIT_MARKER in text:
        return Classification(ResponseKind.RATE_LIMITED)

    # HTML error page instead of JSON
    if "<" in text:
        return Classification(ResponseKind.GATEWAY_ERROR)

    try:
        payload = json.loads(text)
    except ValueError:
        return Classification(ResponseKind.MALFORMED_JSON)

    status = payload.get(STATUS_FIELD) if isinstance(payload, dict) else None
    if status == STALE_TOKEN_SENTINEL:
        return Classification(ResponseKind.STALE_TOKEN, payload)
    if status == NOT_FOUND_SENTINEL:
        return Classification(ResponseKind.NOT_FOUND, payload)
    return Classification(ResponseKind.SUCCESS, payload)


class Requester:
    """Sends authenticated requests using a SessionManager and a proxy source."""

    def __init__(self, transport, session_manager, proxy_source=None):
        self.transport       = transport
        self.session_manager = session_manager
        self.proxy_source    = proxy_source

    def authenticated_get(self, url: str, retries_left: int = MAX_AUTH_RETRIES) -> Any:
        """
        GET url with the session cookie and return the decoded JSON.
        A stale token triggers a session refresh and a retry while
        retries_left > 0.
        """
        token = self.session_manager.ensure_session()
        proxy = self._get_proxy()

        response = self.transport.get(
            url,
            headers={"cookie": f"{SESSION_COOKIE_NAME}={token}"},
            proxy=proxy,
        )
        result = classify(response.text)
        logger.debug(f"GET {url} -> {response.status} {result.kind.value}")

        if proxy and isinstance(result.payload, dict):
            result.payload["proxy"] = proxy

        if result.kind is ResponseKind.RATE_LIMITED:
            logger.warning(f"Rate limit exceeded: {url}")
            raise RateLimitError("Request rate limit exceeded", url=url)

        if result.kind is ResponseKind.GATEWAY_ERROR:
            logger.warning(f"HTML response instead of JSON ({response.status}): {url}")
            raise GatewayError("Bad Gateway", url=url)

        if result.kind is ResponseKind.MALFORMED_JSON:
            logger.warning(f"Malformed JSON ({response.status}): {url}")
            raise MalformedJsonError("Malformed JSON response", url=url)

        if result.kind is ResponseKind.STALE_TOKEN:
            if retries_left <= 0:
                logger.error(f"Session token rejected after refresh: {url}")
                raise AuthenticationError("invalid_authentication_token", url=url)
            logger.info("Session token expired, refreshing")
            self.session_manager.refresh(stale_token=token)
            return self.authenticated_get(url, retries_left=retries_left - 1)

        if result.kind is ResponseKind.NOT_FOUND:
            raise NotFoundError("not_found", url=url)

        return result.payload

    def _get_proxy(self) -> str:
        if self.proxy_source is None:
            return ""
        return self.proxy_source.get_proxy() or ""
