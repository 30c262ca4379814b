"""
exceptions.py - Errors raised by the Vinted client.
"""
from typing import Optional


class VintedError(Exception):
    """Base class for every client error."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.message = message
        self.url = url
        super().__init__(message)


class InvalidUrlError(VintedError):
    """The search URL is not a Vinted catalog URL or has broken parameters."""


class SessionAcquisitionError(VintedError):
    """No session cookie could be obtained from the site root."""


class RateLimitError(VintedError):
    """Vinted throttled the request."""


class GatewayError(VintedError):
    """An HTML page came back instead of JSON."""


class MalformedJsonError(VintedError):
    """The response body is not valid JSON."""


class AuthenticationError(VintedError):
    """The session token was rejected even after a refresh."""


class NotFoundError(VintedError):
    """The requested user or item does not exist."""
