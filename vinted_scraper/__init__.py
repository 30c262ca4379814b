"""
vinted_scraper - Client for the undocumented Vinted API.
"""
from .vinted import Vinted
from .proxy_manager import ProxyManager
from .query import normalize
from .exceptions import (
    VintedError,
    InvalidUrlError,
    SessionAcquisitionError,
    RateLimitError,
    GatewayError,
    MalformedJsonError,
    AuthenticationError,
    NotFoundError,
)

__all__ = [
    "Vinted",
    "ProxyManager",
    "normalize",
    "VintedError",
    "InvalidUrlError",
    "SessionAcquisitionError",
    "RateLimitError",
    "GatewayError",
    "MalformedJsonError",
    "AuthenticationError",
    "NotFoundError",
]
