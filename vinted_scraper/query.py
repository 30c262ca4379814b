"""
query.py - Turns a catalog URL from the website into the query string
expected by /api/v2/catalog/items.

  catalog[]=1&catalog[]=2&brand[]=5&time=999
  -> catalog_ids=1,2&brands=5
"""
import re
from typing import Dict
from urllib.parse import unquote

from .config import IGNORED_QUERY_PARAMS
from .exceptions import InvalidUrlError

CATALOG_URL_PATTERN = re.compile(r"^https://(www.)?vinted\.([a-z]+)/(vetements|catalog)\?[^\s]+")

# Applied in order: the specific renames first, then the generic pluralisation
_KEY_REWRITES = (
    ("catalog[]", "catalog_id[]"),
    ("status[]",  "status_id[]"),
    ("[]",        "s"),
)

# Characters a browser keeps percent-encoded when decoding a full URI
_RESERVED = set(";/?:@&=+$,#")

_ESCAPE_RUN = re.compile(r"%[0-9A-Fa-f]{2}(?:%[0-9A-Fa-f]{2})*")
_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")


def _decode_run(match) -> str:
    out, pending = [], []
    for esc in _ESCAPE.findall(match.group(0)):
        if chr(int(esc[1:], 16)) in _RESERVED:
            out.append(unquote("".join(pending)))
            out.append(esc)
            pending = []
        else:
            pending.append(esc)
    out.append(unquote("".join(pending)))
    return "".join(out)


def decode_uri(uri: str) -> str:
    """Percent-decodes a URI, leaving escaped separators (%26, %3D, %2B, ...) as they are."""
    return _ESCAPE_RUN.sub(_decode_run, uri)


def normalize(url: str) -> str:
    """Returns the API query string for a Vinted search URL.

    Array parameters are flattened into comma-separated values and the
    `time` cache-buster is dropped.

    Raises:
        InvalidUrlError: the URL is not a Vinted catalog URL or a parameter
            is not a single key=value pair.
    """
    uri = decode_uri(url)

    if not CATALOG_URL_PATTERN.match(uri):
        raise InvalidUrlError("Invalid URI format", url=url)

    parts = uri.split("?")
    if len(parts) != 2:
        raise InvalidUrlError("Invalid URI parameters", url=url)

    query_string = parts[1]
    for old, new in _KEY_REWRITES:
        query_string = query_string.replace(old, new)

    params: Dict[str, str] = {}
    for param in query_string.split("&"):
        pair = param.split("=")
        if len(pair) != 2:
            raise InvalidUrlError(f"Invalid URI parameters: {param}", url=url)
        key, value = pair
        if key in params:
            params[key] += f",{value}"
        else:
            params[key] = value

    return "&".join(
        f"{key}={value}" for key, value in params.items()
        if key not in IGNORED_QUERY_PARAMS
    )
