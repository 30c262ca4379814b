"""
logger.py - Logging for vinted_scraper.

Importing the package only attaches a NullHandler, so an application that
never calls setup_logging() sees no output from the client.
"""
import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER = "vinted_scraper"
LOG_FORMAT  = "[%(asctime)s] %(levelname)-8s %(name)-20s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty at DEBUG (one line per connection); kept at WARNING unless debugging
NOISY_LOGGERS = ("urllib3",)

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """Sends client logs to stream (stdout by default) at the given level."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(numeric_level)
    root.handlers = [h for h in root.handlers if isinstance(h, logging.NullHandler)]

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(numeric_level)
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Returns a child of the vinted_scraper logger."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
