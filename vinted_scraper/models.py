"""
models.py - Shapes of the payloads returned by the client.

API payloads are passed through untouched; the TypedDicts only name the
fields callers usually read. BoostResult reports what boost_item did.
"""
from concurrent.futures import Future, wait
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict


class SearchResult(TypedDict, total=False):
    items:      List[Dict[str, Any]]
    pagination: Dict[str, Any]
    proxy:      str


class User(TypedDict, total=False):
    user:  Dict[str, Any]
    code:  int
    proxy: str


class Item(TypedDict, total=False):
    item:  Dict[str, Any]
    code:  int
    proxy: str


@dataclass
class BoostResult:
    """
    Outcome of boost_item.

    `dispatched` counts requests handed to the pool; it says nothing about
    delivery. Call wait() to learn how many actually completed.
    """

    requested:       int
    dispatched:      int = 0
    failed_attempts: int = 0
    futures:         List[Future] = field(default_factory=list, repr=False)

    @property
    def complete(self) -> bool:
        return self.dispatched >= self.requested

    def wait(self, timeout: Optional[float] = None) -> int:
        """Blocks until dispatched requests finish; returns how many succeeded."""
        done, _ = wait(self.futures, timeout=timeout)
        return sum(1 for f in done if f.exception() is None)
