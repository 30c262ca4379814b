"""
vinted.py - Main Vinted API client.
"""
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from .config import CATALOG_ITEMS_URL, ITEMS_URL, USERS_URL, ClientConfig
from .logger import get_logger
from .models import BoostResult, Item, SearchResult, User
from .proxy_manager import ProxyManager
from .query import normalize
from .requester import Requester
from .session import SessionManager
from .transport import Transport

logger = get_logger("vinted")


class Vinted:
    """
    Vinted API client.
    Searches the catalog from a website search URL, fetches users and items
    and can send anonymous views to an item page.
    """

    def __init__(
        self,
        proxies: Optional[Iterable[str]] = None,
        config: Optional[ClientConfig] = None,
        transport=None,
        proxy_source=None,
    ):
        self.config = config or ClientConfig()
        if proxy_source is None:
            proxy_source = ProxyManager(
                proxies if proxies is not None else self.config.proxies,
                proxy_list_url=self.config.proxy_list_url,
            )
        self.proxy_source = proxy_source
        self.transport    = transport or Transport(timeout=self.config.timeout)
        self.session      = SessionManager(self.transport, self.proxy_source)
        self.requester    = Requester(self.transport, self.session, self.proxy_source)
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def search(self, url: str) -> SearchResult:
        """Runs the search behind a vinted catalog URL (https://www.vinted.fr/catalog?...)."""
        query_string = normalize(url)
        return self.requester.authenticated_get(f"{CATALOG_ITEMS_URL}?{query_string}")

    def fetch_user(self, user_id: int) -> User:
        return self.requester.authenticated_get(f"{USERS_URL}/{user_id}")

    def fetch_item(self, item_id: int) -> Item:
        return self.requester.authenticated_get(f"{ITEMS_URL}/{item_id}")

    def boost_item(self, url: str, views: int) -> BoostResult:
        """
        Sends `views` anonymous GETs to an item page, each through its own proxy.

        Best effort: requests are dispatched to a thread pool and not awaited,
        and no response is read. A failure to pick a proxy or dispatch does not
        count as a view and is retried, up to config.boost_max_failures times.
        """
        result = BoostResult(requested=views)
        executor = self._get_executor()

        while result.dispatched < views:
            try:
                proxy = self.proxy_source.get_proxy() or ""
                future = executor.submit(self.transport.get, url, {}, proxy)
            except Exception as e:
                result.failed_attempts += 1
                logger.warning(f"Boost dispatch failed ({result.failed_attempts}): {e}")
                if result.failed_attempts >= self.config.boost_max_failures:
                    logger.error(
                        f"Boost stopped after {result.failed_attempts} failures "
                        f"({result.dispatched}/{views} dispatched)"
                    )
                    break
                if self.config.boost_backoff:
                    time.sleep(self.config.boost_backoff)
                continue
            result.futures.append(future)
            result.dispatched += 1

        logger.info(f"Boost {url}: {result.dispatched}/{views} requests dispatched")
        return result

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.boost_workers,
                thread_name_prefix="vinted-boost",
            )
        return self._executor
