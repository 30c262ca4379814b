"""Pytest fixtures: in-memory transport and proxy source, no network."""

import json
import threading
from typing import List, Optional

import pytest

from vinted_scraper.config import ClientConfig
from vinted_scraper.transport import HttpResponse
from vinted_scraper.vinted import Vinted

AUTH_HOST = "vinted.de"


def session_response(token: str) -> HttpResponse:
    return HttpResponse(
        status=200,
        headers={"Set-Cookie": f"anon_id=abc; path=/, _vinted_fr_session={token}; path=/; HttpOnly"},
        text="<html></html>",
    )


def json_response(payload, status: int = 200) -> HttpResponse:
    return HttpResponse(status=status, headers={"Content-Type": "application/json"}, text=json.dumps(payload))


class FakeTransport:
    """Serves session cookies for the site root and queued responses for everything else."""

    def __init__(self, responses: Optional[List[HttpResponse]] = None):
        self.responses = list(responses or [])
        self.calls = []
        self.session_count = 0
        self._lock = threading.Lock()

    def get(self, url, headers=None, proxy=""):
        with self._lock:
            self.calls.append({"url": url, "headers": dict(headers or {}), "proxy": proxy})
            if url.rstrip("/").endswith(AUTH_HOST):
                self.session_count += 1
                return session_response(f"token-{self.session_count}")
            if self.responses:
                return self.responses.pop(0)
            return json_response({})

    @property
    def api_calls(self):
        return [c for c in self.calls if not c["url"].rstrip("/").endswith(AUTH_HOST)]

    def close(self):
        pass


class FakeProxySource:
    def __init__(self, proxies=None, failures: int = 0):
        self.proxies = list(proxies or [])
        self.failures = failures
        self.calls = 0

    def get_proxy(self):
        self.calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise RuntimeError("proxy pool exhausted")
        if not self.proxies:
            return ""
        return self.proxies[(self.calls - 1) % len(self.proxies)]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def proxy_source() -> FakeProxySource:
    return FakeProxySource()


@pytest.fixture
def client(transport, proxy_source):
    vinted = Vinted(config=ClientConfig(boost_workers=2), transport=transport, proxy_source=proxy_source)
    yield vinted
    vinted.close()
