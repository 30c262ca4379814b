"""Unit tests for session cookie handling."""

import pytest

from vinted_scraper.exceptions import SessionAcquisitionError
from vinted_scraper.session import SessionManager, extract_session_cookie
from vinted_scraper.transport import HttpResponse

from tests.conftest import FakeProxySource, FakeTransport


class TestExtractSessionCookie:

    def test_takes_value_up_to_semicolon(self):
        header = "_vinted_fr_session=abc123; path=/; HttpOnly"

        assert extract_session_cookie(header) == "abc123"

    def test_finds_cookie_among_others(self):
        header = "anon_id=x; path=/, _vinted_fr_session=tok; path=/"

        assert extract_session_cookie(header) == "tok"

    def test_value_without_attributes(self):
        assert extract_session_cookie("_vinted_fr_session=tok") == "tok"

    @pytest.mark.parametrize("header", [None, "", "anon_id=x; path=/", "_vinted_fr_session; path=/"])
    def test_missing_cookie(self, header):
        with pytest.raises(SessionAcquisitionError):
            extract_session_cookie(header)

    def test_empty_value(self):
        with pytest.raises(SessionAcquisitionError):
            extract_session_cookie("_vinted_fr_session=; path=/")


class TestSessionManager:

    def test_ensure_session_fetches_once(self):
        transport = FakeTransport()
        manager = SessionManager(transport, FakeProxySource())

        assert manager.token is None
        assert manager.ensure_session() == "token-1"
        assert manager.ensure_session() == "token-1"
        assert transport.session_count == 1

    def test_session_request_has_no_cookie_and_uses_proxy(self):
        transport = FakeTransport()
        manager = SessionManager(transport, FakeProxySource(["http://1.2.3.4:8080"]))

        manager.ensure_session()

        call = transport.calls[0]
        assert call["url"] == "https://vinted.de"
        assert "cookie" not in call["headers"]
        assert call["proxy"] == "http://1.2.3.4:8080"

    def test_works_without_proxy_source(self):
        transport = FakeTransport()
        manager = SessionManager(transport, None)

        assert manager.ensure_session() == "token-1"
        assert transport.calls[0]["proxy"] == ""

    def test_refresh_replaces_token(self):
        transport = FakeTransport()
        manager = SessionManager(transport, FakeProxySource())
        manager.ensure_session()

        assert manager.refresh() == "token-2"
        assert manager.token == "token-2"

    def test_refresh_skipped_when_token_already_replaced(self):
        transport = FakeTransport()
        manager = SessionManager(transport, FakeProxySource())
        manager.ensure_session()
        manager.refresh(stale_token="token-1")

        # A second caller still holding token-1 must not trigger another fetch
        assert manager.refresh(stale_token="token-1") == "token-2"
        assert transport.session_count == 2

    def test_missing_set_cookie_raises(self):
        class NoCookieTransport:
            def get(self, url, headers=None, proxy=""):
                return HttpResponse(status=200, headers={}, text="")

        manager = SessionManager(NoCookieTransport(), None)

        with pytest.raises(SessionAcquisitionError):
            manager.ensure_session()
        assert manager.token is None

