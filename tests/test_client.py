# http boundary tests, the session is monkeypatched so nothing leaves the machine

import pytest
import requests
from lifeexp.client import LifeExpectancyClient
from lifeexp.errors import NetworkError


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text


def test_fetch_page_returns_body(monkeypatch):
    client = LifeExpectancyClient(url="https://example.test/page", timeout=3)
    seen = {}

    def fake_get(url, timeout):
        seen.update(url=url, timeout=timeout)
        return FakeResponse(200, "<html></html>")

    monkeypatch.setattr(client._session, "get", fake_get)

    assert client.fetch_page() == "<html></html>"
    assert seen == {"url": "https://example.test/page", "timeout": 3}


def test_http_error_status_raises(monkeypatch):
    client = LifeExpectancyClient()
    monkeypatch.setattr(client._session, "get", lambda url, timeout: FakeResponse(503, "busy"))

    with pytest.raises(NetworkError, match="HTTP 503"):
        client.fetch_page()


def test_transport_error_is_wrapped(monkeypatch):
    client = LifeExpectancyClient()

    def boom(url, timeout):
        raise requests.ConnectionError("no route to host")

    monkeypatch.setattr(client._session, "get", boom)

    with pytest.raises(NetworkError, match="no route to host"):
        client.fetch_page()


def test_session_sends_user_agent():
    client = LifeExpectancyClient(user_agent="test-agent/1.0")
    assert client._session.headers["User-Agent"] == "test-agent/1.0"
