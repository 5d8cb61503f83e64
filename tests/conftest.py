"""Shared fixtures: a fake requests session and cookie helpers."""

from __future__ import annotations

import json
import time

import pytest
import requests

from console_client.credentials import MemoryCookieStore
from console_client.transport import ApiClient

BASE_URL = "http://backend.test/api/v1"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str | None = None, reason: str = "OK") -> None:
        self.status_code = status_code
        self.reason = reason
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text
        self.content = text.encode()

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; records every call it receives."""

    def __init__(self, *responses, error: Exception | None = None) -> None:
        self.responses = list(responses)
        self.default = FakeResponse(200, {"ok": True})
        self.error = error
        self.calls: list[dict] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return self.default

    def close(self) -> None:
        pass


def token_cookie(expires_at_ts: float, token: str = "abc") -> str:
    return json.dumps({
        "token": token,
        "expires_at": "2030-01-01T00:00:00Z",
        "expires_at_ts": expires_at_ts,
    })


@pytest.fixture
def valid_cookies() -> MemoryCookieStore:
    return MemoryCookieStore({"token": token_cookie(time.time() + 3600)})


@pytest.fixture
def empty_cookies() -> MemoryCookieStore:
    return MemoryCookieStore()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(valid_cookies, fake_session) -> ApiClient:
    return ApiClient(base_url=BASE_URL, cookies=valid_cookies, session=fake_session)


@pytest.fixture
def boom_client(valid_cookies) -> ApiClient:
    session = FakeSession(error=requests.ConnectionError("boom"))
    return ApiClient(base_url=BASE_URL, cookies=valid_cookies, session=session)
