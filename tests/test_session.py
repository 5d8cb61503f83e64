"""Tests for login, project switch and logout cookie handling."""

from __future__ import annotations

import json
import time

import pytest
import requests

from console_client.credentials import MemoryCookieStore, TokenCookie
from console_client.errors import EMPTY_PAYLOAD, ApiError
from console_client.session import ConsoleSession, cookie_attributes
from console_client.transport import ApiClient
from tests.conftest import BASE_URL, FakeResponse, FakeSession, token_cookie


class RecordingCookieStore(MemoryCookieStore):
    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.attrs: dict = {}
        self.deleted: list = []

    def set(self, name, value, **attrs) -> None:
        super().set(name, value, **attrs)
        self.attrs[name] = attrs

    def delete(self, name, **attrs) -> None:
        super().delete(name, **attrs)
        self.deleted.append(name)


def _login_payload(token: str = "t1", projects=None, ttl: float = 3600) -> dict:
    return {
        "message": "ok",
        "token": token,
        "expires_at": "2030-01-01T00:00:00Z",
        "expires_at_ts": time.time() + ttl,
        "user_id": "u1",
        "username": "admin",
        "projects": projects if projects is not None else [
            {"project_id": "p1", "name": "one"},
            {"project_id": "p2", "name": "two"},
        ],
    }


def _session(cookies, *responses, error=None) -> tuple[ConsoleSession, FakeSession]:
    fake = FakeSession(*responses, error=error)
    return ConsoleSession(ApiClient(base_url=BASE_URL, cookies=cookies, session=fake)), fake


def test_login_writes_token_user_and_first_project() -> None:
    cookies = RecordingCookieStore()
    session, fake = _session(cookies, FakeResponse(200, _login_payload()))

    session.login({"username": "admin", "password": "pw"})

    assert "Authorization" not in fake.calls[0]["headers"]
    credential = TokenCookie.parse(cookies.get("token"))
    assert credential is not None and credential.token == "t1"
    user = json.loads(cookies.get("user"))
    assert user["username"] == "admin"
    assert [p["project_id"] for p in user["projects"]] == ["p1", "p2"]
    assert "loginTime" in user
    assert cookies.get("selectedProject") == "p1"
    assert session.is_logged_in and session.has_valid_token


def test_login_cookie_lifetime_matches_token_expiry() -> None:
    cookies = RecordingCookieStore()
    session, _ = _session(cookies, FakeResponse(200, _login_payload(ttl=600)))

    session.login({"username": "admin", "password": "pw"})

    attrs = cookies.attrs["token"]
    assert 595 <= attrs["max_age"] <= 600
    assert attrs["path"] == "/"
    assert attrs["samesite"] == "Lax"
    assert attrs["httponly"] is False


def test_login_keeps_an_existing_project_selection() -> None:
    cookies = RecordingCookieStore({"selectedProject": "p2"})
    session, _ = _session(cookies, FakeResponse(200, _login_payload()))

    session.login({"username": "admin", "password": "pw"})

    assert cookies.get("selectedProject") == "p2"


def test_login_without_token_in_response_fails() -> None:
    cookies = RecordingCookieStore()
    session, _ = _session(cookies, FakeResponse(200, {"message": "ok"}))

    with pytest.raises(ApiError) as excinfo:
        session.login({"username": "admin", "password": "pw"})

    assert excinfo.value.kind == EMPTY_PAYLOAD
    assert excinfo.value.message == "No token received from login endpoint"
    assert cookies.get("token") is None


def test_login_backend_rejection_surfaces_detail() -> None:
    session, _ = _session(RecordingCookieStore(), FakeResponse(401, {"detail": "Invalid credentials"}))

    with pytest.raises(ApiError, match="Error logging in: HTTP 401: Invalid credentials"):
        session.login({"username": "admin", "password": "wrong"})


def test_switch_project_replaces_token_and_merges_user() -> None:
    cookies = RecordingCookieStore({
        "token": token_cookie(time.time() + 3600, token="old"),
        "user": json.dumps({"user_id": "u1", "username": "admin", "projects": []}),
        "selectedProject": "p1",
    })
    session, fake = _session(cookies, FakeResponse(200, _login_payload(token="scoped")))

    session.switch_project("p2")

    assert fake.calls[0]["headers"] == {"Authorization": "Bearer old"}
    assert fake.calls[0]["json"] == {"project_id": "p2"}
    assert TokenCookie.parse(cookies.get("token")).token == "scoped"
    user = json.loads(cookies.get("user"))
    assert user["username"] == "admin"
    assert len(user["projects"]) == 2
    assert cookies.get("selectedProject") == "p2"


def test_switch_to_current_project_is_a_no_op() -> None:
    cookies = RecordingCookieStore({"token": "legacy", "selectedProject": "p1"})
    session, fake = _session(cookies)

    assert session.switch_project("p1") is None
    assert fake.calls == []


def test_logout_clears_cookies_on_success() -> None:
    cookies = RecordingCookieStore({"token": "legacy", "user": "{}", "selectedProject": "p1"})
    session, _ = _session(cookies, FakeResponse(200, {"message": "bye"}))

    assert session.logout() == {"message": "bye"}

    assert sorted(cookies.deleted) == ["selectedProject", "token", "user"]
    assert not session.is_logged_in


def test_logout_clears_cookies_even_when_the_call_fails() -> None:
    cookies = RecordingCookieStore({"token": "legacy", "user": "{}", "selectedProject": "p1"})
    session, _ = _session(cookies, error=requests.ConnectionError("boom"))

    with pytest.raises(ApiError, match="boom"):
        session.logout()

    assert cookies.get("token") is None
    assert cookies.get("user") is None
    assert cookies.get("selectedProject") is None


def test_unparseable_user_cookie_reads_as_empty() -> None:
    session, _ = _session(RecordingCookieStore({"user": "{not json"}))

    assert session.user == {}


def test_cookie_attributes_omit_max_age_unless_given() -> None:
    assert "max_age" not in cookie_attributes()
    assert cookie_attributes(30)["max_age"] == 30
