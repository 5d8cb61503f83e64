"""Tests for the Flask console gateway."""

from __future__ import annotations

import io
import json
import time

import pytest
import requests

import console.service as service
from console_client.query_cache import QueryCache
from tests.conftest import FakeResponse, FakeSession, token_cookie


@pytest.fixture
def backend(monkeypatch) -> FakeSession:
    fake = FakeSession()
    monkeypatch.setattr(service, "http_session", fake)
    monkeypatch.setattr(service, "query_cache", QueryCache())
    monkeypatch.setattr(service, "BASE_URL", "http://backend.test/api/v1")
    return fake


@pytest.fixture
def client(backend):
    service.app.config["TESTING"] = True
    with service.app.test_client() as client:
        yield client


@pytest.fixture
def logged_in(client):
    client.set_cookie("token", token_cookie(time.time() + 3600))
    client.set_cookie("user", json.dumps({"user_id": "u1", "username": "admin"}))
    client.set_cookie("selectedProject", "p1")
    return client


def _login_payload() -> dict:
    return {
        "message": "Login successful",
        "token": "t1",
        "expires_at": "2030-01-01T00:00:00Z",
        "expires_at_ts": time.time() + 3600,
        "user_id": "u1",
        "username": "admin",
        "projects": [{"project_id": "p1", "name": "one"}],
    }


class TestRouting:
    def test_root_redirects_to_login_when_logged_out(self, client):
        response = client.get("/")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")

    def test_root_redirects_to_overview_when_logged_in(self, logged_in):
        response = logged_in.get("/")
        assert response.headers["Location"].endswith("/dashboard/overview")

    def test_login_page_redirects_when_logged_in(self, logged_in):
        response = logged_in.get("/login")
        assert response.headers["Location"].endswith("/dashboard/overview")

    def test_dashboard_pages_require_login(self, client):
        response = client.get("/dashboard/instances")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")

    def test_dashboard_page_served_when_logged_in(self, logged_in):
        response = logged_in.get("/dashboard/instances")
        assert response.status_code == 200
        assert response.get_json()["selected_project"] == "p1"

    def test_healthz(self, client):
        assert client.get("/healthz").get_json()["status"] == "ok"


class TestSession:
    def test_login_sets_session_cookies(self, client, backend):
        backend.responses.append(FakeResponse(200, _login_payload()))

        response = client.post("/login", json={"username": "admin", "password": "pw"})

        assert response.status_code == 200
        assert response.get_json()["selected_project"] == "p1"
        assert client.get_cookie("token") is not None
        assert client.get_cookie("user") is not None
        assert client.get_cookie("selectedProject").value == "p1"

    def test_login_rejection_is_reported(self, client, backend):
        backend.responses.append(FakeResponse(401, {"detail": "Invalid credentials"}, reason="Unauthorized"))

        response = client.post("/login", json={"username": "admin", "password": "bad"})

        assert response.status_code == 502
        assert response.get_json()["message"] == "Error logging in: HTTP 401: Invalid credentials"
        assert client.get_cookie("token") is None

    def test_login_validation_error_is_422(self, client, backend):
        response = client.post("/login", json={"username": "", "password": ""})

        assert response.status_code == 422
        assert response.get_json()["kind"] == "validation"
        assert backend.calls == []

    def test_logout_clears_cookies_even_on_failure(self, logged_in, backend):
        backend.error = requests.ConnectionError("boom")

        response = logged_in.post("/logout")

        assert response.status_code == 502
        assert "boom" in response.get_json()["message"]
        assert logged_in.get_cookie("token") is None
        assert logged_in.get_cookie("user") is None
        assert logged_in.get_cookie("selectedProject") is None

    def test_logout_drops_cached_queries_of_the_session(self, backend):
        for n in range(3):
            with service.app.test_client() as browser:
                backend.responses.extend([
                    FakeResponse(200, {**_login_payload(), "token": f"t{n}"}),
                    FakeResponse(200, [{"id": f"i{n}"}]),
                    FakeResponse(200, {"message": "bye"}),
                ])
                browser.post("/login", json={"username": "admin", "password": "pw"})
                assert browser.get("/instances").get_json() == [{"id": f"i{n}"}]
                assert browser.post("/logout").status_code == 200

        cache = service.query_cache
        assert cache._states == {}
        assert cache._fetchers == {}
        assert cache._key_locks == {}

    def test_switch_project_drops_queries_cached_under_old_token(self, logged_in, backend):
        backend.responses.extend([
            FakeResponse(200, [{"id": "i1"}]),
            FakeResponse(200, {**_login_payload(), "token": "scoped"}),
        ])
        logged_in.get("/instances")
        assert len(service.query_cache._fetchers) == 1

        logged_in.post("/projects/switch", json={"project_id": "p2"})

        assert service.query_cache._fetchers == {}

    def test_session_reports_token_validity(self, logged_in):
        body = logged_in.get("/session").get_json()
        assert body["logged_in"] is True
        assert body["token_valid"] is True
        assert body["user"]["username"] == "admin"

    def test_switch_project_updates_selection(self, logged_in, backend):
        backend.responses.append(FakeResponse(200, _login_payload()))

        response = logged_in.post("/projects/switch", json={"project_id": "p2"})

        assert response.status_code == 200
        assert response.get_json()["data"] == {"selected_project": "p2"}
        assert logged_in.get_cookie("selectedProject").value == "p2"


class TestResources:
    def test_missing_token_is_401_without_backend_call(self, client, backend):
        response = client.get("/instances")

        assert response.status_code == 401
        assert response.get_json() == {"kind": "auth", "message": "Token not found"}
        assert backend.calls == []

    def test_transport_failure_is_502(self, logged_in, backend):
        backend.error = requests.ConnectionError("boom")

        response = logged_in.get("/instances")

        assert response.status_code == 502
        assert response.get_json() == {"kind": "transport", "message": "Error fetching instances: boom"}

    def test_instances_are_cached(self, logged_in, backend):
        backend.responses.append(FakeResponse(200, [{"id": "i1"}]))

        first = logged_in.get("/instances").get_json()
        second = logged_in.get("/instances").get_json()

        assert first == second == [{"id": "i1"}]
        assert len(backend.calls) == 1

    def test_console_without_url_is_502(self, logged_in, backend):
        backend.responses.append(FakeResponse(200, {}))

        response = logged_in.get("/instances/i1/console")

        assert response.status_code == 502
        assert response.get_json()["message"] == "No console URL returned"

    def test_unknown_instance_action_is_404(self, logged_in, backend):
        response = logged_in.post("/instances/i1/explode")

        assert response.status_code == 404
        assert backend.calls == []

    def test_instance_action_refetches_instances(self, logged_in, backend):
        backend.responses.extend([
            FakeResponse(200, [{"id": "i1", "status": "ACTIVE"}]),
            FakeResponse(200, {"message": "paused"}),
            FakeResponse(200, [{"id": "i1", "status": "PAUSED"}]),
        ])
        logged_in.get("/instances")

        response = logged_in.post("/instances/i1/pause")

        assert response.status_code == 200
        assert response.get_json()["ok"] is True
        assert backend.calls[1]["url"].endswith("/nova/pause")
        assert backend.calls[1]["json"] == {"instance_id": "i1"}
        assert logged_in.get("/instances").get_json() == [{"id": "i1", "status": "PAUSED"}]

    def test_failed_mutation_reports_message(self, logged_in, backend):
        backend.responses.append(FakeResponse(409, {"detail": "locked"}, reason="Conflict"))

        response = logged_in.delete("/instances/i1")

        assert response.status_code == 400
        assert response.get_json() == {
            "ok": False,
            "message": "Error deleting instance: HTTP 409: locked",
            "data": None,
        }

    def test_volume_create_uses_query_string(self, logged_in, backend):
        response = logged_in.post("/volumes", json={"name": "v1", "size": 10, "volume_type": None})

        assert response.status_code == 201
        assert backend.calls[0]["url"] == "http://backend.test/api/v1/volume/volumes?name=v1&size=10"

    def test_volume_create_validation_error(self, logged_in, backend):
        response = logged_in.post("/volumes", json={"name": "v1", "size": 0})

        assert response.status_code == 422
        assert backend.calls == []

    def test_image_upload_is_forwarded_as_multipart(self, logged_in, backend):
        response = logged_in.post(
            "/images/upload",
            data={"file": (io.BytesIO(b"qcow2"), "disk.qcow2"), "image_name": "disk"},
            content_type="multipart/form-data",
        )

        assert response.status_code == 201
        call = backend.calls[0]
        assert call["files"]["file"][0] == "disk.qcow2"
        assert call["data"] == [("image_name", "disk")]

    def test_image_upload_requires_file(self, logged_in, backend):
        response = logged_in.post("/images/upload", data={"image_name": "disk"})

        assert response.status_code == 422
        assert backend.calls == []
