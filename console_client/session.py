"""
Console session state.

ConsoleSession is the single source of truth for who is logged in and which
project is active. The three cookies it writes (`token`, `user`,
`selectedProject`) are only a serialization of that state, rewritten on every
change: login, project switch and logout.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from console_client import config
from console_client.credentials import TokenCookie, resolve_auth_headers
from console_client.errors import EMPTY_PAYLOAD, ApiError
from console_client.services.auth import AuthService
from console_client.transport import ApiClient

logger = logging.getLogger(__name__)


def cookie_attributes(max_age: Optional[int] = None) -> Dict[str, Any]:
    attrs = {
        "path": "/",
        "httponly": False,
        "samesite": "Lax",
        "secure": config.IS_PRODUCTION,
    }
    if max_age is not None:
        attrs["max_age"] = max_age
    return attrs


def _login_time() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConsoleSession:
    """
    Login, project switch and logout on top of a writable cookie store.

    Usage:
        session = ConsoleSession(ApiClient(cookies=MemoryCookieStore()))
        session.login({"username": "admin", "password": "secret"})
        session.switch_project("b7c1...")
        session.logout()
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self.cookies = client.cookies
        self.auth = AuthService(client)

    # State read back from the persisted cookies

    @property
    def credential(self) -> Optional[TokenCookie]:
        raw = self.cookies.get(config.TOKEN_COOKIE)
        return TokenCookie.parse(raw) if isinstance(raw, str) else None

    @property
    def user(self) -> Dict[str, Any]:
        raw = self.cookies.get(config.USER_COOKIE)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unparseable user cookie")
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def selected_project(self) -> Optional[str]:
        return self.cookies.get(config.SELECTED_PROJECT_COOKIE) or None

    @property
    def is_logged_in(self) -> bool:
        """Both session cookies are present (expiry is checked per call)."""
        return bool(self.cookies.get(config.USER_COOKIE)) and bool(self.cookies.get(config.TOKEN_COOKIE))

    @property
    def has_valid_token(self) -> bool:
        return "Authorization" in resolve_auth_headers(self.cookies)

    # Transitions

    def login(self, data) -> dict:
        response = self.auth.login(data)
        credential = _credential_from(response, "login")
        projects = response.get("projects") or []
        self._write_credential(credential)
        self._write_user({
            "user_id": response.get("user_id"),
            "username": response.get("username"),
            "projects": projects,
            "loginTime": _login_time(),
        }, credential)
        first = _first_project_id(projects)
        if first and not self.selected_project:
            self._write_selected_project(first, credential)
        logger.info("User %s logged in", response.get("username"))
        return response

    def switch_project(self, project_id: str) -> Optional[dict]:
        """Exchange the token for one scoped to project_id; no-op if already active."""
        if project_id == self.selected_project:
            return None
        response = self.auth.switch_project({"project_id": project_id})
        credential = _credential_from(response, "switch project")
        self._write_credential(credential)
        user = dict(self.user)
        user.update({
            "projects": response.get("projects") or [],
            "loginTime": _login_time(),
        })
        self._write_user(user, credential)
        self._write_selected_project(project_id, credential)
        logger.info("Switched to project %s", project_id)
        return response

    def logout(self) -> dict:
        """Log out; session cookies are cleared whether or not the call succeeds."""
        try:
            return self.auth.logout()
        finally:
            self.clear()

    def clear(self) -> None:
        attrs = cookie_attributes()
        for name in (config.USER_COOKIE, config.TOKEN_COOKIE, config.SELECTED_PROJECT_COOKIE):
            self.cookies.delete(name, **attrs)

    def _write_credential(self, credential: TokenCookie) -> None:
        self.cookies.set(
            config.TOKEN_COOKIE, credential.serialize(),
            **cookie_attributes(credential.max_age()),
        )

    def _write_user(self, user: Dict[str, Any], credential: TokenCookie) -> None:
        self.cookies.set(
            config.USER_COOKIE, json.dumps(user, separators=(",", ":")),
            **cookie_attributes(credential.max_age()),
        )

    def _write_selected_project(self, project_id: str, credential: TokenCookie) -> None:
        self.cookies.set(
            config.SELECTED_PROJECT_COOKIE, project_id,
            **cookie_attributes(credential.max_age()),
        )


def _credential_from(response: Any, endpoint: str) -> TokenCookie:
    credential = TokenCookie.from_login_response(response)
    if credential is None:
        raise ApiError(EMPTY_PAYLOAD, f"No token received from {endpoint} endpoint")
    return credential


def _first_project_id(projects: List[Any]) -> Optional[str]:
    for project in projects:
        if isinstance(project, dict) and project.get("project_id"):
            return project["project_id"]
    return None
