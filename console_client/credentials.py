"""
Credential resolution.

The active credential lives in the `token` cookie, normally as a JSON object
{"token", "expires_at", "expires_at_ts"}. Older sessions stored the bare bearer
string; that form is still accepted. Nothing here is cached: the cookie is read
again on every call so logout, project switch and expiry take effect at once.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from console_client.config import TOKEN_COOKIE

logger = logging.getLogger(__name__)

# expires_at_ts below this is Unix seconds, otherwise Unix milliseconds
MILLISECONDS_THRESHOLD = 1e12


class CookieStore(Protocol):
    def get(self, name: str) -> Optional[str]:
        ...


class MemoryCookieStore:
    """Dict-backed cookie store for scripts, pollers and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._cookies: Dict[str, str] = dict(initial or {})

    def get(self, name: str) -> Optional[str]:
        return self._cookies.get(name)

    def set(self, name: str, value: str, **attrs) -> None:
        self._cookies[name] = value

    def delete(self, name: str, **attrs) -> None:
        self._cookies.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self._cookies


@dataclass
class TokenCookie:
    token: str
    expires_at: str
    expires_at_ts: float

    @classmethod
    def parse(cls, raw: str) -> Optional["TokenCookie"]:
        """Parse the structured cookie form, or None if raw is not that shape."""
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return None
        if not isinstance(data, dict):
            return None
        token = data.get("token")
        expires_at = data.get("expires_at")
        expires_at_ts = data.get("expires_at_ts")
        if not isinstance(token, str) or not isinstance(expires_at, str):
            return None
        if isinstance(expires_at_ts, bool) or not isinstance(expires_at_ts, (int, float)):
            return None
        if isinstance(expires_at_ts, float) and not math.isfinite(expires_at_ts):
            return None
        return cls(token=token, expires_at=expires_at, expires_at_ts=expires_at_ts)

    @classmethod
    def from_login_response(cls, response: Any) -> Optional["TokenCookie"]:
        """Credential from a login or switch-project payload, or None if it lacks one."""
        if not isinstance(response, dict):
            return None
        return cls.parse(json.dumps({
            "token": response.get("token"),
            "expires_at": str(response.get("expires_at") or ""),
            "expires_at_ts": response.get("expires_at_ts"),
        }))

    def serialize(self) -> str:
        return json.dumps(
            {"token": self.token, "expires_at": self.expires_at, "expires_at_ts": self.expires_at_ts},
            separators=(",", ":"),
        )

    @property
    def expires_at_ms(self) -> float:
        return expiry_to_milliseconds(self.expires_at_ts)

    def is_expired(self, now: Optional[float] = None) -> bool:
        return _now_ms(now) >= self.expires_at_ms

    def max_age(self, now: Optional[float] = None) -> int:
        """Whole seconds until expiry, never negative."""
        return max(int((self.expires_at_ms - _now_ms(now)) // 1000), 0)


def expiry_to_milliseconds(expires_at_ts: float) -> float:
    if expires_at_ts < MILLISECONDS_THRESHOLD:
        return expires_at_ts * 1000
    return expires_at_ts


def _now_ms(now: Optional[float]) -> float:
    """`now` is Unix seconds; defaults to the current time."""
    if now is None:
        now = time.time()
    return now * 1000


def resolve_auth_headers(cookies: CookieStore, now: Optional[float] = None) -> Dict[str, str]:
    """
    Build the header set for an authenticated call.

    Args:
        cookies: Cookie store holding the `token` cookie
        now: Current time in Unix seconds (default: time.time())

    Returns:
        {} when no usable credential exists, otherwise
        {"Authorization": "Bearer <token>"}
    """
    raw = cookies.get(TOKEN_COOKIE)
    if not isinstance(raw, str) or not raw:
        return {}

    credential = TokenCookie.parse(raw)
    if credential is not None:
        if credential.is_expired(now):
            logger.debug("Token cookie expired at %s", credential.expires_at or credential.expires_at_ts)
            return {}
        return {"Authorization": f"Bearer {credential.token}"}

    # Legacy sessions stored the bare bearer string
    return {"Authorization": f"Bearer {raw}"}
