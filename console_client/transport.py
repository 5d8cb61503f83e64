"""
HTTP transport and response normalization.

ApiClient.request() is the single path every service method goes through:
1. resolve the bearer header and refuse to dispatch without one
2. build the URL and body (JSON or multipart)
3. dispatch with requests
4. turn transport failures, non-2xx responses and empty payloads into ApiError
"""

import logging
from typing import Any, Dict, Optional, Tuple

import requests
from pydantic import BaseModel

from console_client import config
from console_client.credentials import CookieStore, MemoryCookieStore, resolve_auth_headers
from console_client.encoding import MultipartForm, build_url
from console_client.errors import EMPTY_PAYLOAD, TRANSPORT, ApiError, token_not_found

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Thin client for the console backend REST API.

    Usage:
        client = ApiClient(cookies=MemoryCookieStore({"token": raw_cookie}))
        instances = client.request(
            "GET", "/nova/instances",
            action="fetching instances", endpoint="instances",
        )
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        cookies: Optional[CookieStore] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None
    ):
        self.base_url = (base_url or config.BACKEND_URL).rstrip("/")
        self.cookies = cookies if cookies is not None else MemoryCookieStore()
        self.session = session or requests.Session()
        self.timeout = timeout or config.REQUEST_TIMEOUT

    def url(self, path: str, *path_params: Any, query: Any = None) -> str:
        return build_url(self.base_url, path, *path_params, query=query)

    def auth_headers(self) -> Dict[str, str]:
        """Bearer header for an authenticated call; raises if there is none."""
        headers = resolve_auth_headers(self.cookies)
        if "Authorization" not in headers:
            raise token_not_found()
        return headers

    def call_api(self, method: str, url: str, **kwargs) -> Tuple[bool, Any, Optional[str]]:
        """
        Dispatch one request.

        Returns:
            (ok, payload, error) where payload is the decoded JSON body (None
            for an empty body) and error is a message when ok is False
        """
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            return False, None, str(e) or e.__class__.__name__

        payload = _decode_body(resp)
        if 200 <= resp.status_code < 300:
            return True, payload, None

        if isinstance(payload, dict):
            error = (
                payload.get("detail")
                or payload.get("error")
                or payload.get("message")
                or payload.get("raw")
            )
        else:
            error = payload
        if not error:
            error = resp.reason or "no response body"
        return False, payload, f"HTTP {resp.status_code}: {error}"

    def request(
        self,
        method: str,
        path: str,
        *path_params: Any,
        action: str,
        endpoint: str,
        auth: bool = True,
        body: Any = None,
        form: Optional[MultipartForm] = None,
        query: Any = None,
        require_data: bool = True
    ) -> Any:
        """
        Dispatch a call and return its payload.

        Args:
            method: HTTP verb
            path: Group path from config.API_PATHS
            *path_params: Values appended as "/{value}" segments
            action: Context for transport errors ("fetching instances")
            endpoint: Name used in empty-payload errors ("instances")
            auth: Attach the bearer header; refuse to dispatch without one
            body: JSON body (mapping or pydantic model; None fields dropped)
            form: Multipart body, takes precedence over body
            query: Query parameters (mapping, model or prebuilt string)
            require_data: Treat an empty payload as a failure

        Raises:
            ApiError: On missing credential, transport failure or empty payload
        """
        headers = self.auth_headers() if auth else {}
        url = self.url(path, *path_params, query=query)

        kwargs: Dict[str, Any] = {"headers": headers}
        if form is not None:
            kwargs["data"] = form.fields
            kwargs["files"] = form.files
        elif body is not None:
            kwargs["json"] = _json_body(body)
        elif method in ("POST", "PUT"):
            kwargs["json"] = {}

        logger.debug("%s %s", method, url)
        ok, payload, error = self.call_api(method, url, **kwargs)
        if not ok:
            message = f"Error {action}: {error}"
            logger.warning(message)
            raise ApiError(TRANSPORT, message)

        if payload is None and require_data:
            message = f"No data received from {endpoint} endpoint"
            logger.warning(message)
            raise ApiError(EMPTY_PAYLOAD, message)

        return payload


def _decode_body(resp) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return {"raw": resp.text}


def _json_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    if isinstance(body, dict):
        return {k: v for k, v in body.items() if v is not None}
    return body
