from typing import Any, Dict, List, Mapping, Optional, Tuple


class FlaskCookieStore:
    """
    Cookie store over one Flask request.

    Reads come from the request cookies overlaid with writes made during the
    request; writes are queued and copied onto the response by apply().
    """

    def __init__(self, request_cookies: Mapping[str, str]):
        self._cookies: Dict[str, str] = dict(request_cookies)
        self._pending: List[Tuple[str, str, Optional[str], Dict[str, Any]]] = []

    def get(self, name: str) -> Optional[str]:
        return self._cookies.get(name)

    def set(self, name: str, value: str, **attrs) -> None:
        self._cookies[name] = value
        self._pending.append(("set", name, value, attrs))

    def delete(self, name: str, **attrs) -> None:
        self._cookies.pop(name, None)
        attrs.pop("max_age", None)
        self._pending.append(("delete", name, None, attrs))

    def apply(self, response):
        for op, name, value, attrs in self._pending:
            if op == "set":
                response.set_cookie(name, value, **attrs)
            else:
                response.delete_cookie(name, **attrs)
        self._pending.clear()
        return response
