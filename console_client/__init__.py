"""
API client for the IaaS admin console backend.

- config: backend URL, endpoint table, refresh intervals
- credentials: token cookie parsing and bearer header resolution
- encoding: URL, query string and multipart construction
- transport: ApiClient, the one dispatch and error-normalization path
- services: one facade per endpoint group
- session: login / project switch / logout state
- query_cache: cached reads, pollers and mutation reporting
"""

from console_client.api import ConsoleApi
from console_client.credentials import MemoryCookieStore, TokenCookie, resolve_auth_headers
from console_client.errors import ApiError
from console_client.session import ConsoleSession
from console_client.transport import ApiClient

__all__ = [
    "ApiClient",
    "ApiError",
    "ConsoleApi",
    "ConsoleSession",
    "MemoryCookieStore",
    "TokenCookie",
    "resolve_auth_headers",
]
