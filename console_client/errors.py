"""
Normalized client errors.

Every failure of an API call reaches the caller as an ApiError; callers match
on `kind` instead of inspecting exception classes.
"""

AUTH = "auth"
TRANSPORT = "transport"
EMPTY_PAYLOAD = "empty_payload"

ERROR_KINDS = (AUTH, TRANSPORT, EMPTY_PAYLOAD)

TOKEN_NOT_FOUND = "Token not found"


class ApiError(Exception):
    """Failed API call: missing credential, transport failure or empty payload."""

    def __init__(self, kind: str, message: str):
        if kind not in ERROR_KINDS:
            raise ValueError(f"Unknown error kind: {kind}")
        super().__init__(message)
        self.kind = kind
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind!r}, message={self.message!r})"


def token_not_found() -> ApiError:
    return ApiError(AUTH, TOKEN_NOT_FOUND)


def error_message(exc: BaseException, default: str = "An unexpected error occurred") -> str:
    """Message shown to the user for any failure raised by a service call."""
    if isinstance(exc, ApiError):
        return exc.message or default
    text = str(exc)
    return text or default
