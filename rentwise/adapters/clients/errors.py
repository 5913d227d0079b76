# rentwise/adapters/clients/errors.py
from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Base for everything the API client raises."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def server_message(self) -> str | None:
        return None

    @property
    def requires_login(self) -> bool:
        return False


class ApiNetworkError(ApiError):
    """The request never produced a response (DNS, refused, reset...)."""


class ApiHttpError(ApiError):
    def __init__(self, status_code: int, payload: dict[str, Any] | None = None) -> None:
        self.status_code = status_code
        self.payload: dict[str, Any] = payload if isinstance(payload, dict) else {}
        super().__init__(self.server_message or f"HTTP error! status: {status_code}")

    @property
    def server_message(self) -> str | None:
        # Application routes answer {"message": ...}; property routes answer {"error": ...}
        for key in ("message", "error"):
            v = self.payload.get(key)
            if isinstance(v, str) and v.strip():
                return v
        return None


class ApiAuthError(ApiHttpError):
    """401: the session is missing or expired; the UI should send the user to login."""

    @property
    def requires_login(self) -> bool:
        return True


class ApiMalformedResponse(ApiHttpError):
    """A success status whose body is not JSON, or not the record the route answers with."""

    def __init__(self, status_code: int | None = None, detail: str | None = None) -> None:
        self.status_code = status_code
        self.payload = {}
        ApiError.__init__(self, detail or f"Malformed response! status: {status_code}")
