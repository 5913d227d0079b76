# rentwise/adapters/clients/api_client.py
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ...config import settings
from .errors import ApiAuthError, ApiHttpError, ApiMalformedResponse, ApiNetworkError
from .session import Session

log = logging.getLogger(__name__)


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop None and empty-string values so they never reach the query string."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None and v != ""}


def _safe_json(resp: httpx.Response) -> dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class ApiClient:
    """
    Single-attempt JSON client for the marketplace API.

    - Bearer auth comes from the injected Session (read-only here).
    - Non-2xx -> ApiHttpError (ApiAuthError for 401) carrying the parsed payload.
    - Transport failures -> ApiNetworkError.
    No retries, no backoff; timeout only when configured.
    """

    def __init__(
        self,
        *,
        session: Session,
        base_url: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.session = session
        self.base_url = ((base_url if base_url is not None else settings.RENTWISE_API_URL) or "").rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else settings.HTTP_TIMEOUT_S
        self._transport = transport

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        return {"accept": "application/json", **self.session.auth_headers()}

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
    ) -> Any:
        url = self._url(path)
        query = clean_params(params)
        log.debug(
            "api %s %s params=%s auth=%s",
            method,
            url,
            query,
            "bearer" if self.session.is_authenticated else "none",
        )

        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_s), transport=self._transport) as client:
                resp = await client.request(method, url, headers=self._headers(), params=query or None, json=json)
        except httpx.TransportError as e:
            raise ApiNetworkError(str(e) or type(e).__name__) from e

        if not resp.is_success:
            payload = _safe_json(resp)
            if resp.status_code == 401:
                raise ApiAuthError(resp.status_code, payload)
            raise ApiHttpError(resp.status_code, payload)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            raise ApiMalformedResponse(resp.status_code) from None

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Any | None = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: Any | None = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, *, json: Any | None = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
