"""Bearer-token aware HTTP client for the chat backend."""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Dict, Mapping

import httpx

from ..config import BackendSettings
from ..exceptions import AuthorizationError, BackendError, TransportError

LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"

FileSpec = tuple[str, bytes, str]


def normalise_base_url(base_url: str | None) -> str:
    base = (base_url or DEFAULT_BASE_URL).strip().rstrip("/")
    return base or DEFAULT_BASE_URL


def auth_headers(token: str | None) -> Dict[str, str]:
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def error_detail(response: httpx.Response) -> str | None:
    """Return the ``detail``/``message`` field of an error body, if any."""

    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("message")
        if detail:
            return str(detail)
    return None


class BackendClient:
    """Issue JSON, form and multipart requests against the backend."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = normalise_base_url(base_url)
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: BackendSettings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "BackendClient":
        return cls(settings.base_url, timeout=settings.request_timeout, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get_json(self, path: str, *, token: str | None = None) -> Dict[str, Any]:
        return await self._request("GET", path, token=token)

    async def post_json(
        self, path: str, payload: Mapping[str, Any], *, token: str | None = None
    ) -> Dict[str, Any]:
        return await self._request("POST", path, token=token, json=dict(payload))

    async def post_form(
        self, path: str, data: Mapping[str, str], *, token: str | None = None
    ) -> Dict[str, Any]:
        return await self._request("POST", path, token=token, data=dict(data))

    async def post_multipart(
        self,
        path: str,
        files: Mapping[str, FileSpec],
        *,
        data: Mapping[str, str] | None = None,
        token: str | None = None,
    ) -> Dict[str, Any]:
        return await self._request("POST", path, token=token, files=dict(files), data=dict(data or {}))

    async def _request(self, method: str, path: str, *, token: str | None, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(method, url, headers=auth_headers(token), **kwargs)
        except httpx.HTTPError as exc:
            LOGGER.warning("Backend unreachable | method=%s path=%s error=%s", method, path, exc)
            raise TransportError(f"Failed to reach backend at {url}: {exc}", cause=exc) from exc

        LOGGER.info(
            "Backend request | method=%s path=%s status=%d duration=%.2fs",
            method,
            path,
            response.status_code,
            perf_counter() - start,
        )
        if response.status_code in (401, 403):
            detail = error_detail(response)
            raise AuthorizationError(
                f"HTTP {response.status_code}: {detail or response.reason_phrase}",
                status_code=response.status_code,
                detail=detail,
            )
        if response.is_error:
            detail = error_detail(response)
            raise BackendError(
                f"HTTP {response.status_code}: {detail or response.reason_phrase}",
                status_code=response.status_code,
                detail=detail,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise BackendError("Unexpected response format", status_code=response.status_code) from exc
        if not isinstance(data, dict):
            raise BackendError("Unexpected response format", status_code=response.status_code)
        return data


__all__ = ["BackendClient", "FileSpec", "auth_headers", "error_detail", "normalise_base_url"]
