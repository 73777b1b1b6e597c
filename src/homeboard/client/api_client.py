# ApiClient — thin async JSON client for the homeboard REST API.
# Created: 2026-10-05

from __future__ import annotations

import logging
from typing import Any

import httpx

from homeboard.client.errors import ApiError
from homeboard.config import get_settings

logger = logging.getLogger(__name__)


class ApiClient:
    """JSON over httpx.

    Non-2xx responses raise :class:`ApiError`.  Transport failures
    (``httpx.ConnectError`` and friends) propagate as raised by httpx.

    Pass *transport* to run against ``httpx.MockTransport`` or an in-process
    ``httpx.ASGITransport``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if base_url is None or timeout is None:
            settings = get_settings()
            base_url = base_url or settings.api_base_url
            timeout = timeout if timeout is not None else settings.http_timeout
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        resp = await self._client.request(method, path, json=json, params=params)
        if resp.is_error:
            error = ApiError.from_response(resp)
            logger.debug("%s %s failed: %s", method, path, error)
            raise error
        if not resp.content:
            return None
        return resp.json()

    async def get(self, path: str, **params: Any) -> Any:
        clean = {k: v for k, v in params.items() if v is not None}
        return await self.request("GET", path, params=clean or None)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
