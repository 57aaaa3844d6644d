from __future__ import annotations

import abc
from typing import Any, Dict, Optional

import httpx

from .interface import ConnectorError, ConnectorTimeoutError


class BaseConnector(abc.ABC):
    """Shared HTTP utilities for ledger and backend connectors."""

    def __init__(self, base_url: str, *, timeout: float = 10.0) -> None:
        self.base_url = base_url
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self._timeout)

    async def stop(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("connector not started")
        return self._client

    async def _post_json(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        try:
            resp = await self.client.post(path, json=payload)
        except httpx.TimeoutException as exc:
            raise ConnectorTimeoutError(f"POST {self.base_url}{path} timed out") from exc
        except httpx.HTTPError as exc:
            raise ConnectorError(f"POST {self.base_url}{path} failed: {exc}") from exc
        return resp


__all__ = ["BaseConnector"]
