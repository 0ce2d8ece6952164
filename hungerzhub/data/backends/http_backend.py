from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import httpx

from ..interface import RemoteDataSource, RowId
from ..models import Collection

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class HttpDataSource(RemoteDataSource):
    """
    REST-backed implementation.
    - One resource per collection: ``/tables``, ``/menu_items``, ``/orders``.
    - Reads are cache-busted with a millisecond ``_`` query parameter and no-cache headers.
    - Non-2xx responses raise ``httpx.HTTPStatusError``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not base_url:
            raise ValueError("HttpDataSource requires a base_url (set API_BASE_URL)")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        # Lazy so the client binds to the running event loop
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _path(collection: Collection, row_id: Optional[RowId] = None) -> str:
        if row_id is None:
            return f"/{collection.value}"
        return f"/{collection.value}/{row_id}"

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        return response.json()

    # ---------- interface implementation ----------

    async def list(self, collection: Collection) -> Any:
        client = self._get_client()
        response = await client.get(
            self._path(collection),
            params={"_": int(time.time() * 1000)},
            headers=NO_CACHE_HEADERS,
        )
        response.raise_for_status()
        return response.json()

    async def replace(self, collection: Collection, rows: List[Dict[str, Any]]) -> None:
        client = self._get_client()
        response = await client.put(self._path(collection), json=rows)
        response.raise_for_status()

    async def create(self, collection: Collection, row: Dict[str, Any]) -> Any:
        client = self._get_client()
        response = await client.post(self._path(collection), json=row)
        response.raise_for_status()
        return self._body(response)

    async def update(self, collection: Collection, row_id: RowId, row: Dict[str, Any]) -> Any:
        client = self._get_client()
        response = await client.put(self._path(collection, row_id), json=row)
        response.raise_for_status()
        return self._body(response)

    async def delete(self, collection: Collection, row_id: RowId) -> None:
        client = self._get_client()
        response = await client.delete(self._path(collection, row_id))
        response.raise_for_status()
