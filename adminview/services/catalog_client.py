# File: /adminview/services/catalog_client.py | Version: 1.0 | Title: Async HTTP client for the catalog layout/data endpoints
"""
Catalog client

Talks to the catalog backend that serves view layouts and record pages.
Failures never escape the fetch methods: they are logged and handed back
as `{"error": message}` in place of the response data.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from adminview.core.config import settings
from adminview.core.errors import CatalogFetchError, DataFetchFailed, LayoutFetchFailed
from adminview.schemas.query import RouteContext

log = logging.getLogger(__name__)


class CatalogClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Catalog API root (defaults to CATALOG_API_URL)
            timeout: Per-request timeout in seconds
            headers: Extra headers (e.g. an Authorization header from the host app)
            transport: Custom httpx transport, used by tests
        """
        self.base_url = (base_url or settings.CATALOG_API_URL).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json", **(headers or {})},
            timeout=timeout if timeout is not None else settings.CATALOG_API_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def _post(self, path: str, body: Dict[str, Any], error_cls: type) -> Any:
        try:
            response = await self._http.post(path, json=body)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise error_cls(str(e) or e.__class__.__name__) from e

        if response.is_error:
            raise error_cls(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise error_cls("invalid JSON response") from e

        if not isinstance(payload, dict):
            raise error_cls("unexpected response shape")
        return payload.get("data")

    async def fetch_layout(self, route: RouteContext) -> Dict[str, Any]:
        """Layout for a view: `{view_content, layout, fields}` or `{error}`."""
        try:
            data = await self._post(route.layout_path, {}, LayoutFetchFailed)
        except CatalogFetchError as e:
            log.error("Layout API error: %s", e, extra={"view": route.layout_path})
            return {"error": str(e)}
        return data if isinstance(data, dict) else {}

    async def fetch_data(self, route: RouteContext, body: Dict[str, Any]) -> Dict[str, Any]:
        """One page of rows: `{items, page, total_page, ...}` or `{error}`."""
        try:
            data = await self._post(route.data_path, body, DataFetchFailed)
        except CatalogFetchError as e:
            log.error("Data API error: %s", e, extra={"view": route.data_path})
            return {"error": str(e)}
        return data if isinstance(data, dict) else {}

    async def aclose(self) -> None:
        await self._http.aclose()
