# File: /adminview/services/session.py | Version: 1.0 | Title: View sessions (per-view state + layout/data orchestration)
from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field

from adminview.core.config import settings
from adminview.core.errors import LayoutNotLoaded, SessionNotFound
from adminview.schemas.fields import FieldCatalog
from adminview.schemas.layout import LayoutNode
from adminview.schemas.query import DataResponse, OrderSpec, RouteContext
from adminview.services.catalog_client import CatalogClient
from adminview.services.fencing import RequestSequencer
from adminview.services.filter_tree import FilterExpressionTree
from adminview.services.layout import (
    LayoutInterpreter,
    PagerView,
    RenderedNode,
    page_heading,
    page_title,
)
from adminview.services.pagination import PageState, PaginationController
from adminview.services.query_builder import build_query_request, request_body

log = logging.getLogger(__name__)

LAYOUT = "layout"
DATA = "data"


class RenderedPage(BaseModel):
    session_id: str
    route: RouteContext
    title: str
    heading: str
    nodes: List[RenderedNode] = Field(default_factory=list)
    pagination: PageState
    filters: Dict[str, Any]
    orders: List[OrderSpec] = Field(default_factory=list)
    errors: Dict[str, str] = Field(default_factory=dict)


class ViewSession:
    """
    State owned by one open view: layout tree, field catalogue, filter
    tree, orders, page state and the last page of rows.

    The layout must load before any data fetch since the data request
    lists the catalogue's fields. Each fetch is sequenced and a response
    that arrives after a newer request of the same kind is dropped.
    """

    def __init__(
        self,
        route: RouteContext,
        client: CatalogClient,
        *,
        page_size: Optional[int] = None,
        session_id: Optional[str] = None,
    ):
        self.id = session_id or str(uuid.uuid4())
        self.route = route
        self.client = client
        self.filters = FilterExpressionTree()
        self.pagination = PaginationController(page_size or settings.PAGE_SIZE)
        self.orders: List[OrderSpec] = []
        self.sequencer = RequestSequencer()

        self.view_content: Dict[str, Any] = {}
        self.layout: Optional[LayoutNode] = None
        self.catalog = FieldCatalog()
        self.rows: List[Dict[str, Any]] = []
        self.layout_error: Optional[str] = None
        self.data_error: Optional[str] = None

    def _log_extra(self, kind: str, seq: int) -> Dict[str, Any]:
        return {"session_id": self.id, "request_kind": kind, "request_seq": seq}

    # ----- fetches -----
    async def load(self) -> None:
        """Layout first; then the current page of data if the layout arrived."""
        seq = self.sequencer.issue(LAYOUT)
        data = await self.client.fetch_layout(self.route)
        if not self.sequencer.is_current(LAYOUT, seq):
            log.info("Discarding stale layout response", extra=self._log_extra(LAYOUT, seq))
            return

        if "error" in data:
            self.layout_error = str(data["error"])
            self.pagination.query_failed()
            return

        # Replaced wholesale on every fetch
        self.layout_error = None
        self.view_content = data.get("view_content") if isinstance(data.get("view_content"), dict) else {}
        self.layout = LayoutNode.parse(data.get("layout"))
        self.catalog = FieldCatalog.from_layout(data)
        log.debug(
            "Layout loaded with %d fields", len(self.catalog), extra=self._log_extra(LAYOUT, seq)
        )

        await self.fetch_data(self.pagination.current_page)

    async def fetch_data(self, page: Optional[int] = None) -> bool:
        """Query one page. Returns False when the response was stale or failed."""
        if self.layout is None:
            raise LayoutNotLoaded()

        requested = self.pagination.request(page)
        req = build_query_request(
            self.catalog,
            self.filters,
            page=requested,
            page_size=self.pagination.page_size,
            route=self.route,
            orders=self.orders,
        )
        seq = self.sequencer.issue(DATA)
        data = await self.client.fetch_data(self.route, request_body(req))
        if not self.sequencer.is_current(DATA, seq):
            log.info("Discarding stale data response", extra=self._log_extra(DATA, seq))
            return False

        if "error" in data:
            self.data_error = str(data["error"])
            self.pagination.query_failed()
            return False

        resp = DataResponse.model_validate(data)
        self.data_error = None
        self.rows = resp.items
        self.pagination.query_completed(resp.page, resp.total_page)
        return True

    async def page_clicked(self, index: int) -> bool:
        return await self.fetch_data(int(index) + 1)

    async def apply_filters(self) -> bool:
        return await self.fetch_data(1)

    async def refresh(self) -> bool:
        if self.layout is None:
            await self.load()
            return self.layout is not None and self.data_error is None
        return await self.fetch_data(self.pagination.requested_page)

    async def set_orders(self, orders: Iterable[OrderSpec]) -> bool:
        self.orders = list(orders)
        return await self.fetch_data(1)

    # ----- output -----
    def render(self) -> RenderedPage:
        pager = PagerView(
            current_page=self.pagination.current_page,
            total_pages=self.pagination.total_pages,
            items=self.pagination.page_window(),
            loading=self.pagination.loading,
        )
        nodes: List[RenderedNode] = []
        if self.layout is not None:
            nodes = LayoutInterpreter(rows=self.rows, pager=pager).render(self.layout)

        errors: Dict[str, str] = {}
        if self.layout_error:
            errors[LAYOUT] = self.layout_error
        if self.data_error:
            errors[DATA] = self.data_error

        return RenderedPage(
            session_id=self.id,
            route=self.route,
            title=page_title(self.view_content, self.route.object_code),
            heading=page_heading(self.view_content, self.route.object_code),
            nodes=nodes,
            pagination=self.pagination.state.model_copy(),
            filters=self.filters.serialize(),
            orders=list(self.orders),
            errors=errors,
        )


class SessionStore:
    """
    In-memory registry of open view sessions; nothing survives a restart.

    Sessions nobody closes explicitly (abandoned tabs, reloads) are evicted
    once idle for `idle_ttl` seconds, and the least recently used one goes
    when `max_open` is reached.
    """

    def __init__(
        self,
        client: CatalogClient,
        *,
        max_open: Optional[int] = None,
        idle_ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.max_open = max(1, max_open if max_open is not None else settings.SESSION_MAX_OPEN)
        ttl = idle_ttl if idle_ttl is not None else settings.SESSION_IDLE_TTL_SECONDS
        self.idle_ttl = max(0.0, float(ttl))
        self._clock = clock
        # session_id -> (session, last access); oldest access first
        self._sessions: OrderedDict[str, Tuple[ViewSession, float]] = OrderedDict()

    def _evict(self) -> None:
        now = self._clock()
        if self.idle_ttl:
            while self._sessions:
                sid, (_, seen) = next(iter(self._sessions.items()))
                if now - seen < self.idle_ttl:
                    break
                del self._sessions[sid]
                log.info("Evicted idle view session", extra={"session_id": sid})
        while len(self._sessions) >= self.max_open:
            sid, _ = self._sessions.popitem(last=False)
            log.info("Evicted least recently used view session", extra={"session_id": sid})

    def create(self, route: RouteContext, page_size: Optional[int] = None) -> ViewSession:
        self._evict()
        session = ViewSession(route, self.client, page_size=page_size)
        self._sessions[session.id] = (session, self._clock())
        return session

    def get(self, session_id: str) -> ViewSession:
        entry = self._sessions.get(session_id)
        if entry is not None and self.idle_ttl and self._clock() - entry[1] >= self.idle_ttl:
            del self._sessions[session_id]
            entry = None
        if entry is None:
            raise SessionNotFound(session_id)
        self._sessions[session_id] = (entry[0], self._clock())
        self._sessions.move_to_end(session_id)
        return entry[0]

    def drop(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
