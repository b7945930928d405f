# File: /adminview/routers/view_sessions.py | Version: 1.0 | Title: View sessions (open, render, paginate, order, refresh)
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import HTMLResponse

from adminview.schemas.query import RouteContext
from adminview.schemas.sessions import OrdersUpdate, PageClick, SessionCreate
from adminview.dependencies import get_session_store
from adminview.services.html import page_html
from adminview.services.session import RenderedPage, SessionStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/view-sessions", tags=["View Sessions"])


@router.post(
    "/{tenant_code}/{product_code}/{object_code}/{view_content_code}",
    response_model=RenderedPage,
    summary="Open a view: fetch layout, then the first page of data",
)
async def open_view_session(
    tenant_code: str,
    product_code: str,
    object_code: str,
    view_content_code: str,
    data: Optional[SessionCreate] = Body(default=None),
    store: SessionStore = Depends(get_session_store),
):
    route = RouteContext(
        tenant_code=tenant_code,
        product_code=product_code,
        object_code=object_code,
        view_content_code=view_content_code,
    )
    session = store.create(route, page_size=data.page_size if data else None)
    log.info("Opened view session", extra={"session_id": session.id, "view": route.view_prefix})
    await session.load()
    return session.render()


@router.get("/{session_id}", response_model=RenderedPage, summary="Current render tree")
def get_view_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).render()


@router.get("/{session_id}/html", response_class=HTMLResponse, summary="Current page as HTML")
def get_view_session_html(session_id: str, store: SessionStore = Depends(get_session_store)):
    return HTMLResponse(page_html(store.get(session_id).render()))


@router.delete("/{session_id}", summary="Close a view session (drops its filter state)")
def close_view_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    store.get(session_id)
    store.drop(session_id)
    return {"detail": "View session closed"}


@router.post("/{session_id}/pages", response_model=RenderedPage, summary="Select a page (0-based)")
async def select_page(
    session_id: str,
    data: PageClick,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    await session.page_clicked(data.selected)
    return session.render()


@router.put("/{session_id}/orders", response_model=RenderedPage, summary="Replace sort order")
async def update_orders(
    session_id: str,
    data: OrdersUpdate,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    await session.set_orders(data.orders)
    return session.render()


@router.post("/{session_id}/refresh", response_model=RenderedPage, summary="Re-run the last query")
async def refresh_view_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    session = store.get(session_id)
    await session.refresh()
    return session.render()
