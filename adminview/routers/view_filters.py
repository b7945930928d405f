# File: /adminview/routers/view_filters.py | Version: 1.0 | Title: Filter expression editing for a view session
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from adminview.core.config import settings
from adminview.dependencies import get_session_store
from adminview.schemas.sessions import (
    AddFieldIn,
    AddGroupIn,
    FieldUpdate,
    FilterEditOut,
    OperatorUpdate,
)
from adminview.services.session import RenderedPage, SessionStore, ViewSession

router = APIRouter(prefix="/view-sessions/{session_id}/filters", tags=["View Filters"])


async def _finish(session: ViewSession, applied: bool, key: Optional[str] = None) -> FilterEditOut:
    requeried = False
    if applied and settings.FILTER_AUTO_APPLY and session.layout is not None:
        await session.apply_filters()
        requeried = True
    return FilterEditOut(
        applied=applied,
        key=key,
        filters=session.filters.serialize(),
        requeried=requeried,
    )


@router.get("", summary="Serialized filter expression")
def get_filters(session_id: str, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).filters.serialize()


@router.post("/apply", response_model=RenderedPage, summary="Re-query page 1 with the current filters")
async def apply_filters(session_id: str, store: SessionStore = Depends(get_session_store)):
    session = store.get(session_id)
    await session.apply_filters()
    return session.render()


@router.post("/fields", response_model=FilterEditOut, summary="Add (or reset) a field predicate")
async def add_filter_field(
    session_id: str,
    data: AddFieldIn,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    key = session.filters.add_field(data.field_code, data.group_path)
    return await _finish(session, key is not None, key)


@router.post("/groups", response_model=FilterEditOut, summary="Add an empty nested group")
async def add_filter_group(
    session_id: str,
    data: AddGroupIn,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    key = session.filters.add_group(data.group_path)
    return await _finish(session, key is not None, key)


@router.patch("/operator", response_model=FilterEditOut, summary="Set a group's AND/OR")
async def update_filter_operator(
    session_id: str,
    data: OperatorUpdate,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    applied = session.filters.update_operator(data.group_path, data.operator)
    return await _finish(session, applied)


@router.patch("/fields/{key}", response_model=FilterEditOut, summary="Set a predicate's operator or value")
async def update_filter_field(
    session_id: str,
    key: str,
    data: FieldUpdate,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    try:
        applied = session.filters.update_field(key, data.attr, data.value, data.group_path)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Unknown filter operator: {data.value}") from e
    return await _finish(session, applied, key)


@router.delete("/fields/{key}", response_model=FilterEditOut, summary="Remove a field predicate")
async def delete_filter_field(
    session_id: str,
    key: str,
    group_path: str = Query(default="", description="Slash-separated group keys, e.g. group_1/group_2"),
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    applied = session.filters.delete_field(key, group_path)
    return await _finish(session, applied, key)


@router.delete("/groups/{key}", response_model=FilterEditOut, summary="Remove a nested group")
async def delete_filter_group(
    session_id: str,
    key: str,
    group_path: str = Query(default="", description="Slash-separated group keys, e.g. group_1/group_2"),
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    applied = session.filters.delete_group(key, group_path)
    return await _finish(session, applied, key)
