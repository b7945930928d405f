# File: /adminview/routers/catalog.py | Version: 1.0 | Title: Reference catalog endpoints (layout record + data pages)
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from adminview.crud.catalog import create_record, get_view_content, layout_payload, query_records
from adminview.dependencies import get_db
from adminview.schemas.query import QueryRequest, RouteContext

log = logging.getLogger(__name__)

router = APIRouter(prefix="/t/{tenant_code}/p/{product_code}/o/{object_code}", tags=["Catalog"])

SUCCESS_MESSAGE = "success"


def _envelope(status_code: int, message: str, data: Optional[Any] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status_code": status_code, "message": message, "data": data},
    )


@router.post("/view/{view_content_code}/record", summary="Layout + field catalogue for a view")
def get_view_layout(
    tenant_code: str,
    product_code: str,
    object_code: str,
    view_content_code: str,
    db: Session = Depends(get_db),
):
    route = RouteContext(
        tenant_code=tenant_code,
        product_code=product_code,
        object_code=object_code,
        view_content_code=view_content_code,
    )
    vc = get_view_content(db, route)
    if vc is None:
        log.info("View content not found: %s", route.layout_path)
        return _envelope(404, "view content not found")
    return _envelope(200, SUCCESS_MESSAGE, layout_payload(vc))


@router.post("/view/{view_content_code}/data", summary="One filtered, ordered page of records")
def get_view_data(
    tenant_code: str,
    product_code: str,
    object_code: str,
    view_content_code: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
):
    try:
        req = QueryRequest.model_validate(payload or {})
    except ValidationError as e:
        log.info("Invalid data request: %s", e.errors()[:1])
        return _envelope(400, "invalid request body")

    # Path identifiers are authoritative
    req.tenant_code = tenant_code
    req.product_code = product_code
    req.object_code = object_code
    req.view_content_code = view_content_code

    return _envelope(200, SUCCESS_MESSAGE, query_records(db, req))


@router.post("/records", summary="Create a record for an object")
def create_object_record(
    tenant_code: str,
    product_code: str,
    object_code: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
):
    data = payload.get("data") if isinstance(payload.get("data"), dict) else payload
    rec = create_record(
        db,
        tenant_code=tenant_code,
        product_code=product_code,
        object_code=object_code,
        data=data,
    )
    return _envelope(200, SUCCESS_MESSAGE, {"id": rec.id, "serial": rec.serial, **rec.data})
