# File: /adminview/crud/catalog.py | Version: 1.0 | Title: Reference catalog queries (layout lookup + filtered record pages)
from __future__ import annotations

import re
from datetime import datetime
from math import ceil
from typing import Any, Dict, List, Optional

from sqlalchemy import String, and_, cast, func, or_, select
from sqlalchemy.orm import Session

from adminview.models.catalog import ObjectRecord, ViewContent
from adminview.schemas.filters import BoolOperator, FilterOperator, WireGroup, WireLeaf
from adminview.schemas.query import QueryRequest, RouteContext

DEFAULT_PAGE_SIZE = 10

_SAFE_CODE = re.compile(r"^[A-Za-z0-9_]+$")

# Metadata codes live in real columns; everything else in the JSON `data` blob
_COLUMN_MAP = {
    "id": ObjectRecord.id,
    "serial": ObjectRecord.serial,
    "created_at": ObjectRecord.created_at,
    "created_by": ObjectRecord.created_by,
    "updated_at": ObjectRecord.updated_at,
    "updated_by": ObjectRecord.updated_by,
}


# ----------------------------
# View contents
# ----------------------------
def get_view_content(db: Session, route: RouteContext) -> Optional[ViewContent]:
    return (
        db.query(ViewContent)
        .filter(
            ViewContent.tenant_code == route.tenant_code,
            ViewContent.product_code == route.product_code,
            ViewContent.object_code == route.object_code,
            ViewContent.view_content_code == route.view_content_code,
        )
        .first()
    )


def upsert_view_content(
    db: Session,
    route: RouteContext,
    *,
    name: str,
    layout: Dict[str, Any],
    fields: Optional[List[Dict[str, Any]]] = None,
    object_display_name: Optional[str] = None,
    tenant_name: Optional[str] = None,
) -> ViewContent:
    vc = get_view_content(db, route)
    if vc is None:
        vc = ViewContent(
            tenant_code=route.tenant_code,
            product_code=route.product_code,
            object_code=route.object_code,
            view_content_code=route.view_content_code,
        )
        db.add(vc)
    vc.name = name
    vc.layout = layout
    vc.fields = fields or []
    vc.object_display_name = object_display_name
    vc.tenant_name = tenant_name
    db.commit()
    db.refresh(vc)
    return vc


def layout_payload(vc: ViewContent) -> Dict[str, Any]:
    return {
        "view_content": {
            "code": vc.view_content_code,
            "name": vc.name,
            "object": {"code": vc.object_code, "display_name": vc.object_display_name},
            "tenant": {"code": vc.tenant_code, "name": vc.tenant_name},
            "product": {"code": vc.product_code},
        },
        "layout": vc.layout or {"children": []},
        "fields": vc.fields or [],
    }


# ----------------------------
# Records
# ----------------------------
def create_record(
    db: Session,
    *,
    tenant_code: str,
    product_code: str,
    object_code: str,
    data: Dict[str, Any],
    created_by: str = "system",
) -> ObjectRecord:
    rec = ObjectRecord(
        tenant_code=tenant_code,
        product_code=product_code,
        object_code=object_code,
        data=dict(data),
        created_by=created_by,
        updated_by=created_by,
    )
    db.add(rec)
    db.commit()
    db.refresh(rec)
    return rec


def _field_expr(field_code: str):
    col = _COLUMN_MAP.get(field_code)
    if col is not None:
        return col
    if not _SAFE_CODE.match(field_code or ""):
        return None
    return func.json_extract(ObjectRecord.data, f'$."{field_code}"')


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _leaf_expr(field_code: str, leaf: WireLeaf):
    col = _field_expr(field_code)
    if col is None:
        return None
    op = leaf.operator
    val = leaf.value
    text = cast(col, String)

    if op == FilterOperator.empty:
        return or_(col.is_(None), text == "")
    if op == FilterOperator.not_empty:
        return and_(col.is_not(None), text != "")
    if op == FilterOperator.equal:
        return text == ("" if val is None else str(val))
    if op == FilterOperator.contains:
        return func.lower(text, type_=String).contains(str(val or "").lower())

    num = _as_number(val)
    target = num if num is not None else str(val or "")
    if op == FilterOperator.greater_than:
        return col > target
    if op == FilterOperator.greater_than_equal:
        return col >= target
    if op == FilterOperator.less_than:
        return col < target
    if op == FilterOperator.less_than_equal:
        return col <= target
    return None


def group_expr(group: WireGroup):
    """AND/OR over a group's predicates and nested groups; None when nothing applies."""
    exprs = []
    for key, node in group.filter_item.items():
        if isinstance(node, WireGroup):
            e = group_expr(node)
        else:
            e = _leaf_expr(key, node)
        if e is not None:
            exprs.append(e)
    if not exprs:
        return None
    return or_(*exprs) if group.operator == BoolOperator.OR else and_(*exprs)


def _apply_scope(q, req: QueryRequest):
    return q.where(
        ObjectRecord.tenant_code == req.tenant_code,
        ObjectRecord.product_code == req.product_code,
        ObjectRecord.object_code == req.object_code,
    )


def _apply_filters(q, req: QueryRequest):
    # Top-level groups are ANDed together
    exprs = [e for e in (group_expr(g) for g in req.filters) if e is not None]
    if exprs:
        q = q.where(and_(*exprs))
    return q


def _apply_orders(q, req: QueryRequest):
    for order in req.orders:
        col = _field_expr(order.field_name)
        if col is None:
            continue
        q = q.order_by(col.desc() if order.direction == "desc" else col.asc())
    return q.order_by(ObjectRecord.id.asc())


def _cell_value(rec: ObjectRecord, field_code: str) -> Any:
    if field_code in _COLUMN_MAP:
        value = getattr(rec, field_code)
        return value.isoformat() if isinstance(value, datetime) else value
    return (rec.data or {}).get(field_code)


def _row(rec: ObjectRecord, codes: List[str]) -> Dict[str, Dict[str, Any]]:
    if not codes:
        codes = list(_COLUMN_MAP) + list((rec.data or {}).keys())
    return {code: {"value": _cell_value(rec, code)} for code in codes}


def query_records(db: Session, req: QueryRequest) -> Dict[str, Any]:
    page_size = req.page_size if req.page_size >= 1 else DEFAULT_PAGE_SIZE
    page = req.page if req.page >= 1 else 1

    base = _apply_filters(_apply_scope(select(ObjectRecord), req), req)
    total = db.execute(select(func.count()).select_from(base.subquery())).scalar_one()

    q = _apply_orders(base, req).offset((page - 1) * page_size).limit(page_size)
    rows = list(db.execute(q).scalars().all())

    codes = list(req.fields.keys())
    return {
        "items": [_row(r, codes) for r in rows],
        "page": page,
        "page_size": page_size,
        "total_data": total,
        "total_page": ceil(total / page_size),
    }
