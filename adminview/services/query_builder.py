# File: /adminview/services/query_builder.py | Version: 1.0 | Title: Data-endpoint request builder (pure)
from __future__ import annotations

from typing import Iterable, Optional

from adminview.schemas.fields import FieldCatalog
from adminview.schemas.query import OrderSpec, QueryRequest, RouteContext
from adminview.services.filter_tree import FilterExpressionTree


def build_query_request(
    catalog: FieldCatalog,
    filters: FilterExpressionTree,
    *,
    page: int,
    page_size: int,
    route: RouteContext,
    orders: Optional[Iterable[OrderSpec]] = None,
) -> QueryRequest:
    """
    Compose one data request. No I/O. The filter tree goes out as a
    single-element array of top-level groups.
    """
    return QueryRequest(
        fields=catalog.as_query_fields(),
        filters=[filters.serialize()],
        orders=list(orders or []),
        page=page,
        page_size=page_size,
        object_code=route.object_code,
        tenant_code=route.tenant_code,
        product_code=route.product_code,
        view_content_code=route.view_content_code,
    )


def request_body(req: QueryRequest) -> dict:
    return req.model_dump(mode="json")
