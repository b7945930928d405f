# File: /adminview/schemas/query.py | Version: 1.0 | Title: Query payload, routing context & endpoint responses
from __future__ import annotations

from typing import Any, Dict, List, Literal
from urllib.parse import quote

from pydantic import BaseModel, Field, field_validator

from adminview.schemas.filters import WireGroup


class RouteContext(BaseModel):
    tenant_code: str = Field(min_length=1)
    product_code: str = Field(min_length=1)
    object_code: str = Field(min_length=1)
    view_content_code: str = Field(min_length=1)

    @property
    def view_prefix(self) -> str:
        # Each code is one path segment; `/`, `?`, `#` and control chars are escaped
        t, p, o, v = (
            quote(code, safe="")
            for code in (
                self.tenant_code,
                self.product_code,
                self.object_code,
                self.view_content_code,
            )
        )
        return f"/t/{t}/p/{p}/o/{o}/view/{v}"

    @property
    def layout_path(self) -> str:
        return f"{self.view_prefix}/record"

    @property
    def data_path(self) -> str:
        return f"{self.view_prefix}/data"


class OrderSpec(BaseModel):
    field_name: str = Field(min_length=1)
    direction: Literal["asc", "desc"] = "asc"

    @field_validator("direction", mode="before")
    @classmethod
    def _lower(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class QueryRequest(BaseModel):
    """Body of the data endpoint. Built client-side, consumed by the catalog backend."""

    fields: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    filters: List[WireGroup] = Field(default_factory=list)
    orders: List[OrderSpec] = Field(default_factory=list)
    page: int = 1
    page_size: int = 0
    object_code: str = ""
    tenant_code: str = ""
    product_code: str = ""
    view_content_code: str = ""


class DataResponse(BaseModel):
    items: List[Dict[str, Any]] = Field(default_factory=list)
    page: int = 1
    total_page: int = 1
    page_size: int = 0
    total_data: int = 0

    @field_validator("items", mode="before")
    @classmethod
    def _items_list(cls, v: Any) -> List[Any]:
        if not isinstance(v, list):
            return []
        return [row for row in v if isinstance(row, dict)]

    @field_validator("page", "total_page", "page_size", "total_data", mode="before")
    @classmethod
    def _int_or_zero(cls, v: Any) -> int:
        try:
            return int(v)
        except (TypeError, ValueError):
            return 0
