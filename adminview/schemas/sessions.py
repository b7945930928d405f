# File: /adminview/schemas/sessions.py | Version: 1.0 | Title: Request/response bodies for view sessions & filter edits
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from adminview.schemas.filters import BoolOperator
from adminview.schemas.query import OrderSpec


class SessionCreate(BaseModel):
    page_size: Optional[int] = Field(default=None, ge=1, le=1000)


class PageClick(BaseModel):
    selected: int = Field(ge=0)  # 0-based, as emitted by the page selector


class OrdersUpdate(BaseModel):
    orders: List[OrderSpec] = Field(default_factory=list)


class AddFieldIn(BaseModel):
    field_code: str = ""
    group_path: List[str] = Field(default_factory=list)


class AddGroupIn(BaseModel):
    group_path: List[str] = Field(default_factory=list)


class OperatorUpdate(BaseModel):
    operator: BoolOperator
    group_path: List[str] = Field(default_factory=list)


class FieldUpdate(BaseModel):
    attr: Literal["operator", "value"]
    value: Any = None
    group_path: List[str] = Field(default_factory=list)


class FilterEditOut(BaseModel):
    applied: bool
    key: Optional[str] = None
    filters: Dict[str, Any]
    requeried: bool = False
