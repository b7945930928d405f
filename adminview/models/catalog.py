# File: /adminview/models/catalog.py | Version: 1.0 | Title: Reference catalog tables (view layouts + schemaless records)
from __future__ import annotations

from datetime import datetime, UTC
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from adminview.db.base_class import Base


def gen_uuid() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class ViewContent(Base):
    __tablename__ = "view_contents"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    tenant_code: Mapped[str] = mapped_column(String(100), nullable=False)
    tenant_name: Mapped[Optional[str]] = mapped_column(String(255))
    product_code: Mapped[str] = mapped_column(String(100), nullable=False)
    object_code: Mapped[str] = mapped_column(String(100), nullable=False)
    object_display_name: Mapped[Optional[str]] = mapped_column(String(255))
    view_content_code: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # {"children": [LayoutNode, ...]}
    layout: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    fields: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    __table_args__ = (
        UniqueConstraint(
            "tenant_code",
            "product_code",
            "object_code",
            "view_content_code",
            name="uq_view_contents_route",
        ),
    )


class ObjectRecord(Base):
    __tablename__ = "object_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    serial: Mapped[str] = mapped_column(String, unique=True, default=gen_uuid)
    tenant_code: Mapped[str] = mapped_column(String(100), nullable=False)
    product_code: Mapped[str] = mapped_column(String(100), nullable=False)
    object_code: Mapped[str] = mapped_column(String(100), nullable=False)

    # field_code -> scalar
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    created_by: Mapped[Optional[str]] = mapped_column(String(100))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now
    )
    updated_by: Mapped[Optional[str]] = mapped_column(String(100))

    __table_args__ = (
        Index("ix_object_records_scope", "tenant_code", "product_code", "object_code"),
    )
