# File: /adminview/services/columns.py | Version: 1.0 | Title: Table column layout (visibility, min widths, flex column, cells)
from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field as PField

from adminview.core.config import settings
from adminview.schemas.fields import METADATA_COLUMNS, Field

NO_DATA_TEXT = "No data available"


class Column(BaseModel):
    field_code: str
    field_name: str
    min_width: int
    flex: bool = False


class Cell(BaseModel):
    field_code: str
    text: str
    min_width: int
    flex: bool = False


class Placeholder(BaseModel):
    text: str = NO_DATA_TEXT
    colspan: int


class RenderedTable(BaseModel):
    columns: List[Column] = PField(default_factory=list)
    rows: List[List[Cell]] = PField(default_factory=list)
    placeholder: Optional[Placeholder] = None
    total_min_width: int = 0
    flex_column: Optional[str] = None


def min_column_width(field_name: Optional[str]) -> int:
    return len(field_name or "") * 10 + 40


def visible_fields(fields: Sequence[Field], show_metadata: bool) -> List[Field]:
    if show_metadata:
        return list(fields)
    return [f for f in fields if f.field_code not in METADATA_COLUMNS]


def compute_columns(
    fields: Sequence[Field],
    show_metadata: bool = False,
    threshold: Optional[int] = None,
) -> List[Column]:
    """
    Visible columns with their min widths. When the widths sum to strictly
    less than `threshold`, the first visible column is marked flex.
    """
    limit = settings.FLEX_WIDTH_THRESHOLD if threshold is None else threshold
    cols = [
        Column(
            field_code=f.field_code,
            field_name=f.field_name,
            min_width=min_column_width(f.field_name),
        )
        for f in visible_fields(fields, show_metadata)
    ]
    if cols and sum(c.min_width for c in cols) < limit:
        cols[0].flex = True
    return cols


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def _row_value(row: Mapping[str, Any], field_code: str) -> Any:
    cell = row.get(field_code)
    if isinstance(cell, Mapping):
        return cell.get("value")
    # bare scalar instead of {value: ...}
    return cell


def render_table(
    fields: Sequence[Field],
    rows: Sequence[Mapping[str, Any]],
    show_metadata: bool = False,
    threshold: Optional[int] = None,
) -> RenderedTable:
    columns = compute_columns(fields, show_metadata, threshold)
    table = RenderedTable(
        columns=columns,
        total_min_width=sum(c.min_width for c in columns),
        flex_column=next((c.field_code for c in columns if c.flex), None),
    )
    if not rows:
        table.placeholder = Placeholder(colspan=len(columns))
        return table

    for row in rows:
        table.rows.append(
            [
                Cell(
                    field_code=c.field_code,
                    text=cell_text(_row_value(row, c.field_code)),
                    min_width=c.min_width,
                    flex=c.flex,
                )
                for c in columns
            ]
        )
    return table
