# File: /adminview/schemas/fields.py | Version: 1.0 | Title: Field descriptors & the FieldCatalog
from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

# System-owned audit/id columns, hidden unless a table opts in
METADATA_COLUMNS = frozenset(
    {
        "created_at",
        "created_by",
        "deleted_at",
        "deleted_by",
        "updated_at",
        "updated_by",
        "serial",
        "id",
    }
)


class Field(BaseModel):
    field_code: str
    field_name: str = ""

    # Server may attach field_order, render_config, ...; keep them for the data query
    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def is_metadata(self) -> bool:
        return self.field_code in METADATA_COLUMNS

    def descriptor(self) -> Dict[str, Any]:
        return self.model_dump()


def parse_fields(raw: Any) -> Tuple[Field, ...]:
    """
    Lenient parse of a server `fields` array. Anything that is not a list
    yields no fields; entries without a usable field_code are skipped.
    """
    if not isinstance(raw, (list, tuple)):
        return ()
    out = []
    for item in raw:
        if isinstance(item, Field):
            out.append(item)
            continue
        if not isinstance(item, Mapping) or not item.get("field_code"):
            continue
        data = dict(item)
        if data.get("field_name") is None:
            data["field_name"] = ""
        try:
            out.append(Field.model_validate(data))
        except ValidationError:
            continue
    return tuple(out)


class FieldCatalog:
    """
    Immutable, ordered set of fields discovered in one layout response.
    Codes are unique; the first occurrence wins.
    """

    __slots__ = ("_fields", "_by_code")

    def __init__(self, fields: Iterable[Field] = ()):
        by_code: Dict[str, Field] = {}
        for f in fields:
            by_code.setdefault(f.field_code, f)
        self._by_code = by_code
        self._fields: Tuple[Field, ...] = tuple(by_code.values())

    @classmethod
    def from_layout(
        cls, layout_data: Mapping[str, Any], *, include_metadata: bool = False
    ) -> "FieldCatalog":
        """
        Fold a layout response (`{view_content, layout, fields}`) into a catalogue.

        Table nodes are visited depth-first in document order, then the
        top-level `fields` list. Metadata columns are dropped unless
        `include_metadata` is set or some table node opts in with
        `is_displaying_metadata_column`.
        """
        from adminview.schemas.layout import LayoutNode, NodeType

        layout = layout_data.get("layout") if isinstance(layout_data, Mapping) else None
        root = LayoutNode.parse(layout)

        collected = []
        opted_in = include_metadata
        for node in root.walk():
            if node.kind is NodeType.table:
                collected.extend(node.fields)
                opted_in = opted_in or node.is_displaying_metadata_column
        if isinstance(layout_data, Mapping):
            collected.extend(parse_fields(layout_data.get("fields")))

        if not opted_in:
            collected = [f for f in collected if not f.is_metadata]
        return cls(collected)

    @property
    def fields(self) -> Tuple[Field, ...]:
        return self._fields

    def codes(self) -> Tuple[str, ...]:
        return tuple(self._by_code)

    def get(self, field_code: str) -> Optional[Field]:
        return self._by_code.get(field_code)

    def as_query_fields(self) -> Dict[str, Dict[str, Any]]:
        return {f.field_code: f.descriptor() for f in self._fields}

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_code: object) -> bool:
        return field_code in self._by_code

    def __repr__(self) -> str:
        return f"FieldCatalog({list(self._by_code)!r})"
