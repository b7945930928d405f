# File: /adminview/schemas/layout.py | Version: 1.0 | Title: Server-declared layout nodes
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adminview.schemas.fields import Field as ColumnField
from adminview.schemas.fields import parse_fields


class NodeType(str, Enum):
    """Known node variants. Anything else the server sends is `generic`."""

    table = "table"
    footer = "footer"
    generic = "generic"

    @classmethod
    def resolve(cls, tag: Optional[str]) -> "NodeType":
        try:
            member = cls(str(tag or "").strip().lower())
        except ValueError:
            return cls.generic
        return member


class LayoutNode(BaseModel):
    type: str = ""
    class_name: Optional[str] = None
    props: Dict[str, Any] = Field(default_factory=dict)
    children: List["LayoutNode"] = Field(default_factory=list)

    # Forward-compatible: keep whatever else the server declares
    model_config = ConfigDict(extra="allow")

    @field_validator("type", mode="before")
    @classmethod
    def _type_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("props", mode="before")
    @classmethod
    def _props_dict(cls, v: Any) -> Dict[str, Any]:
        return v if isinstance(v, dict) else {}

    @field_validator("children", mode="before")
    @classmethod
    def _children_list(cls, v: Any) -> List[Any]:
        if not isinstance(v, (list, tuple)):
            return []
        return [c for c in v if isinstance(c, (dict, LayoutNode))]

    @classmethod
    def parse(cls, raw: Any) -> "LayoutNode":
        """Root container from a `layout` member; anything unusable becomes an empty root."""
        if isinstance(raw, LayoutNode):
            return raw
        if not isinstance(raw, dict):
            return cls()
        return cls.model_validate(raw)

    @property
    def kind(self) -> NodeType:
        return NodeType.resolve(self.type)

    @property
    def fields(self) -> Tuple[ColumnField, ...]:
        return parse_fields(self.props.get("fields"))

    @property
    def is_displaying_metadata_column(self) -> bool:
        return bool(self.props.get("is_displaying_metadata_column"))

    def walk(self) -> Iterator["LayoutNode"]:
        """Depth-first, document order, self first."""
        yield self
        for child in self.children:
            yield from child.walk()


LayoutNode.model_rebuild()
