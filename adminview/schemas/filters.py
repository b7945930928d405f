# File: /adminview/schemas/filters.py | Version: 1.0 | Title: Filter expression schemas (internal tagged union + wire shape)
from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Discriminator, Field, Tag, field_validator


class FilterOperator(str, Enum):
    equal = "equal"
    contains = "contains"
    greater_than = "greater_than"
    greater_than_equal = "greater_than_equal"
    less_than = "less_than"
    less_than_equal = "less_than_equal"
    empty = "empty"
    not_empty = "not_empty"


class BoolOperator(str, Enum):
    AND = "AND"
    OR = "OR"


def _coerce_bool_operator(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().upper()
    return value


# ----------------------------
# Internal model: explicit Leaf | Group
# ----------------------------
class PredicateLeaf(BaseModel):
    kind: Literal["leaf"] = "leaf"
    operator: FilterOperator = FilterOperator.equal
    value: str = ""

    def to_wire(self) -> Dict[str, Any]:
        return {"value": self.value, "operator": self.operator.value}


class FilterGroup(BaseModel):
    kind: Literal["group"] = "group"
    operator: BoolOperator = BoolOperator.AND
    filter_item: Dict[str, "FilterNode"] = Field(default_factory=dict)

    @field_validator("operator", mode="before")
    @classmethod
    def _normalize_operator(cls, v: Any) -> Any:
        return _coerce_bool_operator(v)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "operator": self.operator.value,
            "filter_item": {k: node.to_wire() for k, node in self.filter_item.items()},
        }


FilterNode = Annotated[Union[PredicateLeaf, FilterGroup], Field(discriminator="kind")]
FilterGroup.model_rebuild()

GroupPath = Tuple[str, ...]


# ----------------------------
# Wire model: leaf vs group decided by presence of `filter_item`
# ----------------------------
def _wire_kind(value: Any) -> str:
    if isinstance(value, dict):
        return "group" if "filter_item" in value else "leaf"
    return "group" if hasattr(value, "filter_item") else "leaf"


class WireLeaf(BaseModel):
    operator: FilterOperator = FilterOperator.equal
    value: Optional[Any] = None


class WireGroup(BaseModel):
    operator: BoolOperator = BoolOperator.AND
    filter_item: Dict[
        str,
        Annotated[
            Union[Annotated["WireGroup", Tag("group")], Annotated[WireLeaf, Tag("leaf")]],
            Discriminator(_wire_kind),
        ],
    ] = Field(default_factory=dict)

    @field_validator("operator", mode="before")
    @classmethod
    def _operator_default(cls, v: Any) -> Any:
        # Missing/blank operator falls back to AND
        if v is None or (isinstance(v, str) and not v.strip()):
            return BoolOperator.AND
        return _coerce_bool_operator(v)

    def to_internal(self) -> FilterGroup:
        items: Dict[str, Any] = {}
        for key, node in self.filter_item.items():
            if isinstance(node, WireGroup):
                items[key] = node.to_internal()
            else:
                value = "" if node.value is None else str(node.value)
                items[key] = PredicateLeaf(operator=node.operator, value=value)
        return FilterGroup(operator=self.operator, filter_item=items)


WireGroup.model_rebuild()

