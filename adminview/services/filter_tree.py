# File: /adminview/services/filter_tree.py | Version: 1.0 | Title: Interactive nested filter expression (AND/OR groups of predicates)
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from adminview.schemas.filters import (
    BoolOperator,
    FilterGroup,
    FilterOperator,
    GroupPath,
    PredicateLeaf,
    WireGroup,
)

log = logging.getLogger(__name__)

GROUP_KEY_PREFIX = "group_"
LEAF_ATTRS = ("operator", "value")


def next_group_key(existing: Iterable[str]) -> str:
    """Lowest free `group_N` (N >= 1) among `existing`."""
    taken = set(existing)
    n = 1
    while f"{GROUP_KEY_PREFIX}{n}" in taken:
        n += 1
    return f"{GROUP_KEY_PREFIX}{n}"


def _resolve_group(root: FilterGroup, path: Sequence[str]) -> Optional[FilterGroup]:
    node = root
    for key in path:
        child = node.filter_item.get(key)
        if not isinstance(child, FilterGroup):
            return None
        node = child
    return node


def _as_path(group_path: Optional[Iterable[str]]) -> GroupPath:
    if group_path is None:
        return ()
    if isinstance(group_path, str):
        # "group_1/group_2" or "" (root)
        return tuple(p for p in group_path.split("/") if p)
    return tuple(group_path)


class FilterExpressionTree:
    """
    One root FilterGroup owned by a single view session.

    Every mutation works on a private copy of the root and commits it only
    when the edit applied, so readers never observe a half-applied change
    and nothing outside the tree holds a reference into it. Operations that
    name a key or group path that does not resolve are silent no-ops.
    """

    def __init__(self, root: Optional[FilterGroup] = None):
        self._root = root.model_copy(deep=True) if root is not None else FilterGroup()
        self._revision = 0

    # ----- construction -----
    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "FilterExpressionTree":
        return cls(WireGroup.model_validate(payload).to_internal())

    # ----- read side -----
    @property
    def revision(self) -> int:
        """Bumped on every committed edit."""
        return self._revision

    @property
    def is_empty(self) -> bool:
        return not self._root.filter_item

    def snapshot(self) -> FilterGroup:
        return self._root.model_copy(deep=True)

    def serialize(self) -> Dict[str, Any]:
        return self._root.to_wire()

    def get(self, key: str, group_path: Optional[Iterable[str]] = None):
        group = _resolve_group(self._root, _as_path(group_path))
        if group is None:
            return None
        node = group.filter_item.get(key)
        return node.model_copy(deep=True) if node is not None else None

    # ----- commit helper -----
    def _edit(self, group_path: Optional[Iterable[str]], fn) -> Any:
        draft = self._root.model_copy(deep=True)
        group = _resolve_group(draft, _as_path(group_path))
        if group is None:
            log.debug("Filter edit ignored: no group at %r", group_path)
            return None
        result = fn(group)
        if result is not None:
            self._root = draft
            self._revision += 1
        return result

    # ----- mutations -----
    def add_field(
        self, field_code: Optional[str], group_path: Optional[Iterable[str]] = None
    ) -> Optional[str]:
        """Insert (or reset) a `{equal, ""}` predicate under `field_code`."""
        if not field_code:
            return None

        def _apply(group: FilterGroup):
            group.filter_item[field_code] = PredicateLeaf()
            return field_code

        return self._edit(group_path, _apply)

    def add_group(self, group_path: Optional[Iterable[str]] = None) -> Optional[str]:
        """Insert an empty AND group at the lowest free `group_N` of the target group."""

        def _apply(group: FilterGroup):
            key = next_group_key(group.filter_item)
            group.filter_item[key] = FilterGroup()
            return key

        return self._edit(group_path, _apply)

    def update_operator(self, group_path: Optional[Iterable[str]], value: Any) -> bool:
        """Set AND/OR on the group at `group_path`. An invalid operator on a resolvable path raises ValueError."""
        if _resolve_group(self._root, _as_path(group_path)) is None:
            return False
        op = value if isinstance(value, BoolOperator) else BoolOperator(str(value).strip().upper())

        def _apply(group: FilterGroup):
            group.operator = op
            return True

        return bool(self._edit(group_path, _apply))

    def update_field(
        self,
        key: str,
        attr: str,
        value: Any,
        group_path: Optional[Iterable[str]] = None,
    ) -> bool:
        if attr not in LEAF_ATTRS:
            return False
        if attr == "operator":
            # Raises ValueError for operators outside the enumeration
            new_value: Any = FilterOperator(value)
        else:
            new_value = "" if value is None else str(value)

        def _apply(group: FilterGroup):
            leaf = group.filter_item.get(key)
            if not isinstance(leaf, PredicateLeaf):
                return None
            setattr(leaf, attr, new_value)
            return True

        return bool(self._edit(group_path, _apply))

    def delete_field(self, key: str, group_path: Optional[Iterable[str]] = None) -> bool:
        return self._delete(key, PredicateLeaf, group_path)

    def delete_group(self, key: str, group_path: Optional[Iterable[str]] = None) -> bool:
        return self._delete(key, FilterGroup, group_path)

    def _delete(self, key: str, kind: type, group_path) -> bool:
        def _apply(group: FilterGroup):
            if not isinstance(group.filter_item.get(key), kind):
                return None
            del group.filter_item[key]
            return True

        return bool(self._edit(group_path, _apply))

    def reset(self) -> None:
        self._root = FilterGroup()
        self._revision += 1

    def __repr__(self) -> str:
        return f"FilterExpressionTree({self.serialize()!r})"
