# File: /adminview/services/layout.py | Version: 1.0 | Title: Layout interpreter (node dispatch → render tree)
from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from adminview.schemas.layout import LayoutNode, NodeType
from adminview.services.columns import RenderedTable, render_table
from adminview.services.pagination import PageItem


class PagerView(BaseModel):
    current_page: int = 1
    total_pages: int = 1
    items: List[PageItem] = Field(default_factory=list)
    loading: bool = False


class RenderedNode(BaseModel):
    type: str
    kind: NodeType
    class_name: Optional[str] = None
    props: Dict[str, Any] = Field(default_factory=dict)
    table: Optional[RenderedTable] = None
    pager: Optional[PagerView] = None
    children: List["RenderedNode"] = Field(default_factory=list)


RenderedNode.model_rebuild()


def to_label(code: Optional[str]) -> str:
    """`sales_order` / `sales-order` / `salesOrder` → `Sales Order`."""
    if not code:
        return ""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", str(code))
    words = [w for w in re.split(r"[\s_\-]+", spaced) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def page_heading(view_content: Mapping[str, Any], object_code: str) -> str:
    obj = view_content.get("object") if isinstance(view_content, Mapping) else None
    display = obj.get("display_name") if isinstance(obj, Mapping) else None
    return display or to_label(object_code)


def page_title(view_content: Mapping[str, Any], object_code: str) -> str:
    """`"<object> (<view name>) - <tenant name>"`, dropping whatever is missing."""
    title = page_heading(view_content, object_code)
    if not isinstance(view_content, Mapping):
        return title
    name = view_content.get("name")
    tenant = view_content.get("tenant")
    tenant_name = tenant.get("name") if isinstance(tenant, Mapping) else None
    if name:
        title = f"{title} ({name})"
    if tenant_name:
        title = f"{title} - {tenant_name}"
    return title


def _plain_props(node: LayoutNode) -> Dict[str, Any]:
    # `fields` is rendered as the table itself
    return {k: v for k, v in node.props.items() if k != "fields"}


class LayoutInterpreter:
    """
    Walks a server-declared node tree. Table and footer nodes get dedicated
    renderers; every other tag renders as a generic container and still
    recurses into its children. Within a sibling list, footers move after
    the other nodes; everything else keeps the server's order.
    """

    def __init__(
        self,
        rows: Sequence[Mapping[str, Any]] = (),
        pager: Optional[PagerView] = None,
        flex_threshold: Optional[int] = None,
    ):
        self.rows = list(rows)
        self.pager = pager
        self.flex_threshold = flex_threshold

    def render(self, root: LayoutNode) -> List[RenderedNode]:
        return self.render_children(root.children)

    def render_children(self, children: Sequence[LayoutNode]) -> List[RenderedNode]:
        body = [c for c in children if c.kind is not NodeType.footer]
        footers = [c for c in children if c.kind is NodeType.footer]
        return [self.render_node(c) for c in body + footers]

    def render_node(self, node: LayoutNode) -> RenderedNode:
        renderer: Callable[[LayoutInterpreter, LayoutNode], RenderedNode] = _RENDERERS[node.kind]
        return renderer(self, node)

    # ----- renderers -----
    def _render_table(self, node: LayoutNode) -> RenderedNode:
        table = render_table(
            node.fields,
            self.rows,
            show_metadata=node.is_displaying_metadata_column,
            threshold=self.flex_threshold,
        )
        return RenderedNode(
            type=node.type,
            kind=NodeType.table,
            class_name=node.class_name,
            props=_plain_props(node),
            table=table,
            pager=self.pager,
            children=self.render_children(node.children),
        )

    def _render_footer(self, node: LayoutNode) -> RenderedNode:
        return RenderedNode(
            type=node.type,
            kind=NodeType.footer,
            class_name=node.class_name,
            props=_plain_props(node),
            pager=self.pager,
            children=self.render_children(node.children),
        )

    def _render_generic(self, node: LayoutNode) -> RenderedNode:
        return RenderedNode(
            type=node.type,
            kind=NodeType.generic,
            class_name=node.class_name,
            props=_plain_props(node),
            children=self.render_children(node.children),
        )


_RENDERERS: Dict[NodeType, Callable[[LayoutInterpreter, LayoutNode], RenderedNode]] = {
    NodeType.table: LayoutInterpreter._render_table,
    NodeType.footer: LayoutInterpreter._render_footer,
    NodeType.generic: LayoutInterpreter._render_generic,
}

_unhandled = set(NodeType) - set(_RENDERERS)
if _unhandled:  # pragma: no cover
    raise RuntimeError(f"No renderer for node types: {sorted(t.value for t in _unhandled)}")
