# File: /adminview/services/html.py | Version: 1.0 | Title: Minimal HTML serialization of a rendered page
from __future__ import annotations

from html import escape
from typing import List

from adminview.schemas.layout import NodeType
from adminview.services.columns import RenderedTable
from adminview.services.layout import PagerView, RenderedNode
from adminview.services.pagination import BREAK
from adminview.services.session import RenderedPage


def _cls(class_name) -> str:
    return f' class="{escape(class_name)}"' if class_name else ""


def _width_style(min_width: int, flex: bool) -> str:
    style = f"min-width: {min_width}px"
    if flex:
        style += "; width: 100%"
    return f' style="{style}"'


def table_html(table: RenderedTable) -> str:
    out: List[str] = ["<table>", "<thead><tr>"]
    for col in table.columns:
        out.append(f"<th{_width_style(col.min_width, col.flex)}>{escape(col.field_name)}</th>")
    out.append("</tr></thead><tbody>")
    if table.placeholder is not None:
        out.append(
            f'<tr><td colspan="{max(1, table.placeholder.colspan)}" class="no-data">'
            f"{escape(table.placeholder.text)}</td></tr>"
        )
    for row in table.rows:
        out.append("<tr>")
        for cell in row:
            out.append(f"<td{_width_style(cell.min_width, cell.flex)}>{escape(cell.text)}</td>")
        out.append("</tr>")
    out.append("</tbody></table>")
    return "".join(out)


def pager_html(pager: PagerView) -> str:
    out = ['<nav class="pager">']
    for item in pager.items:
        if item == BREAK:
            out.append(f"<span>{BREAK}</span>")
        elif item == pager.current_page:
            out.append(f'<span class="active" data-selected="{int(item) - 1}">{item}</span>')
        else:
            out.append(f'<a data-selected="{int(item) - 1}">{item}</a>')
    out.append("</nav>")
    return "".join(out)


def node_html(node: RenderedNode) -> str:
    inner = "".join(node_html(c) for c in node.children)
    if node.kind is NodeType.table and node.table is not None:
        pager = pager_html(node.pager) if node.pager is not None else ""
        return f"<section{_cls(node.class_name)}>{table_html(node.table)}{pager}{inner}</section>"
    if node.kind is NodeType.footer:
        return f"<footer{_cls(node.class_name)}>{inner}</footer>"
    return f'<div{_cls(node.class_name)} data-type="{escape(node.type)}">{inner}</div>'


def page_html(page: RenderedPage) -> str:
    body = [f"<h1>{escape(page.heading)}</h1>"]
    for kind, message in page.errors.items():
        body.append(f'<p class="error" data-kind="{escape(kind)}">{escape(message)}</p>')
    body.extend(node_html(n) for n in page.nodes)
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        f"<title>{escape(page.title)}</title></head><body>{''.join(body)}</body></html>"
    )
