# File: /adminview/services/pagination.py | Version: 1.0 | Title: Page state machine (1-indexed, server-authoritative)
from __future__ import annotations

import logging
from typing import List, Optional, Union

from pydantic import BaseModel, Field

log = logging.getLogger(__name__)

BREAK = "..."

PageItem = Union[int, str]


class PageState(BaseModel):
    current_page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)
    loading: bool = True


def page_window(
    current: int, total: int, margin: int = 2, window: int = 5
) -> List[PageItem]:
    """
    Page selector items: the first/last `margin` pages, `window` pages
    around `current`, and BREAK where a run of pages is skipped.
    A skipped run of a single page is shown as that page.
    """
    total = max(1, total)
    current = min(max(1, current), total)
    if total <= window + 2 * margin:
        return list(range(1, total + 1))

    half = window // 2
    start = max(1, current - half)
    end = min(total, start + window - 1)
    start = max(1, end - window + 1)

    shown = set(range(1, margin + 1))
    shown.update(range(total - margin + 1, total + 1))
    shown.update(range(start, end + 1))

    items: List[PageItem] = []
    prev = 0
    for page in sorted(shown):
        gap = page - prev - 1
        if gap == 1:
            items.append(prev + 1)
        elif gap > 1:
            items.append(BREAK)
        items.append(page)
        prev = page
    return items


class PaginationController:
    """
    Two events drive the state: a page selection in the UI (0-based
    selector index) and a completed query (server page/total win).
    """

    def __init__(self, page_size: int):
        self.state = PageState(page_size=page_size)
        self.requested_page: int = 1

    @property
    def current_page(self) -> int:
        return self.state.current_page

    @property
    def total_pages(self) -> int:
        return self.state.total_pages

    @property
    def page_size(self) -> int:
        return self.state.page_size

    @property
    def loading(self) -> bool:
        return self.state.loading

    def request(self, page: Optional[int] = None) -> int:
        """Mark a query for `page` (default: the current page) as in flight."""
        self.requested_page = max(1, int(page if page is not None else self.state.current_page))
        self.state.loading = True
        return self.requested_page

    def page_clicked(self, index: int) -> int:
        return self.request(int(index) + 1)

    def query_completed(self, server_page: Optional[int], server_total: Optional[int]) -> PageState:
        page = max(1, int(server_page or 1))
        total = max(1, int(server_total or 1))
        if page != self.requested_page:
            log.info("Server answered page %s for requested page %s", page, self.requested_page)
        self.state = PageState(
            current_page=page,
            total_pages=total,
            page_size=self.state.page_size,
            loading=False,
        )
        return self.state

    def query_failed(self) -> None:
        self.state.loading = False

    def page_window(self, margin: int = 2, window: int = 5) -> List[PageItem]:
        return page_window(self.state.current_page, self.state.total_pages, margin, window)
