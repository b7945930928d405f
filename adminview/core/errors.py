# File: /adminview/core/errors.py | Version: 1.0 | Title: Domain exceptions
from __future__ import annotations


class CatalogFetchError(Exception):
    """A call to the catalog backend failed (non-2xx, transport, or bad JSON)."""

    default_message = "Failed to fetch"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = self.default_message if not detail else f"{self.default_message}: {detail}"
        super().__init__(message)


class LayoutFetchFailed(CatalogFetchError):
    default_message = "Failed to fetch layout"


class DataFetchFailed(CatalogFetchError):
    default_message = "Failed to fetch data"


class SessionNotFound(LookupError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"View session {session_id} not found")


class LayoutNotLoaded(RuntimeError):
    """Data was requested before a layout (and so a field catalogue) was available."""

    def __init__(self, message: str = "Layout has not been loaded for this view"):
        super().__init__(message)
