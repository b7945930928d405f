# File: /adminview/schemas/__init__.py | Version: 1.0 | Path: /adminview/schemas/__init__.py
from . import fields, filters, layout, query, sessions

__all__ = ["fields", "filters", "layout", "query", "sessions"]
