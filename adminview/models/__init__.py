# File: /adminview/models/__init__.py | Version: 1.0 | Path: /adminview/models/__init__.py
from .catalog import ObjectRecord, ViewContent

__all__ = ["ObjectRecord", "ViewContent"]
