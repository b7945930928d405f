# File: /adminview/__init__.py | Version: 1.0 | Path: /adminview/__init__.py
