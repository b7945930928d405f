# File: /adminview/dependencies.py | Version: 1.2 | Path: /adminview/dependencies.py
from fastapi import Request

from adminview.db.session import SessionLocal
from adminview.services.session import SessionStore


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store
