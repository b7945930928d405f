# File: /adminview/routers/health.py | Version: 1.1 | Title: Health & readiness endpoints
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from adminview.db.session import engine

router = APIRouter(tags=["Health"])


@router.get("/healthz")
def healthz(request: Request) -> dict:
    """
    Liveness probe: returns 200 if the app can serve requests.
    """
    store = getattr(request.app.state, "session_store", None)
    return {"status": "ok", "open_sessions": len(store) if store is not None else 0}


@router.get("/readyz")
def readyz():
    """
    Readiness probe: 200 if the catalog DB is reachable (SELECT 1 succeeds), else 503.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ok", "db": "ok"}
    except (
        Exception
    ):  # pragma: no cover (error path is best-effort)
        return JSONResponse({"status": "degraded", "db": "error"}, status_code=503)
