# File: /adminview/main.py | Version: 1.0 | Title: FastAPI App (view sessions + filters + reference catalog)
from __future__ import annotations

import importlib
import importlib.util
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adminview.core.config import settings
from adminview.core.error_handlers import register_domain_handlers
from adminview.core.logging import configure_logging
from adminview.observability.sentry import init_sentry_if_configured
from adminview.services.catalog_client import CatalogClient
from adminview.services.session import SessionStore

# Initialize logging & observability
configure_logging()
init_sentry_if_configured()

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = CatalogClient()
    app.state.session_store = SessionStore(client)
    log.info("Catalog client ready (%s)", client.base_url)
    try:
        yield
    finally:
        await client.aclose()


# App
app = FastAPI(title="Admin View Renderer", lifespan=lifespan)


def include_if_exists(module_path: str, attr_name: str = "router") -> bool:
    spec = importlib.util.find_spec(module_path)
    if not spec:
        return False
    mod = importlib.import_module(module_path)
    router = getattr(mod, attr_name, None)
    if router is not None:
        app.include_router(router)
        return True
    return False


# Required routers
include_if_exists("adminview.routers.view_sessions")
include_if_exists("adminview.routers.view_filters")
include_if_exists("adminview.routers.health")

# Reference catalog backend (layout + data endpoints)
if settings.ENABLE_CATALOG_API:
    include_if_exists("adminview.routers.catalog")

# Optional standardized error responses
if getattr(settings, "ENABLE_STD_ERRORS", False):
    from adminview.core.error_handlers import register_exception_handlers

    register_exception_handlers(app)

register_domain_handlers(app, standardized=settings.ENABLE_STD_ERRORS)
