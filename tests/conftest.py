# ruff: noqa: E402
# File: /tests/conftest.py
import asyncio
import pathlib
import sys

# Make repo root importable as "adminview"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import adminview.models  # noqa: F401  (register tables on Base)
from adminview.db.base_class import Base
from adminview.dependencies import get_db, get_session_store
from adminview.main import app
from adminview.services.catalog_client import CatalogClient
from adminview.services.session import SessionStore

TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def _create_schema():
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    connection = engine.connect()
    trans = connection.begin()
    try:
        session = TestingSessionLocal(bind=connection)
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def catalog_client():
    """CatalogClient wired straight into this app's reference catalog routes."""
    client = CatalogClient(
        "http://catalog.test", transport=httpx.ASGITransport(app=app)
    )
    try:
        yield client
    finally:
        asyncio.run(client.aclose())


@pytest.fixture()
def session_store(catalog_client):
    return SessionStore(catalog_client)


@pytest.fixture()
def client(db_session, session_store):
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
