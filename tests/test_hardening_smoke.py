# File: tests/test_hardening_smoke.py | Version: 1.0 | Title: Logging, sentry, health probes and route table smoke
import json
import logging
import sys
import types

from adminview.core.logging import JsonConsole, configure_logging
from adminview.observability.sentry import init_sentry_if_configured


def test_configure_logging_plain_and_json(monkeypatch):
    # Plain text path
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_JSON", "false")
    configure_logging()
    logging.getLogger("adminview.tests").debug("plain-log")
    assert logging.getLogger("adminview").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING

    # JSON path
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_JSON", "true")
    configure_logging()
    logging.getLogger("adminview.tests").info("json-log")
    assert any(isinstance(h.formatter, JsonConsole) for h in logging.getLogger().handlers)


def test_json_formatter_carries_request_extras():
    record = logging.LogRecord(
        "adminview.services.session", logging.INFO, __file__, 1, "Discarding %s", ("stale",), None
    )
    record.session_id = "abc"
    record.request_kind = "data"
    record.request_seq = 3
    out = json.loads(JsonConsole().format(record))
    assert out == {
        "level": "INFO",
        "logger": "adminview.services.session",
        "message": "Discarding stale",
        "session_id": "abc",
        "request_kind": "data",
        "request_seq": 3,
    }


def test_sentry_init_disabled_then_enabled(monkeypatch):
    # Disabled path (no DSN)
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    assert init_sentry_if_configured() is False

    # Enabled path: stub out sentry_sdk and its logging integration so import works.
    calls = {}

    sentry_pkg = types.ModuleType("sentry_sdk")
    sentry_pkg.init = lambda **kwargs: calls.update(kwargs)  # type: ignore[attr-defined]

    integrations_pkg = types.ModuleType("sentry_sdk.integrations")
    logging_pkg = types.ModuleType("sentry_sdk.integrations.logging")

    class LoggingIntegration:
        def __init__(self, level=None, event_level=None):
            self.level = level
            self.event_level = event_level

    logging_pkg.LoggingIntegration = LoggingIntegration  # type: ignore[attr-defined]

    monkeypatch.setitem(sys.modules, "sentry_sdk", sentry_pkg)
    monkeypatch.setitem(sys.modules, "sentry_sdk.integrations", integrations_pkg)
    monkeypatch.setitem(sys.modules, "sentry_sdk.integrations.logging", logging_pkg)

    monkeypatch.setenv("SENTRY_DSN", "https://dummy-public@o0.ingest.sentry.io/0")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.05")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", "test")

    assert init_sentry_if_configured() is True
    assert calls["traces_sample_rate"] == 0.05
    assert calls["environment"] == "test"
    [integration] = calls["integrations"]
    assert integration.event_level == logging.ERROR


def test_health_probes(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "open_sessions": 0}

    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["db"] == "ok"


def test_openapi_has_view_routes(client):
    r = client.get("/openapi.json")
    assert r.status_code == 200, r.text
    paths = r.json().get("paths", {})

    expected = {
        "/view-sessions/{tenant_code}/{product_code}/{object_code}/{view_content_code}": ["post"],
        "/view-sessions/{session_id}": ["get", "delete"],
        "/view-sessions/{session_id}/html": ["get"],
        "/view-sessions/{session_id}/pages": ["post"],
        "/view-sessions/{session_id}/orders": ["put"],
        "/view-sessions/{session_id}/refresh": ["post"],
        "/view-sessions/{session_id}/filters": ["get"],
        "/view-sessions/{session_id}/filters/apply": ["post"],
        "/view-sessions/{session_id}/filters/fields": ["post"],
        "/view-sessions/{session_id}/filters/fields/{key}": ["patch", "delete"],
        "/view-sessions/{session_id}/filters/groups": ["post"],
        "/view-sessions/{session_id}/filters/groups/{key}": ["delete"],
        "/view-sessions/{session_id}/filters/operator": ["patch"],
        "/t/{tenant_code}/p/{product_code}/o/{object_code}/view/{view_content_code}/record": ["post"],
        "/t/{tenant_code}/p/{product_code}/o/{object_code}/view/{view_content_code}/data": ["post"],
    }

    missing = []
    for p, methods in expected.items():
        if p not in paths:
            missing.append(f"{p} (missing path)")
            continue
        present = {m.lower() for m in paths[p].keys()}
        for m in methods:
            if m not in present:
                missing.append(f"{p} missing {m.upper()}")

    assert not missing, "Missing routes: " + ", ".join(missing)
