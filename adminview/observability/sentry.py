# File: /adminview/observability/sentry.py | Version: 1.1 | Title: Optional Sentry initialization
import logging
import os

log = logging.getLogger(__name__)


def init_sentry_if_configured() -> bool:
    dsn = os.getenv("SENTRY_DSN", "").strip()
    if not dsn:
        log.info("Sentry disabled (no SENTRY_DSN).")
        return False

    try:
        import sentry_sdk
        from sentry_sdk.integrations.logging import LoggingIntegration

        traces = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1"))

        sentry_sdk.init(
            dsn=dsn,
            traces_sample_rate=traces,
            environment=os.getenv("SENTRY_ENVIRONMENT", "development"),
            # Catalog fetch failures are logged at ERROR; ship them as events
            integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
        )
        log.info("Sentry initialized.")
        return True
    except Exception as e:  # pragma: no cover (best-effort)
        log.warning("Sentry init failed: %s", e)
        return False
