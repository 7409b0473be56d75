"""Logfire cloud observability initialization and instrumentation."""

import logging

import logfire
from fastapi import FastAPI

from podstakes import __version__
from podstakes.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings, app: FastAPI | None = None) -> bool:
    """
    Initialize Logfire and bridge Python logging into it.

    Call once at startup. Instruments:
    - HTTPX clients (Topdeck API)
    - The FastAPI app, when given
    - Python logging (root logger handler)

    Args:
        settings: Application settings containing the Logfire token
        app: Optional FastAPI app to instrument

    Returns:
        True if Logfire was configured, False if it was skipped or failed.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="podstakes",
            service_version=__version__,
        )

        logfire.instrument_httpx()
        if app is not None:
            logfire.instrument_fastapi(app)

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire cloud tracking initialized")
        return True

    except Exception as e:
        # Observability is optional; the server keeps running without it
        logger.warning(f"Failed to initialize Logfire: {e}")
        return False
