"""Logging and observability configuration using Pydantic Logfire.

All modules use Python's standard logging library (logging.getLogger(__name__))
with structured context passed through ``extra``. Logfire captures and enriches
these records once configured.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("task_logged", extra={"task_id": 7})
"""

import logging

import logfire
from fastapi import FastAPI

from choretally import __version__
from choretally.core.config import settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire with token from environment."""
    logfire.configure(
        token=settings.logfire_token,
        service_name="choretally",
        service_version=__version__,
        send_to_logfire="if-token-present",
    )
    logging.basicConfig(level=logging.INFO, handlers=[logfire.LogfireLoggingHandler()])

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def instrument_fastapi(app: FastAPI) -> None:
    """Add Logfire instrumentation to FastAPI application."""
    logfire.instrument_fastapi(app)
    logger = logging.getLogger(__name__)
    logger.info("FastAPI instrumentation configured")


def span(name: str, **attributes: object) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("task_service.log_task", user_id=user_id):
            ...
    """
    return logfire.span(name, **attributes)
