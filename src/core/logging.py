"""Logfire setup for docsearch.

Catalog fetches from GitHub run inside spans (`catalog_service.fetch_catalog`
and `catalog_store.refresh`) and the outgoing httpx calls are traced under
them. Search, download and refresh requests log through the standard
`logging` module, and Logfire's handler picks those records up, so modules
only need `logging.getLogger(__name__)`.

Structured fields go through `log_with_context`:
    log_with_context(logger, "info", "Search evaluated", query="activty", catalog_version=3)
"""

import logging

import logfire
from fastapi import FastAPI

from src.core.config import settings


def configure_logfire() -> None:
    """Set up Logfire for the docsearch service.

    Without LOGFIRE_TOKEN nothing is sent and records stay local. Standard
    logging records from the catalog and search modules are routed through
    Logfire's handler at INFO.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name="docsearch",
        service_version="0.1.0",
        environment="production",
        send_to_logfire="if-token-present",
    )
    logging.basicConfig(handlers=[logfire.LogfireLoggingHandler()], level=logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def instrument_fastapi(app: FastAPI) -> None:
    """Add Logfire instrumentation to FastAPI application."""
    logfire.instrument_fastapi(app)
    logger = logging.getLogger(__name__)
    logger.info("FastAPI instrumentation configured")


def instrument_httpx() -> None:
    """Trace outgoing catalog requests made with httpx."""
    logfire.instrument_httpx()
    logger = logging.getLogger(__name__)
    logger.info("httpx instrumentation configured")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("catalog_service.fetch_catalog"):
            # Your service logic here
            pass
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (query, catalog_version, status_code, etc.)

    Usage:
        log_with_context(logger, "info", "Search evaluated", query="essay", exact=1)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
