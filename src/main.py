"""docsearch - Typo-tolerant search over a curated document catalog."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from src.core.errors import CatalogFetchError, classify_catalog_error
from src.core.logging import configure_logfire, instrument_fastapi, instrument_httpx
from src.interface.search_router import router as search_router
from src.services.catalog_service import catalog_store


logger = logging.getLogger(__name__)


async def load_initial_catalog() -> None:
    """Load the catalog at startup.

    Never fails: when GitHub is unreachable the built-in catalog is installed
    and the reason is logged.
    """
    snapshot = await catalog_store.refresh()
    if snapshot.is_cached:
        category, error = classify_catalog_error(
            CatalogFetchError(snapshot.error or "", status_code=snapshot.error_status_code)
        )
        logger.warning(
            "startup_catalog_fallback",
            extra={"category": category.value, "code": error.code, "error": snapshot.error},
        )
    else:
        logger.info("startup_catalog_loaded", extra={"documents": len(snapshot.documents)})


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Configure logging first so catalog load logs are captured
    configure_logfire()
    instrument_httpx()

    await load_initial_catalog()
    yield


app = FastAPI(
    title="docsearch",
    description="Typo-tolerant search over a curated document catalog",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(search_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
