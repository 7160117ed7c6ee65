"""HTTP routes for searching and browsing the document catalog."""

import logging
from datetime import datetime

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field

from src.core.errors import DocumentNotFoundError, classify_catalog_error
from src.core.logging import log_with_context
from src.domain.document import Document
from src.domain.search import CatalogStatistics, ScoredDocument
from src.services.catalog_service import catalog_store, resolve_download
from src.services.recommendation_service import (
    LEARNING_PATH,
    LearningStep,
    catalog_statistics,
    recommended_documents,
)


logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

NO_RESULTS_MESSAGE = "No documents found"


class SearchResponse(BaseModel):
    """Search results for one query."""

    query: str
    exact: list[Document] = Field(default_factory=list)
    similar: list[ScoredDocument] = Field(default_factory=list)
    suggestion: ScoredDocument | None = None
    query_echo: str | None = None
    message: str | None = Field(None, description="Not-found text, set when nothing matched directly")


class CatalogResponse(BaseModel):
    """Current catalog with its load status."""

    documents: list[Document]
    version: int
    last_updated: datetime | None
    is_cached: bool
    error: str | None


class RefreshResponse(BaseModel):
    """Summary of a catalog reload."""

    version: int
    documents: int
    is_cached: bool
    error: str | None


class RecommendationsResponse(BaseModel):
    """Documents to read first and the suggested order."""

    documents: list[Document]
    learning_path: list[LearningStep]


@router.get("/search")
def search_documents(q: str = Query(default="", description="Free-text query")) -> SearchResponse:
    """Search the catalog by name, type or description, tolerating typos."""
    result = catalog_store.search(q)

    message = result.not_found_message
    if message is None and q.strip() and result.is_empty:
        message = NO_RESULTS_MESSAGE

    log_with_context(
        logger,
        "info",
        "search_evaluated",
        query=q.strip(),
        exact=len(result.exact),
        similar=len(result.similar),
        suggested=result.suggestion is not None,
    )
    return SearchResponse(
        query=q,
        exact=result.exact,
        similar=result.similar,
        suggestion=result.suggestion,
        query_echo=result.query_echo,
        message=message,
    )


@router.get("/documents")
def list_documents() -> CatalogResponse:
    """Return the catalog currently served."""
    snapshot = catalog_store.snapshot
    return CatalogResponse(
        documents=snapshot.documents,
        version=snapshot.version,
        last_updated=snapshot.last_updated,
        is_cached=snapshot.is_cached,
        error=snapshot.error,
    )


@router.get("/documents/{document_id}/download", response_model=None)
def download_document(document_id: int) -> RedirectResponse | JSONResponse:
    """Redirect to the raw file of a document."""
    try:
        document = catalog_store.get_document(document_id)
        link = resolve_download(document)
    except DocumentNotFoundError as e:
        logger.warning("download_not_found", extra={"document_id": document_id, "error": str(e)})
        _, error = classify_catalog_error(e)
        return JSONResponse(content=error.model_dump(mode="json"), status_code=status.HTTP_404_NOT_FOUND)

    return RedirectResponse(url=link.url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/recommendations")
def get_recommendations() -> RecommendationsResponse:
    """Documents to start with when no search is active."""
    return RecommendationsResponse(
        documents=recommended_documents(catalog_store.snapshot.documents),
        learning_path=LEARNING_PATH,
    )


@router.get("/stats")
def get_statistics() -> CatalogStatistics:
    """Document counts by priority."""
    return catalog_statistics(catalog_store.snapshot.documents)


@router.post("/catalog/refresh")
async def refresh_catalog() -> RefreshResponse:
    """Reload the catalog from GitHub."""
    snapshot = await catalog_store.refresh()
    return RefreshResponse(
        version=snapshot.version,
        documents=len(snapshot.documents),
        is_cached=snapshot.is_cached,
        error=snapshot.error,
    )
