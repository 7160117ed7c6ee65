"""Catalog matching: exact, similar and suggestion classification for a query."""

import logging
from collections.abc import Sequence

from pydantic import BaseModel, Field

from src.core.fuzzy_match import similarity
from src.domain.document import Document
from src.domain.search import MatchResult, ScoredDocument


logger = logging.getLogger(__name__)

SIMILAR_THRESHOLD = 0.4
SUGGESTION_THRESHOLD = 0.2


class MatchThresholds(BaseModel):
    """Similarity cut-offs; a score must be strictly greater to qualify."""

    similar: float = Field(default=SIMILAR_THRESHOLD, ge=0.0, le=1.0)
    suggestion: float = Field(default=SUGGESTION_THRESHOLD, ge=0.0, le=1.0)


DEFAULT_THRESHOLDS = MatchThresholds()


def _contains(term: str, document: Document) -> bool:
    return term in document.name.lower() or term in document.type.lower() or term in document.description.lower()


def _best_field_similarity(term: str, document: Document) -> float:
    return max(similarity(term, document.name), similarity(term, document.description))


def _suggest(term: str, catalog: Sequence[Document], threshold: float) -> ScoredDocument | None:
    """Pick the closest-named document, first one on ties."""
    best: Document | None = None
    best_score = 0.0
    for document in catalog:
        score = similarity(term, document.name)
        if best is None or score > best_score:
            best = document
            best_score = score

    if best is None or best_score <= threshold:
        return None
    return ScoredDocument(document=best, similarity=best_score)


def match(
    query: str,
    catalog: Sequence[Document],
    *,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> MatchResult:
    """Classify the catalog against a free-text query.

    Documents whose name, type or description contain the query are exact
    matches. The rest are scored on the better of name and description
    similarity and kept as similar matches above the similar threshold. When
    neither bucket has anything, the closest-named document is offered as a
    suggestion if it clears the (lower) suggestion threshold.

    Args:
        query: User's search text
        catalog: Documents to search, in display order
        thresholds: Similarity cut-offs

    Returns:
        MatchResult; empty when the query is blank
    """
    trimmed = query.strip()
    if not trimmed:
        return MatchResult()

    term = trimmed.lower()
    exact: list[Document] = []
    similar: list[ScoredDocument] = []

    for document in catalog:
        if _contains(term, document):
            exact.append(document)
            continue

        score = _best_field_similarity(term, document)
        if score > thresholds.similar:
            similar.append(ScoredDocument(document=document, similarity=score))

    # sort is stable, so equal scores keep catalog order
    similar.sort(key=lambda scored: scored.similarity, reverse=True)

    if exact or similar:
        return MatchResult(exact=exact, similar=similar)

    suggestion = _suggest(term, catalog, thresholds.suggestion)
    if suggestion is None:
        logger.debug("No match or suggestion", extra={"query": trimmed, "catalog_size": len(catalog)})
        return MatchResult()

    return MatchResult(suggestion=suggestion, query_echo=trimmed)
