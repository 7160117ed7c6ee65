"""Domain models and DTOs."""

from src.domain.document import Document, DocumentCategory, DocumentPriority
from src.domain.search import CatalogSnapshot, CatalogStatistics, MatchResult, ScoredDocument


__all__ = [
    "CatalogSnapshot",
    "CatalogStatistics",
    "Document",
    "DocumentCategory",
    "DocumentPriority",
    "MatchResult",
    "ScoredDocument",
]
