"""Search result and catalog snapshot models."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.document import Document


class ScoredDocument(BaseModel):
    """Document paired with its similarity to the query."""

    document: Document
    similarity: float = Field(..., ge=0.0, le=1.0)

    @property
    def percent(self) -> int:
        """Similarity as a rounded percentage."""
        return round(self.similarity * 100)


class MatchResult(BaseModel):
    """Classification of a catalog against one query."""

    exact: list[Document] = Field(default_factory=list, description="Substring matches in catalog order")
    similar: list[ScoredDocument] = Field(
        default_factory=list, description="Fuzzy matches, most similar first"
    )
    suggestion: ScoredDocument | None = Field(
        default=None, description="Closest-named document when nothing else matched"
    )
    query_echo: str | None = Field(default=None, description="Trimmed query, set only with a suggestion")

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to show for the query."""
        return not self.exact and not self.similar and self.suggestion is None

    @property
    def not_found_message(self) -> str | None:
        """Rejection text for the suggestion path."""
        if self.suggestion is None or self.query_echo is None:
            return None
        return (
            f'File "{self.query_echo}" not found. '
            f'You might want to look at "{self.suggestion.document.name}" instead '
            f"({self.suggestion.percent}% name similarity to your search)."
        )


class CatalogSnapshot(BaseModel):
    """The catalog as last loaded."""

    documents: list[Document] = Field(default_factory=list)
    version: int = Field(default=0, description="Increments each time the catalog is replaced")
    last_updated: datetime | None = None
    is_cached: bool = Field(default=False, description="True when the built-in fallback catalog is in use")
    error: str | None = Field(default=None, description="Fetch error that caused the fallback")
    error_status_code: int | None = Field(default=None, description="HTTP status of the fetch error, when there was one")


class CatalogStatistics(BaseModel):
    """Document counts by priority."""

    essential: int
    important: int
    total: int
