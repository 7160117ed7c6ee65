"""Configuration management for docsearch."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub Catalog Source
    github_owner: str = Field(default="Talion-101", description="Owner of the repository holding the documents")
    github_repo: str = Field(default="document-search-ui", description="Repository holding the documents")
    github_branch: str = Field(default="main", description="Branch to read the catalog from")
    github_docs_path: str = Field(default="docs", description="Directory inside the repository with the documents")
    github_token: str | None = Field(default=None, description="GitHub token (optional, raises API rate limits)")

    # Matching Thresholds
    similar_threshold: float = Field(
        default=0.4, ge=0.0, le=1.0, description="Minimum similarity (exclusive) for the similar bucket"
    )
    suggestion_threshold: float = Field(
        default=0.2, ge=0.0, le=1.0, description="Minimum name similarity (exclusive) for a not-found suggestion"
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_TIMEOUT_SECONDS: int = 30
    GITHUB_API_BASE_URL: str = "https://api.github.com"
    GITHUB_RAW_BASE_URL: str = "https://raw.githubusercontent.com"
    GITHUB_WEB_BASE_URL: str = "https://github.com"
    GITHUB_ACCEPT_HEADER: str = "application/vnd.github.v3+json"

    # Catalog
    DOCUMENT_EXTENSIONS: tuple[str, ...] = (".docx", ".pdf", ".doc", ".txt", ".md", ".pptx", ".xlsx")
    DOCUMENT_TYPE: str = "DPM"
    BYTES_PER_KB: int = 1024

    # Recommendations
    RECOMMENDED_MEDIUM_COUNT: int = 2  # Medium-priority documents appended after all high-priority ones

    # Search Memo
    SEARCH_CACHE_MAX_ENTRIES: int = 256


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
