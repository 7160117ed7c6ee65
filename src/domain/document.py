"""Document domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class DocumentPriority(StrEnum):
    """How important a document is on the learning path."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DocumentCategory(StrEnum):
    """Topic grouping derived from the document filename."""

    FUNDAMENTALS = "fundamentals"
    ADVANCED = "advanced"
    THEORY = "theory"
    PRACTICAL = "practical"
    GENERAL = "general"


class Document(BaseModel):
    """Catalog document data transfer object."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Position of the document in the catalog listing (1-based)")
    name: str = Field(..., min_length=1, description="Display title (e.g., 'Marketing Plan')")
    description: str = Field(default="", description="Free-text summary")
    type: str = Field(default="", description="Classification tag (e.g., 'DPM')")
    category: DocumentCategory = Field(default=DocumentCategory.GENERAL, description="Topic grouping")
    priority: DocumentPriority = Field(default=DocumentPriority.LOW, description="Learning path priority")
    filename: str = Field(default="", description="Filename including extension")
    size: str = Field(default="Unknown", description="Human-readable size (e.g., '245 KB')")
    last_modified: str = Field(default="", description="ISO date of the last modification")
    download_url: str | None = Field(default=None, description="Raw file URL")
    github_url: str | None = Field(default=None, description="GitHub page for the file")
    learning_value: str = Field(default="", description="Why the document is worth reading")
    sha: str | None = Field(default=None, description="Git blob SHA")
