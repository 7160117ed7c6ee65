"""Recommendations and statistics shown when no search is active."""

from collections.abc import Sequence

from pydantic import BaseModel

from src.core.config import constants
from src.domain.document import Document, DocumentPriority
from src.domain.search import CatalogStatistics


class LearningStep(BaseModel):
    """One step of the suggested reading order."""

    label: str
    description: str


LEARNING_PATH: list[LearningStep] = [
    LearningStep(label="1. Start with", description="Activity document - foundational concepts"),
    LearningStep(label="2. Apply knowledge", description="Marketing Plan - practical implementation"),
    LearningStep(label="3. Deepen understanding", description="Essay - theoretical background"),
    LearningStep(label="4. Advanced topics", description="CLA 2 - complex scenarios"),
]


def recommended_documents(catalog: Sequence[Document]) -> list[Document]:
    """Return every high-priority document, then the first medium-priority ones."""
    high = [doc for doc in catalog if doc.priority == DocumentPriority.HIGH]
    medium = [doc for doc in catalog if doc.priority == DocumentPriority.MEDIUM]
    return high + medium[: constants.RECOMMENDED_MEDIUM_COUNT]


def catalog_statistics(catalog: Sequence[Document]) -> CatalogStatistics:
    """Count documents by priority."""
    return CatalogStatistics(
        essential=sum(1 for doc in catalog if doc.priority == DocumentPriority.HIGH),
        important=sum(1 for doc in catalog if doc.priority == DocumentPriority.MEDIUM),
        total=len(catalog),
    )
