"""Pytest configuration and shared fixtures."""

import pytest

from src.domain.document import Document
from src.services.catalog_service import fallback_documents


@pytest.fixture
def fallback_catalog() -> list[Document]:
    """The four built-in documents (Activity, CLA 2, Essay, Marketing Plan)."""
    return fallback_documents()
