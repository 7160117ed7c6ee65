"""Pytest configuration and fixtures for unit tests."""

from collections.abc import Generator

import pytest

from src.core.config import settings
from src.services.catalog_service import CatalogStore, catalog_store, fallback_documents


@pytest.fixture
def github_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the GitHub source settings so URLs in assertions are predictable."""
    monkeypatch.setattr(settings, "github_owner", "acme")
    monkeypatch.setattr(settings, "github_repo", "library")
    monkeypatch.setattr(settings, "github_branch", "main")
    monkeypatch.setattr(settings, "github_docs_path", "docs")
    monkeypatch.setattr(settings, "github_token", None)


@pytest.fixture
def store() -> CatalogStore:
    """A fresh catalog store holding the built-in documents."""
    fresh = CatalogStore()
    fresh.replace(fallback_documents())
    return fresh


@pytest.fixture
def global_store() -> Generator[CatalogStore, None, None]:
    """The application's catalog store, loaded with the built-in documents."""
    catalog_store.replace(fallback_documents())
    yield catalog_store
    catalog_store.replace([])
