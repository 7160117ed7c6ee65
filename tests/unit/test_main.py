"""Unit tests for application startup."""

from unittest.mock import AsyncMock, patch

import pytest

from src.core.errors import ErrorCategory, ErrorCode
from src.domain.search import CatalogSnapshot
from src.main import load_initial_catalog
from src.services.catalog_service import catalog_store
from tests.unit.mocks import make_document


@pytest.mark.unit
class TestLoadInitialCatalog:
    """Startup logging of the catalog source."""

    @pytest.mark.asyncio
    async def test_forbidden_fallback_logged_as_rate_limit(self, fallback_catalog):
        snapshot = CatalogSnapshot(
            documents=fallback_catalog,
            version=1,
            is_cached=True,
            error="All APIs failed. Status: 403 Forbidden",
            error_status_code=403,
        )

        with (
            patch.object(catalog_store, "refresh", new_callable=AsyncMock, return_value=snapshot),
            patch("src.main.logger") as mock_logger,
        ):
            await load_initial_catalog()

        mock_logger.warning.assert_called_once()
        extra = mock_logger.warning.call_args.kwargs["extra"]
        assert extra["category"] == ErrorCategory.RATE_LIMIT_EXCEEDED.value
        assert extra["code"] == ErrorCode.ERR_RATE_LIMIT_EXCEEDED

    @pytest.mark.asyncio
    async def test_missing_repository_fallback(self, fallback_catalog):
        snapshot = CatalogSnapshot(
            documents=fallback_catalog,
            version=1,
            is_cached=True,
            error="All APIs failed. Status: 404 Not Found",
            error_status_code=404,
        )

        with (
            patch.object(catalog_store, "refresh", new_callable=AsyncMock, return_value=snapshot),
            patch("src.main.logger") as mock_logger,
        ):
            await load_initial_catalog()

        assert mock_logger.warning.call_args.kwargs["extra"]["category"] == ErrorCategory.REPOSITORY_NOT_FOUND.value

    @pytest.mark.asyncio
    async def test_loaded_catalog_logged_as_info(self):
        snapshot = CatalogSnapshot(documents=[make_document(1, "Essay")], version=1)

        with (
            patch.object(catalog_store, "refresh", new_callable=AsyncMock, return_value=snapshot),
            patch("src.main.logger") as mock_logger,
        ):
            await load_initial_catalog()

        mock_logger.warning.assert_not_called()
        mock_logger.info.assert_called_once_with("startup_catalog_loaded", extra={"documents": 1})
