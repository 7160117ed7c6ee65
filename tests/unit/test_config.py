"""Tests for configuration validation."""

import pytest
from pydantic import ValidationError

from src.core.config import Constants, Settings


def test_defaults_point_at_document_repository() -> None:
    """Test the catalog source defaults."""
    settings = Settings(_env_file=None)

    assert settings.github_owner == "Talion-101"
    assert settings.github_repo == "document-search-ui"
    assert settings.github_branch == "main"
    assert settings.github_docs_path == "docs"


def test_threshold_defaults() -> None:
    """Test matching thresholds default to 0.4 and 0.2."""
    settings = Settings(_env_file=None)

    assert settings.similar_threshold == 0.4
    assert settings.suggestion_threshold == 0.2


@pytest.mark.parametrize("field", ["similar_threshold", "suggestion_threshold"])
@pytest.mark.parametrize("value", [-0.1, 1.5])
def test_thresholds_must_be_in_unit_interval(field: str, value: float) -> None:
    """Test out-of-range thresholds are rejected."""
    with pytest.raises(ValidationError, match=field):
        Settings(_env_file=None, **{field: value})


def test_thresholds_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test thresholds can be configured through the environment."""
    monkeypatch.setenv("SIMILAR_THRESHOLD", "0.55")
    monkeypatch.setenv("SUGGESTION_THRESHOLD", "0.3")

    settings = Settings(_env_file=None)

    assert settings.similar_threshold == 0.55
    assert settings.suggestion_threshold == 0.3

