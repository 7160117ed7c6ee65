"""Unit tests for catalog matching."""

import pytest

from src.services.search_service import (
    SIMILAR_THRESHOLD,
    SUGGESTION_THRESHOLD,
    MatchThresholds,
    match,
)
from tests.unit.mocks import make_document


@pytest.mark.unit
class TestEmptyQuery:
    """A blank query means no active search."""

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_returns_empty_result(self, query, fallback_catalog):
        result = match(query, fallback_catalog)

        assert result.exact == []
        assert result.similar == []
        assert result.suggestion is None
        assert result.query_echo is None
        assert result.is_empty

    def test_blank_query_on_empty_catalog(self):
        assert match("", []).is_empty


@pytest.mark.unit
class TestExactMatches:
    """Substring containment on name, type and description."""

    def test_name_substring(self):
        activity = make_document(1, "Activity", "Activity document for DPM processes")

        result = match("activity", [activity])

        assert result.exact == [activity]
        assert result.similar == []
        assert result.suggestion is None

    def test_containment_checked_before_fuzzy_scoring(self, fallback_catalog):
        """'cla' is inside 'CLA 2', so it is exact rather than similar or suggested."""
        result = match("cla", fallback_catalog)

        assert [doc.name for doc in result.exact] == ["CLA 2"]
        assert result.similar == []
        assert result.suggestion is None

    def test_type_matches_every_document(self, fallback_catalog):
        result = match("dpm", fallback_catalog)

        assert [doc.id for doc in result.exact] == [1, 2, 3, 4]

    def test_description_substring(self, fallback_catalog):
        result = match("workflow", fallback_catalog)

        assert [doc.name for doc in result.exact] == ["Activity"]

    def test_query_is_trimmed_and_lowercased(self, fallback_catalog):
        result = match("  MARKETING plan ", fallback_catalog)

        assert [doc.name for doc in result.exact] == ["Marketing Plan"]

    def test_exact_keeps_catalog_order(self):
        docs = [make_document(i, f"Report {i}") for i in (3, 1, 2)]

        result = match("report", docs)

        assert [doc.id for doc in result.exact] == [3, 1, 2]

    def test_category_is_not_searched(self):
        doc = make_document(1, "Handbook", category="theory")

        result = match("theory", [doc])

        assert result.exact == []


@pytest.mark.unit
class TestSimilarMatches:
    """Fuzzy matches above the similar threshold."""

    def test_typo_lands_in_similar(self):
        activity = make_document(1, "Activity", "Activity document for DPM processes")

        result = match("activty", [activity])

        assert result.exact == []
        assert len(result.similar) == 1
        assert result.similar[0].document == activity
        assert result.similar[0].similarity == pytest.approx(0.875)
        assert result.suggestion is None
        assert result.query_echo is None

    def test_best_of_name_and_description(self):
        """The description can carry a document the name alone would not."""
        doc = make_document(1, "Handbook", "Essays")

        result = match("essay", [doc])

        # "essays" contains "essay" -> exact through description
        assert result.exact == [doc]

        doc = make_document(2, "Handbook", "Essai")
        result = match("essay", [doc])

        assert result.similar[0].similarity == pytest.approx(0.8)

    def test_sorted_descending_with_stable_ties(self):
        docs = [
            make_document(1, "Documents"),  # 7/9
            make_document(2, "Dokument"),  # 6/8
            make_document(3, "Document"),  # 7/8
            make_document(4, "Document"),  # 7/8, tie with id 3
        ]

        result = match("documant", docs)

        assert [scored.document.id for scored in result.similar] == [3, 4, 1, 2]
        scores = [scored.similarity for scored in result.similar]
        assert scores == sorted(scores, reverse=True)

    def test_exact_documents_are_not_scored_as_similar(self):
        exact = make_document(1, "Essay")
        near = make_document(2, "Essai")

        result = match("essay", [exact, near])

        assert result.exact == [exact]
        assert [scored.document for scored in result.similar] == [near]

    def test_threshold_is_strict(self):
        """'esxyz' vs 'essay' scores exactly 0.4, which does not qualify."""
        doc = make_document(1, "Essay")

        result = match("esxyz", [doc])

        assert result.similar == []

    def test_custom_similar_threshold(self):
        activity = make_document(1, "Activity")

        result = match("activty", [activity], thresholds=MatchThresholds(similar=0.9))

        assert result.similar == []
        # Falls through to the suggestion path instead
        assert result.suggestion is not None
        assert result.suggestion.document == activity


@pytest.mark.unit
class TestSuggestion:
    """Closest-named fallback when nothing else matched."""

    def test_suggestion_with_query_echo(self):
        essay = make_document(1, "Essay")

        result = match("  EsXyz ", [essay])

        assert result.exact == []
        assert result.similar == []
        assert result.suggestion is not None
        assert result.suggestion.document == essay
        assert result.suggestion.similarity == pytest.approx(0.4)
        assert result.query_echo == "EsXyz"
        assert not result.is_empty

    def test_not_found_message_names_query_and_suggestion(self):
        result = match("esxyz", [make_document(1, "Essay")])

        assert result.not_found_message is not None
        assert 'File "esxyz" not found' in result.not_found_message
        assert '"Essay"' in result.not_found_message
        assert "40%" in result.not_found_message

    def test_unrelated_query_gets_no_suggestion(self):
        essay = make_document(1, "Essay", "Comprehensive essay on DPM theoretical foundations")

        result = match("xyz123qweasd", [essay])

        assert result.exact == []
        assert result.similar == []
        assert result.suggestion is None
        assert result.query_echo is None
        assert result.not_found_message is None

    def test_first_document_wins_ties(self):
        first = make_document(1, "Essay")
        second = make_document(2, "Essay")

        result = match("esxyz", [first, second])

        assert result.suggestion is not None
        assert result.suggestion.document.id == 1

    def test_suggestion_uses_name_only(self):
        """A closer description does not win the suggestion; only the name counts."""
        by_name = make_document(1, "Esxqqqqqqq")  # name 0.3
        by_description = make_document(2, "Zzzzzzzzzz", "Essay")  # name 0.1, description 0.4

        result = match("esxyz", [by_description, by_name])

        assert result.similar == []
        assert result.suggestion is not None
        assert result.suggestion.document.id == 1
        assert result.suggestion.similarity == pytest.approx(0.3)

    def test_custom_suggestion_threshold(self):
        result = match("esxyz", [make_document(1, "Essay")], thresholds=MatchThresholds(suggestion=0.5))

        assert result.is_empty

    def test_empty_catalog(self):
        assert match("anything", []).is_empty


@pytest.mark.unit
def test_default_thresholds():
    assert SIMILAR_THRESHOLD == 0.4
    assert SUGGESTION_THRESHOLD == 0.2
    assert MatchThresholds().similar == SIMILAR_THRESHOLD
    assert MatchThresholds().suggestion == SUGGESTION_THRESHOLD


@pytest.mark.unit
@pytest.mark.parametrize("query", ["activity", "activty", "cla", "esxyz", "plan", "marketting", "zzz", "dpm"])
def test_document_appears_in_at_most_one_bucket(query, fallback_catalog):
    result = match(query, fallback_catalog)

    ids = [doc.id for doc in result.exact] + [scored.document.id for scored in result.similar]
    if result.suggestion is not None:
        ids.append(result.suggestion.document.id)
        assert not result.exact
        assert not result.similar

    assert len(ids) == len(set(ids))
