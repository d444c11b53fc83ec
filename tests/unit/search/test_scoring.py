"""Unit tests for phrase extraction, relevance scoring and sorting."""

from datetime import datetime, timedelta, timezone

import pytest

from campus_search.domain.model import Document
from campus_search.domain.search import ScoredDocument, SortSpec
from campus_search.search.phrase import contains_phrase, extract_phrases
from campus_search.search.scoring import count_occurrences, recency_boost, score_document, score_documents
from campus_search.search.sorting import sort_results


NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _doc(doc_id: str, title: str = "", content: str = "", **metadata) -> Document:
    return Document(id=doc_id, type="drive", title=title, content=content, metadata=metadata)


@pytest.mark.unit
class TestPhrases:
    def test_extracts_lowercased_quoted_phrases(self):
        assert extract_phrases('"Machine Learning" intern "REMOTE"') == ["machine learning", "remote"]

    def test_ignores_unbalanced_and_empty_quotes(self):
        assert extract_phrases('say "" now') == []
        assert extract_phrases('unterminated "quote') == []
        assert extract_phrases("") == []

    def test_contains_phrase_requires_adjacency(self):
        assert contains_phrase("applied machine learning role", "machine learning")
        assert not contains_phrase("machine vision and deep learning", "machine learning")
        assert not contains_phrase("anything", "")


@pytest.mark.unit
class TestCountOccurrences:
    def test_counts_inside_longer_words(self):
        assert count_occurrences("java and javascript", "java") == 2

    def test_non_overlapping(self):
        assert count_occurrences("aaaa", "aa") == 2

    def test_empty_term(self):
        assert count_occurrences("text", "") == 0


@pytest.mark.unit
class TestRecencyBoost:
    def test_today_gets_full_boost(self):
        assert recency_boost("2024-06-01", NOW) == pytest.approx(2.0)

    def test_decays_linearly_over_a_year(self):
        half_year_ago = (NOW - timedelta(days=182.5)).isoformat()

        assert recency_boost(half_year_ago, NOW) == pytest.approx(1.0)

    def test_older_than_a_year_is_zero(self):
        assert recency_boost("2022-01-01", NOW) == 0.0

    def test_future_dates_are_zero(self):
        assert recency_boost("2025-01-01", NOW) == 0.0

    def test_missing_or_garbage_dates_are_zero(self):
        assert recency_boost(None, NOW) == 0.0
        assert recency_boost("soon", NOW) == 0.0


@pytest.mark.unit
class TestScoreDocument:
    def test_title_match_weighs_double(self):
        body_only = _doc("1", title="Intern", content="backend work")
        title_and_body = _doc("2", title="Backend Intern", content="work")

        body_score = score_document(body_only, ["backend"], [], NOW).score
        title_score = score_document(title_and_body, ["backend"], [], NOW).score

        assert body_score == 1
        assert title_score == 2

    def test_title_weight_applies_to_every_occurrence(self):
        doc = _doc("1", title="Python Developer", content="python python")

        # three occurrences, term present in title
        assert score_document(doc, ["python"], [], NOW).score == 6

    def test_phrase_bonus_and_highlights(self):
        doc = _doc("1", title="ML Engineer", content="Applied machine learning in production")

        result = score_document(doc, ["machine", "learning"], ["machine learning"], NOW)

        assert result.score == 7
        assert result.highlights == ["machine", "learning", "machine learning"]

    def test_unmatched_terms_are_not_highlighted(self):
        result = score_document(_doc("1", content="cloud"), ["cloud", "rust"], [], NOW)

        assert result.highlights == ["cloud"]

    def test_highlights_deduplicate_repeated_terms(self):
        result = score_document(_doc("1", content="cloud"), ["cloud", "cloud"], [], NOW)

        assert result.highlights == ["cloud"]
        assert result.score == 2

    def test_recency_is_added_and_rounded(self):
        doc = _doc("1", content="cloud", date="2024-03-01")

        result = score_document(doc, ["cloud"], [], NOW)

        expected = 1 + (1 - 92 / 365) * 2
        assert result.score == round(expected, 2)

    def test_stored_document_is_not_mutated(self):
        doc = _doc("1", content="cloud")

        result = score_document(doc, ["cloud"], [], NOW)

        assert result.document is doc
        assert not hasattr(doc, "score")

    def test_score_documents_scores_each_candidate(self):
        docs = [_doc("1", content="cloud"), _doc("2", content="cloud cloud")]

        assert [r.score for r in score_documents(docs, ["cloud"], [], NOW)] == [1, 2]


def _scored(doc: Document, score: float = 0.0) -> ScoredDocument:
    return ScoredDocument(document=doc, score=score)


@pytest.mark.unit
class TestSortResults:
    def test_relevance_is_descending_and_stable(self):
        results = [_scored(_doc("a"), 1), _scored(_doc("b"), 3), _scored(_doc("c"), 1)]

        ordered = sort_results(results, SortSpec(field="relevance", order="asc"))

        assert [r.document.id for r in ordered] == ["b", "a", "c"]

    def test_date_sort_puts_missing_dates_first_ascending(self):
        results = [
            _scored(_doc("new", date="2024-05-01")),
            _scored(_doc("none")),
            _scored(_doc("old", date="2023-05-01")),
            _scored(_doc("bad", date="whenever")),
        ]

        ascending = sort_results(results, SortSpec(field="date", order="asc"))
        descending = sort_results(results, SortSpec(field="date", order="desc"))

        assert [r.document.id for r in ascending] == ["none", "bad", "old", "new"]
        assert [r.document.id for r in descending][:2] == ["new", "old"]

    def test_title_sort(self):
        results = [_scored(_doc("1", title="beta")), _scored(_doc("2", title="Alpha")), _scored(_doc("3", title="gamma"))]

        ascending = sort_results(results, SortSpec(field="title", order="asc"))
        descending = sort_results(results, SortSpec(field="title", order="desc"))

        assert [r.document.title for r in ascending] == ["Alpha", "beta", "gamma"]
        assert [r.document.title for r in descending] == ["gamma", "beta", "Alpha"]

    def test_salary_sort_uses_leading_number(self):
        results = [
            _scored(_doc("mid", salary="$100,000 - $150,000")),
            _scored(_doc("none")),
            _scored(_doc("high", salary="$120,000 - $180,000")),
            _scored(_doc("text", salary="competitive")),
        ]

        descending = sort_results(results, SortSpec(field="salary", order="desc"))

        assert [r.document.id for r in descending] == ["high", "mid", "none", "text"]
