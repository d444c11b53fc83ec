"""Relevance scoring for candidate documents.

The score is a simple additive formula rather than BM25:

- every query term contributes its occurrence count in the lowercased
  title + content, doubled when the term also appears in the title;
- every quoted phrase found in the text contributes a flat bonus;
- documents with a ``metadata.date`` get a recency boost that decays
  linearly to zero over one year.

Occurrence counting is substring based, so a term also counts inside a
longer word ("java" inside "javascript").
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from campus_search.domain.model import Document
from campus_search.domain.search import ScoredDocument
from campus_search.utils.parsing import parse_date


TITLE_WEIGHT = 2
BODY_WEIGHT = 1
PHRASE_BONUS = 5.0
RECENCY_WEIGHT = 2.0
RECENCY_WINDOW_DAYS = 365.0
SECONDS_PER_DAY = 86400.0


def count_occurrences(searchable_text: str, term: str) -> int:
    """Count non-overlapping occurrences of ``term`` in lowercased text."""
    if not term:
        return 0
    return searchable_text.count(term)


def recency_boost(date_value: str | None, now: datetime | None = None) -> float:
    """Return the recency bonus for a metadata date.

    ``max(0, 1 - days_since / 365) * 2`` for dates in the past year. Dates
    older than a year, in the future, missing or unparseable get 0.
    """
    published = parse_date(date_value)
    if published is None:
        return 0.0
    reference = now or datetime.now(timezone.utc)
    days_since = (reference - published).total_seconds() / SECONDS_PER_DAY
    if days_since < 0:
        return 0.0
    return max(0.0, 1.0 - days_since / RECENCY_WINDOW_DAYS) * RECENCY_WEIGHT


def score_document(
    document: Document,
    terms: Sequence[str],
    phrases: Sequence[str],
    now: datetime | None = None,
) -> ScoredDocument:
    """Score one document against parsed query terms and phrases."""
    text = document.searchable_text
    title = document.title.lower()
    score = 0.0
    highlights: list[str] = []

    for term in terms:
        occurrences = count_occurrences(text, term)
        weight = TITLE_WEIGHT if term in title else BODY_WEIGHT
        score += occurrences * weight
        if occurrences > 0 and term not in highlights:
            highlights.append(term)

    for phrase in phrases:
        if phrase and phrase in text:
            score += PHRASE_BONUS
            if phrase not in highlights:
                highlights.append(phrase)

    score += recency_boost(document.metadata.date, now)

    return ScoredDocument(document=document, score=round(score, 2), highlights=highlights)


def score_documents(
    documents: Sequence[Document],
    terms: Sequence[str],
    phrases: Sequence[str],
    now: datetime | None = None,
) -> list[ScoredDocument]:
    """Score every candidate with a single shared reference time."""
    reference = now or datetime.now(timezone.utc)
    return [score_document(document, terms, phrases, reference) for document in documents]
