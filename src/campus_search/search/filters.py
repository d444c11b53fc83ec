"""Metadata filters applied to candidate documents.

Every criterion present in the query must hold. A criterion holds when the
document's field contains at least one of the requested values as a
case-insensitive substring. Documents that lack the referenced field fail
the criterion; a missing field is never a wildcard.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from campus_search.domain.model import Document
from campus_search.domain.search import DateRange, SearchFilters
from campus_search.utils.parsing import parse_date


_TEXT_FIELDS: tuple[str, ...] = ("location", "experience", "education", "salary", "category", "status")


def _contains_any(value: str | None, wanted: Sequence[str]) -> bool:
    if not value:
        return False
    haystack = value.lower()
    return any(item.lower() in haystack for item in wanted)


def _skills_match(skills: Sequence[str], wanted: Sequence[str]) -> bool:
    lowered = [skill.lower() for skill in skills]
    return any(any(item.lower() in skill for skill in lowered) for item in wanted)


def _within_range(date_value: str | None, window: DateRange) -> bool:
    published = parse_date(date_value)
    if published is None:
        return False
    start = parse_date(window.start)
    end = parse_date(window.end)
    if start is None or end is None:
        return False
    return start <= published <= end


def matches_filters(document: Document, filters: SearchFilters) -> bool:
    """Check a single document against every active filter."""
    metadata = document.metadata

    for field_name in _TEXT_FIELDS:
        wanted = getattr(filters, field_name)
        if wanted and not _contains_any(getattr(metadata, field_name), wanted):
            return False

    if filters.skills and not _skills_match(metadata.skills, filters.skills):
        return False

    if filters.date_range is not None and not _within_range(metadata.date, filters.date_range):
        return False

    return True


def apply_filters(documents: Iterable[Document], filters: SearchFilters) -> list[Document]:
    """Keep the documents satisfying every active filter, preserving order."""
    return [document for document in documents if matches_filters(document, filters)]
