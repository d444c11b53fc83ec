"""Facet aggregation over a full (unpaginated) result set."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from campus_search.domain.model import Document


FACET_FIELDS: tuple[str, ...] = ("location", "type", "category")


def build_facets(documents: Iterable[Document]) -> dict[str, dict[str, int]]:
    """Count exact field values for the location, type and category facets.

    Documents without a location or category are left out of that facet
    rather than counted under a placeholder bucket, so a facet's counts may
    sum to less than the number of documents.
    """
    locations: Counter[str] = Counter()
    types: Counter[str] = Counter()
    categories: Counter[str] = Counter()

    for document in documents:
        types[document.type] += 1
        if document.metadata.location:
            locations[document.metadata.location] += 1
        if document.metadata.category:
            categories[document.metadata.category] += 1

    return {
        "location": dict(locations),
        "type": dict(types),
        "category": dict(categories),
    }
