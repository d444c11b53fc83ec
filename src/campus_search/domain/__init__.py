"""Domain layer - pure search data model with no infrastructure dependencies.

This layer contains:
- Documents: the indexed unit with typed metadata
- Query value objects: filters, sort and pagination
- Result value objects: scored documents, facets and statistics
"""

from campus_search.domain.model import DOCUMENT_TYPES, Document, DocumentMetadata, DocumentType
from campus_search.domain.search import (
    DateRange,
    IndexStatistics,
    Pagination,
    ParsedQuery,
    ScoredDocument,
    SearchFilters,
    SearchQuery,
    SearchResult,
    SortSpec,
)


__all__ = [
    "DOCUMENT_TYPES",
    "DateRange",
    "Document",
    "DocumentMetadata",
    "DocumentType",
    "IndexStatistics",
    "Pagination",
    "ParsedQuery",
    "ScoredDocument",
    "SearchFilters",
    "SearchQuery",
    "SearchResult",
    "SortSpec",
]
