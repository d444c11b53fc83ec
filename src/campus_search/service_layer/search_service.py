"""Search service orchestration layer.

Sits between the placement API and the in-memory index:
- validates raw query payloads and reports contract violations
- mirrors source-of-truth record changes into the index
- applies configured limits and logging setup
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from pydantic import ValidationError

from campus_search.config import Settings
from campus_search.domain.model import DOCUMENT_TYPES
from campus_search.domain.search import IndexStatistics, SearchQuery, SearchResult
from campus_search.observability.context import get_trace_context, set_trace_context
from campus_search.observability.logging import configure_logging
from campus_search.search.search_index import SearchIndex
from campus_search.service_layer.document_mapping import Record, document_id, get_mapper, resolve_kind


logger = logging.getLogger(__name__)


class InvalidSearchQueryError(ValueError):
    """Raised when a caller submits a malformed search or indexing request."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class UnknownRecordKindError(InvalidSearchQueryError):
    """Raised when records of an unregistered kind are mirrored into the index."""


class SearchService:
    """High-level search API used by request handlers.

    The service owns one ``SearchIndex``. Every create/update/delete on the
    source of truth must be forwarded through ``upsert_record`` /
    ``delete_record`` (or the index rebuilt) or search results drift.
    """

    def __init__(self, settings: Settings | None = None, index: SearchIndex | None = None) -> None:
        self.settings = settings or Settings()
        self.index = index or SearchIndex(self.settings.index_name, slow_search_ms=self.settings.slow_search_ms)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, *, setup_logging: bool = True) -> SearchService:
        """Build a service and configure process logging from ``settings``."""
        active = settings or Settings()
        if setup_logging:
            configure_logging(active.get_log_level(), active.log_json)
        service = cls(active)
        logger.info("Search service ready (index '%s')", service.index.name)
        return service

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def parse_query(self, payload: SearchQuery | Mapping[str, Any]) -> SearchQuery:
        """Validate a raw payload (camelCase or snake_case keys) into a query.

        Raises:
            InvalidSearchQueryError: If the payload is malformed or asks for a
                page larger than the configured maximum.
        """
        if isinstance(payload, SearchQuery):
            query = payload
        else:
            if not isinstance(payload, Mapping):
                raise InvalidSearchQueryError(f"Search query must be an object, got {type(payload).__name__}")
            data = dict(payload)
            pagination = data.get("pagination")
            if pagination is None:
                data["pagination"] = {"page": 1, "limit": self.settings.search_default_limit}
            elif isinstance(pagination, Mapping) and "limit" not in pagination:
                data["pagination"] = {**pagination, "limit": self.settings.search_default_limit}
            try:
                query = SearchQuery.model_validate(data)
            except ValidationError as exc:
                errors = exc.errors(include_url=False)
                logger.info("Rejected search query: %d validation error(s)", len(errors))
                raise InvalidSearchQueryError("Invalid search query", errors) from exc

        if query.pagination.limit > self.settings.search_max_limit:
            raise InvalidSearchQueryError(
                f"Page size {query.pagination.limit} exceeds maximum of {self.settings.search_max_limit}",
                [{"loc": ("pagination", "limit"), "msg": "page size too large", "type": "limit_exceeded"}],
            )
        return query

    def search(self, payload: SearchQuery | Mapping[str, Any]) -> SearchResult:
        """Validate and execute a structured search."""
        query = self.parse_query(payload)
        ctx = get_trace_context()
        set_trace_context(ctx["trace_id"], ctx["span_id"], index=self.index.name)
        return self.index.search(query)

    def quick_search(self, text: str, doc_type: str = "all", limit: int | None = None) -> SearchResult:
        if doc_type != "all" and doc_type not in DOCUMENT_TYPES:
            raise InvalidSearchQueryError(f"Unknown document type '{doc_type}'")
        page_size = limit or self.settings.search_default_limit
        if page_size < 1 or page_size > self.settings.search_max_limit:
            raise InvalidSearchQueryError(
                f"Page size {page_size} must be between 1 and {self.settings.search_max_limit}"
            )
        return self.index.quick_search(text, doc_type, page_size)

    def suggest(self, text: str, limit: int | None = None) -> list[str]:
        return self.index.get_suggestions(text, limit or self.settings.suggestion_limit)

    def popular_terms(self, limit: int | None = None) -> list[str]:
        return self.index.get_popular_terms(limit or self.settings.popular_terms_limit)

    def statistics(self) -> IndexStatistics:
        return self.index.get_statistics()

    # ------------------------------------------------------------------
    # Source-of-truth mirroring
    # ------------------------------------------------------------------

    def _resolve_kind(self, kind: str) -> str:
        try:
            return resolve_kind(kind)
        except ValueError as exc:
            errors = [{"loc": ("kind",), "msg": str(exc), "type": "unknown_kind"}]
            raise UnknownRecordKindError(str(exc), errors) from exc

    def index_records(self, kind: str, records: Iterable[Record]) -> int:
        """Map and add a batch of records of one kind. Returns the count."""
        mapper = get_mapper(self._resolve_kind(kind))
        documents = [mapper(record) for record in records]
        self.index.add_documents(documents)
        return len(documents)

    def upsert_record(self, kind: str, record: Record) -> None:
        """Mirror a create or update of one record."""
        self.index.update_document(get_mapper(self._resolve_kind(kind))(record))

    def delete_record(self, kind: str, record_id: Any) -> None:
        """Mirror a deletion. Unknown records are ignored."""
        self.index.remove_document(document_id(self._resolve_kind(kind), record_id))

    def rebuild(self, records_by_kind: Mapping[str, Iterable[Record]]) -> IndexStatistics:
        """Drop the index and repopulate it from the source of truth.

        Every kind is checked before the index is cleared, so an unknown kind
        leaves the current contents in place.
        """
        for kind in records_by_kind:
            self._resolve_kind(kind)
        self.index.clear()
        for kind, records in records_by_kind.items():
            count = self.index_records(kind, records)
            logger.info("Rebuilt %d %s documents into '%s'", count, kind, self.index.name)
        return self.index.get_statistics()
