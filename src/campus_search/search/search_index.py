"""In-memory inverted index for placement search - deep module.

A single class owns the document store, the inverted index and the whole
query pipeline, hiding tokenization, candidate retrieval, filtering,
scoring, sorting, pagination, faceting and suggestions behind a small
interface:

- add_document / add_documents / update_document / remove_document / clear
- search / quick_search
- get_suggestions / get_popular_terms / get_statistics

Each index is an explicit instance owned by its caller; nothing is shared
between instances. The index is not thread-safe: callers that share one
instance across threads must serialize access themselves.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
import logging
import math
import time

from campus_search.domain.model import Document
from campus_search.domain.search import (
    IndexStatistics,
    Pagination,
    ParsedQuery,
    SearchFilters,
    SearchQuery,
    SearchResult,
    SortSpec,
)
from campus_search.observability.metrics import (
    INDEX_DOC_COUNT,
    INDEX_TERM_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    track_latency,
)
from campus_search.observability.tracing import create_span
from campus_search.search.analyzers import StandardAnalyzer
from campus_search.search.facets import build_facets
from campus_search.search.filters import apply_filters
from campus_search.search.fuzzy import find_similar_terms, is_similar
from campus_search.search.phrase import contains_phrase, extract_phrases
from campus_search.search.scoring import score_documents
from campus_search.search.sorting import sort_results


logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SearchIndex:
    """Document store plus token -> document-id postings.

    Invariant: a token has a postings entry if and only if at least one
    stored document's title + content produces it. Removing the last such
    document deletes the entry.
    """

    def __init__(
        self,
        name: str = "campus",
        *,
        analyzer: StandardAnalyzer | None = None,
        clock: Callable[[], datetime] = _utcnow,
        slow_search_ms: float | None = None,
    ) -> None:
        self.name = name
        self._analyzer = analyzer or StandardAnalyzer()
        self._clock = clock
        self._slow_search_ms = slow_search_ms
        self._documents: dict[str, Document] = {}
        self._postings: dict[str, set[str]] = {}

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_document(self, document: Document) -> None:
        """Store ``document`` and index its title + content.

        Re-adding an id replaces the previous version, including its postings.
        """
        previous = self._documents.get(document.id)
        if previous is not None:
            self._unindex(previous)
        self._documents[document.id] = document
        self._index(document)
        logger.debug("Indexed document %s (%s)", document.id, document.type)
        self._publish_size()

    def add_documents(self, documents: Iterable[Document]) -> None:
        """Index many documents one at a time; there is no batch atomicity."""
        count = 0
        for document in documents:
            self.add_document(document)
            count += 1
        logger.info("Bulk indexed %d documents into '%s' (%d total)", count, self.name, len(self._documents))

    def remove_document(self, document_id: str) -> None:
        """Remove a document and its postings. Unknown ids are ignored."""
        document = self._documents.get(document_id)
        if document is None:
            return
        self._unindex(document)
        del self._documents[document_id]
        logger.debug("Removed document %s", document_id)
        self._publish_size()

    def update_document(self, document: Document) -> None:
        """Replace a document: full removal of the old version, then add."""
        self.remove_document(document.id)
        self.add_document(document)

    def clear(self) -> None:
        """Drop every document and posting."""
        self._documents.clear()
        self._postings.clear()
        self._publish_size()

    def get_document(self, document_id: str) -> Document | None:
        return self._documents.get(document_id)

    def _index(self, document: Document) -> None:
        for token in self._tokenize(document.text):
            self._postings.setdefault(token, set()).add(document.id)

    def _unindex(self, document: Document) -> None:
        for token in self._tokenize(document.text):
            doc_ids = self._postings.get(token)
            if doc_ids is None:
                continue
            doc_ids.discard(document.id)
            if not doc_ids:
                del self._postings[token]

    def _tokenize(self, text: str) -> list[str]:
        return [token.text for token in self._analyzer(text)]

    def _publish_size(self) -> None:
        INDEX_DOC_COUNT.labels(index=self.name).set(len(self._documents))
        INDEX_TERM_COUNT.labels(index=self.name).set(len(self._postings))

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def parse_query(self, text: str) -> ParsedQuery:
        """Split free text into normalized terms and quoted phrases."""
        return ParsedQuery(original=text, terms=self._tokenize(text), phrases=extract_phrases(text))

    def search(self, query: SearchQuery) -> SearchResult:
        """Run the full pipeline: retrieve, filter, score, sort, page, facet, suggest."""
        started = time.perf_counter()
        parsed = self.parse_query(query.query)

        with (
            create_span(
                "search.query",
                attributes={
                    "search.index": self.name,
                    "search.type": query.type,
                    "search.terms": len(parsed.terms),
                    "search.phrases": len(parsed.phrases),
                },
            ) as span,
            track_latency(SEARCH_LATENCY, index=self.name),
        ):
            candidates = self._candidates(parsed, query.type)
            candidates = apply_filters(candidates, query.filters)
            scored = score_documents(candidates, parsed.terms, parsed.phrases, self._clock())
            ranked = sort_results(scored, query.sort)

            pagination = query.pagination
            page = ranked[pagination.offset : pagination.offset + pagination.limit]
            facets = build_facets(result.document for result in ranked)
            suggestions = self._suggest(parsed) if not page else None

            span.set_attribute("search.total", len(ranked))
            span.set_attribute("search.returned", len(page))

        elapsed_ms = (time.perf_counter() - started) * 1000
        SEARCH_REQUESTS.labels(index=self.name, outcome="hit" if ranked else "empty").inc()
        logger.debug(
            "Search '%s' on '%s': %d terms, %d phrases, %d matches, page %d (%d returned) in %.2fms",
            query.query,
            self.name,
            len(parsed.terms),
            len(parsed.phrases),
            len(ranked),
            pagination.page,
            len(page),
            elapsed_ms,
        )
        if self._slow_search_ms is not None and elapsed_ms > self._slow_search_ms:
            logger.warning(
                "Slow search on '%s' took %.2fms (threshold %.2fms)",
                self.name,
                elapsed_ms,
                self._slow_search_ms,
                extra={"query_terms": len(parsed.terms), "documents": len(self._documents)},
            )

        return SearchResult(
            documents=page,
            total=len(ranked),
            page=pagination.page,
            total_pages=math.ceil(len(ranked) / pagination.limit),
            facets=facets,
            suggestions=suggestions,
            search_time=round(elapsed_ms, 2),
        )

    def quick_search(self, text: str, type: str = "all", limit: int = 10) -> SearchResult:
        """Relevance-ranked first page with no filters."""
        query = SearchQuery(
            query=text,
            type=type or "all",
            filters=SearchFilters(),
            sort=SortSpec(field="relevance", order="desc"),
            pagination=Pagination(page=1, limit=limit),
        )
        return self.search(query)

    def _candidates(self, parsed: ParsedQuery, doc_type: str) -> list[Document]:
        if doc_type == "all":
            pool = self._documents
        else:
            pool = {doc_id: doc for doc_id, doc in self._documents.items() if doc.type == doc_type}

        if parsed.is_empty:
            return list(pool.values())

        # Strict AND: a term with no postings empties the candidate set
        candidate_ids = set(pool)
        for term in parsed.terms:
            candidate_ids &= self._postings.get(term, set())
            if not candidate_ids:
                return []

        for phrase in parsed.phrases:
            candidate_ids = {
                doc_id for doc_id in candidate_ids if contains_phrase(pool[doc_id].searchable_text, phrase)
            }
            if not candidate_ids:
                return []

        # Store order keeps ranking ties deterministic
        return [doc for doc_id, doc in pool.items() if doc_id in candidate_ids]

    def _suggest(self, parsed: ParsedQuery) -> list[str]:
        suggestions: list[str] = []
        for term in parsed.terms:
            remaining = MAX_SUGGESTIONS - len(suggestions)
            if remaining <= 0:
                break
            vocabulary = (token for token in self._postings if token not in suggestions)
            suggestions.extend(find_similar_terms(term, vocabulary, limit=remaining))
        return suggestions

    # ------------------------------------------------------------------
    # Auxiliary lookups
    # ------------------------------------------------------------------

    def get_suggestions(self, text: str, limit: int = 5) -> list[str]:
        """Suggest stored-document tokens similar to the first query term."""
        terms = self._tokenize(text)
        if not terms or limit <= 0:
            return []
        target = terms[0]

        suggestions: list[str] = []
        seen: set[str] = set()
        for document in self._documents.values():
            for word in self._tokenize(f"{document.content} {document.title}"):
                if word in seen or word == target:
                    continue
                seen.add(word)
                if is_similar(word, target):
                    suggestions.append(word)
                    if len(suggestions) >= limit:
                        return suggestions
        return suggestions

    def get_popular_terms(self, limit: int = 10) -> list[str]:
        """Tokens ranked by how many documents contain them."""
        if limit <= 0:
            return []
        ranked = sorted(self._postings.items(), key=lambda item: len(item[1]), reverse=True)
        return [term for term, _ in ranked[:limit]]

    def get_statistics(self) -> IndexStatistics:
        """Document/term counts, per-type counts and mean document length."""
        by_type = Counter(document.type for document in self._documents.values())
        total = len(self._documents)
        average = 0
        if total:
            total_length = sum(len(document.text) for document in self._documents.values())
            average = int(total_length / total + 0.5)
        return IndexStatistics(
            total_documents=total,
            total_terms=len(self._postings),
            documents_by_type=dict(by_type),
            average_document_length=average,
        )
