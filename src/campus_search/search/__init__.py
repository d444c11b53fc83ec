"""
Search indexing and query engine package.

This package provides a pure-Python, in-memory search stack:
- analyzers: Tokenizer and filters (lowercase, min length, stopwords)
- phrase: Quoted phrase extraction and matching
- filters: Metadata filters (location, skills, date range, ...)
- scoring: Term/title/phrase/recency relevance scoring
- sorting: Relevance, date, title and salary ordering
- facets: Location/type/category facet counts
- fuzzy: Character-overlap "did you mean" heuristic
- search_index: The SearchIndex tying it all together
"""

from campus_search.search.search_index import SearchIndex


__all__ = ["SearchIndex"]
