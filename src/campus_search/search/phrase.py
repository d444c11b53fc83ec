"""Quoted phrase handling for search queries.

A phrase is any double-quoted substring of the raw query. Phrases are kept
whole (lowercased, not tokenized) and matched by substring containment
against a document's lowercased title and content, so ``"machine learning"``
only matches documents where the two words are adjacent.
"""

from __future__ import annotations

import re


_PHRASE_PATTERN = re.compile(r'"([^"]+)"')


def extract_phrases(query: str) -> list[str]:
    """Return the lowercased double-quoted phrases of ``query`` in order.

    Examples:
        >>> extract_phrases('senior "Machine Learning" engineer "remote"')
        ['machine learning', 'remote']
        >>> extract_phrases('unterminated "quote')
        []
    """
    if not query:
        return []
    return [match.group(1).lower() for match in _PHRASE_PATTERN.finditer(query)]


def contains_phrase(searchable_text: str, phrase: str) -> bool:
    """Check whether already-lowercased text contains the phrase verbatim."""
    return bool(phrase) and phrase in searchable_text
