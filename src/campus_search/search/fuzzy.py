"""Typo-tolerant "did you mean" matching.

This module implements the character-overlap heuristic used for search
suggestions. It is intentionally NOT an edit distance: two terms are
similar when one contains the other, or when their lengths differ by at
most two and more than 60% of the shorter term's characters appear
somewhere in the longer one.

The heuristic is cheap enough to run over the whole index vocabulary for
a few thousand documents and is kept as-is so suggestion output stays
stable.
"""

from __future__ import annotations

from collections.abc import Iterable


MAX_LENGTH_DIFFERENCE = 2
MIN_SHARED_RATIO = 0.6


def is_similar(term1: str, term2: str) -> bool:
    """Check whether two terms are similar under the overlap heuristic.

    Args:
        term1: First term.
        term2: Second term.

    Returns:
        True if either contains the other, or if their lengths differ by at
        most 2 and more than 60% of the shorter term's characters occur in
        the longer term. Empty terms are never similar.

    Examples:
        >>> is_similar("javascrip", "javascript")
        True
        >>> is_similar("react", "raect")
        True
        >>> is_similar("python", "java")
        False
    """
    if not term1 or not term2:
        return False

    if term1 in term2 or term2 in term1:
        return True

    if len(term1) > len(term2):
        longer, shorter = term1, term2
    else:
        longer, shorter = term2, term1

    if len(longer) - len(shorter) > MAX_LENGTH_DIFFERENCE:
        return False

    # Counts every character of the shorter term found anywhere in the
    # longer one, repeats included.
    common = sum(1 for char in shorter if char in longer)
    return common / len(shorter) > MIN_SHARED_RATIO


def find_similar_terms(
    query_term: str,
    vocabulary: Iterable[str],
    limit: int | None = None,
) -> list[str]:
    """Find vocabulary terms similar to ``query_term``.

    Args:
        query_term: The (possibly misspelled) term.
        vocabulary: Candidate terms, scanned in iteration order.
        limit: Maximum number of matches to return. None means no limit.

    Returns:
        Distinct similar terms in first-seen order, excluding the query term
        itself.
    """
    if not query_term or limit == 0:
        return []

    matches: list[str] = []
    seen: set[str] = set()
    for term in vocabulary:
        if term == query_term or term in seen:
            continue
        if is_similar(query_term, term):
            seen.add(term)
            matches.append(term)
            if limit is not None and len(matches) >= limit:
                break
    return matches
