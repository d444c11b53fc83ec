"""Analyzer utilities for the in-memory search index.

Mirrors Whoosh's composable tokenizer/filter design. A single analyzer is
used both when indexing documents and when parsing queries, so retrieval is
an exact match on normalized tokens. There is deliberately no stemming and
no synonym expansion.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


@dataclass(frozen=True)
class Token:
    """A normalized term emitted by analyzers."""

    text: str


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class WordTokenizer:
    """Yields maximal runs of word characters.

    Equivalent to replacing every character that is neither a word character
    nor whitespace with a space and splitting on whitespace runs.
    """

    def __init__(self, pattern: str = r"\w+", flags: int = re.UNICODE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for match in self.pattern.finditer(text):
            yield Token(match.group(0))


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield Token(token.text.lower())


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = 2) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if len(token.text) >= self.min_length:
                yield token


DEFAULT_STOPWORDS = [
    "a",
    "an",
    "and",
    "are",
    "as",
    "at",
    "be",
    "but",
    "by",
    "for",
    "if",
    "in",
    "into",
    "is",
    "it",
    "no",
    "not",
    "of",
    "on",
    "or",
    "such",
    "that",
    "the",
    "their",
    "then",
    "there",
    "these",
    "they",
    "this",
    "to",
    "was",
    "will",
    "with",
    "have",
    "has",
    "had",
    "been",
    "being",
]


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = {word.lower() for word in vocab}

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.lower() not in self.stopwords:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        return list(stream)


class StandardAnalyzer:
    """Default analyzer shared by indexing and query parsing.

    Lowercases the whole text before tokenizing, then drops single-character
    tokens and stopwords.
    """

    def __init__(self, *, stopwords: Sequence[str] | None = None, min_length: int = 2) -> None:
        filters: list[TokenFilter] = [LowercaseFilter(), MinLengthFilter(min_length), StopFilter(stopwords)]
        self.pipeline = AnalyzerPipeline(WordTokenizer(), filters)

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        return self.pipeline(text.lower())


_DEFAULT_ANALYZER = StandardAnalyzer()


def tokenize(text: str, analyzer: StandardAnalyzer | None = None) -> list[str]:
    """Return the normalized token texts for ``text`` (duplicates kept, in order).

    Examples:
        >>> tokenize("The Backend-Engineer role, in Go!")
        ['backend', 'engineer', 'role', 'go']
    """
    active = analyzer or _DEFAULT_ANALYZER
    return [token.text for token in active(text)]
