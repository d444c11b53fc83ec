"""Result ordering for scored documents."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

from campus_search.domain.search import ScoredDocument, SortSpec
from campus_search.utils.parsing import parse_date, parse_salary


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _date_key(result: ScoredDocument) -> datetime:
    return parse_date(result.document.metadata.date) or _EPOCH


def _title_key(result: ScoredDocument) -> tuple[str, str]:
    title = result.document.title
    return (title.casefold(), title)


def _salary_key(result: ScoredDocument) -> int:
    return parse_salary(result.document.metadata.salary)


_SORT_KEYS: dict[str, Callable[[ScoredDocument], Any]] = {
    "date": _date_key,
    "title": _title_key,
    "salary": _salary_key,
}


def sort_results(results: Sequence[ScoredDocument], sort: SortSpec) -> list[ScoredDocument]:
    """Return a new list ordered per ``sort``.

    Relevance is always best-first regardless of ``sort.order``. All sorts
    are stable, so ties keep candidate order.
    """
    if sort.field == "relevance":
        return sorted(results, key=lambda result: result.score, reverse=True)

    key = _SORT_KEYS[sort.field]
    return sorted(results, key=key, reverse=sort.order == "desc")
