"""Shared test fixtures and configuration."""

from datetime import datetime, timezone
import os
from pathlib import Path
import sys

import pytest


FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
if str(FIXTURES_DIR) not in sys.path:
    sys.path.insert(0, str(FIXTURES_DIR))


# Complete test environment that overrides every config value
TEST_ENV = {
    "INDEX_NAME": "test-campus",
    "SEARCH_DEFAULT_LIMIT": "10",
    "SEARCH_MAX_LIMIT": "50",
    "SUGGESTION_LIMIT": "5",
    "POPULAR_TERMS_LIMIT": "10",
    "LOG_LEVEL": "info",
    "LOG_JSON": "true",
    "SLOW_SEARCH_MS": "1000",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from campus_corpus import SAMPLE_DOCUMENTS
from campus_search.search.search_index import SearchIndex


# Reference "now" for recency boosts: two weeks after the newest sample date
FIXED_NOW = datetime(2024, 2, 1, tzinfo=timezone.utc)


def pytest_collection_modifyitems(config, items):
    """Automatically mark all tests in the unit directory as unit tests."""
    for item in items:
        if "unit" in Path(str(item.fspath)).parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset environment variables to test defaults before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def empty_index() -> SearchIndex:
    """A fresh index with a frozen clock and no documents."""
    return SearchIndex("test", clock=lambda: FIXED_NOW)


@pytest.fixture
def sample_index(empty_index) -> SearchIndex:
    """Index preloaded with the sample placement corpus."""
    empty_index.add_documents(SAMPLE_DOCUMENTS)
    return empty_index
