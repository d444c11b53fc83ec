"""Unit tests for environment-driven settings."""

from pydantic import ValidationError
import pytest

from campus_search.config import Settings


pytestmark = pytest.mark.unit


class TestSettings:
    def test_loads_from_environment(self):
        settings = Settings()

        assert settings.index_name == "test-campus"
        assert settings.search_max_limit == 50
        assert settings.log_json is True
        assert settings.slow_search_ms == 1000.0

    def test_defaults_without_environment(self, monkeypatch):
        for key in ("INDEX_NAME", "SEARCH_DEFAULT_LIMIT", "SEARCH_MAX_LIMIT", "SLOW_SEARCH_MS"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings(_env_file=None)

        assert settings.index_name == "campus"
        assert settings.search_default_limit == 10
        assert settings.search_max_limit == 100
        assert settings.slow_search_ms == 50.0

    def test_env_names_are_case_insensitive(self, monkeypatch):
        monkeypatch.delenv("SUGGESTION_LIMIT")
        monkeypatch.setenv("suggestion_limit", "3")

        assert Settings().suggestion_limit == 3

    def test_default_limit_cannot_exceed_maximum(self):
        with pytest.raises(ValidationError, match="must not exceed"):
            Settings(search_default_limit=60, search_max_limit=50)

    @pytest.mark.parametrize("field", ["search_default_limit", "suggestion_limit", "popular_terms_limit"])
    def test_limits_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Settings(**{field: 0})

    def test_log_level_is_normalized(self):
        assert Settings(log_level="warning").get_log_level() == "WARNING"
