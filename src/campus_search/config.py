"""Centralized configuration for campus-search using Pydantic Settings."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Values are validated at startup. Variable names are case-insensitive,
    e.g. ``SEARCH_MAX_LIMIT=50``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Index identity
    index_name: str = Field(default="campus", min_length=1, description="Index name used as the metrics label")

    # Query limits
    search_default_limit: int = Field(default=10, ge=1, description="Page size used when a query omits one")
    search_max_limit: int = Field(default=100, ge=1, description="Largest page size accepted from callers")
    suggestion_limit: int = Field(default=5, ge=1, description="Maximum 'did you mean' suggestions returned")
    popular_terms_limit: int = Field(default=10, ge=1, description="Default number of popular terms returned")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON log lines")
    slow_search_ms: float = Field(default=50.0, ge=0.0, description="Searches slower than this log a warning")

    @model_validator(mode="after")
    def _check_limits(self) -> "Settings":
        if self.search_default_limit > self.search_max_limit:
            raise ValueError(
                f"SEARCH_DEFAULT_LIMIT ({self.search_default_limit}) must not exceed "
                f"SEARCH_MAX_LIMIT ({self.search_max_limit})"
            )
        return self

    def get_log_level(self) -> str:
        """Return the log level normalized for ``logging``."""
        return self.log_level.upper()
