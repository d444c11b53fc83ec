"""Domain model - searchable documents and their metadata.

Following Cosmic Python principles:
- Domain model has NO dependencies on infrastructure
- Documents are value objects keyed by a caller-assigned identity
- Uses Pydantic for validation at construction

A stored document never carries query-derived data (score, highlights).
Those live on ``ScoredDocument`` result wrappers so one query's relevance
cannot leak into another query's results.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


DocumentType = Literal["drive", "student", "company", "application", "job", "resume"]

DOCUMENT_TYPES: tuple[str, ...] = ("drive", "student", "company", "application", "job", "resume")


class DocumentMetadata(BaseModel):
    """Well-known metadata fields plus an untyped extension map.

    Only the typed fields participate in filtering, sorting and faceting.
    Unknown keys supplied at construction are collected into ``extra`` so
    caller-specific data survives a round trip without being interpreted.
    """

    model_config = ConfigDict(frozen=True)

    tags: list[str] = Field(default_factory=list)
    category: str | None = None
    location: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: str | None = None
    education: str | None = None
    salary: str | None = None
    date: str | None = None
    author: str | None = None
    status: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_extra_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = set(cls.model_fields)
        extra = dict(data.get("extra") or {})
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if key in known:
                cleaned[key] = value
            else:
                extra[key] = value
        cleaned["extra"] = extra
        if isinstance(cleaned.get("date"), (date, datetime)):
            cleaned["date"] = cleaned["date"].isoformat()
        return cleaned


class Document(BaseModel):
    """The unit of indexing.

    Identity is ``id``: two documents with the same id are two versions of
    the same record, and indexing the second replaces the first.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    type: DocumentType
    title: str = ""
    content: str = ""
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)

    @property
    def text(self) -> str:
        """Title and content joined the way the index tokenizes them."""
        return f"{self.title} {self.content}"

    @property
    def searchable_text(self) -> str:
        """Lowercased ``text`` used for phrase and occurrence matching."""
        return self.text.lower()
