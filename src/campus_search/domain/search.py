"""Domain models for search functionality.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- Domain logic lives in domain layer
- No infrastructure dependencies

Query models accept the camelCase keys used by the placement frontend
(``dateRange``, ``totalPages``) as well as snake_case names.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from campus_search.domain.model import Document, DocumentType
from campus_search.utils.parsing import parse_date


SortField = Literal["relevance", "date", "title", "salary"]
SortOrder = Literal["asc", "desc"]


class _QueryModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class DateRange(_QueryModel):
    """Inclusive date window applied to ``metadata.date``."""

    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def _must_be_parseable(cls, value: str) -> str:
        if parse_date(value) is None:
            raise ValueError(f"Unparseable date '{value}'")
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if parse_date(self.start) > parse_date(self.end):
            raise ValueError(f"Date range start {self.start} is after end {self.end}")
        return self


class SearchFilters(_QueryModel):
    """Metadata filters; empty lists are not applied."""

    location: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    experience: list[str] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    salary: list[str] = Field(default_factory=list)
    category: list[str] = Field(default_factory=list)
    status: list[str] = Field(default_factory=list)
    date_range: DateRange | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_date_range(cls, data: object) -> object:
        # The frontend sends {"start": "", "end": ""} when no range is picked
        if isinstance(data, dict):
            for key in ("dateRange", "date_range"):
                window = data.get(key)
                if isinstance(window, dict) and not window.get("start") and not window.get("end"):
                    data = {k: v for k, v in data.items() if k != key}
        return data


class SortSpec(_QueryModel):
    """Sort field and direction. Relevance always sorts best-first."""

    field: SortField = "relevance"
    order: SortOrder = "desc"


class Pagination(_QueryModel):
    """1-based page number and page size."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class SearchQuery(_QueryModel):
    """A structured search request."""

    query: str = ""
    type: DocumentType | Literal["all"] = "all"
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort: SortSpec = Field(default_factory=SortSpec)
    pagination: Pagination = Field(default_factory=Pagination)


class ParsedQuery(BaseModel):
    """Normalized query terms and quoted phrases extracted from free text."""

    model_config = ConfigDict(frozen=True)

    original: str
    terms: list[str] = Field(default_factory=list)
    phrases: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.terms and not self.phrases


class ScoredDocument(BaseModel):
    """A stored document paired with the relevance computed for one query."""

    model_config = ConfigDict(frozen=True)

    document: Document
    score: float = 0.0
    highlights: list[str] = Field(default_factory=list)


class SearchResult(_QueryModel):
    """One page of results plus facets over the whole match set."""

    documents: list[ScoredDocument]
    total: int
    page: int
    total_pages: int
    facets: dict[str, dict[str, int]] = Field(default_factory=dict)
    suggestions: list[str] | None = None
    search_time: float = 0.0


class IndexStatistics(_QueryModel):
    """Snapshot of index size and composition."""

    total_documents: int
    total_terms: int
    documents_by_type: dict[str, int] = Field(default_factory=dict)
    average_document_length: int = 0
