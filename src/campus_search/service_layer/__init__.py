"""Service layer - search use cases for the placement API.

- SearchService validates requests and mirrors record changes
- document_mapping turns API records into indexable documents
"""

from .document_mapping import (
    application_to_document,
    drive_to_document,
    recruiter_to_document,
    student_to_document,
)
from .search_service import InvalidSearchQueryError, SearchService, UnknownRecordKindError


__all__ = [
    "InvalidSearchQueryError",
    "SearchService",
    "UnknownRecordKindError",
    "application_to_document",
    "drive_to_document",
    "recruiter_to_document",
    "student_to_document",
]
