"""Convert placement API records into searchable documents.

The REST API returns drives, students, recruiters and applications as JSON
objects with camelCase keys. These mappers flatten one record into a
``Document`` so the index can be populated from the source of truth and
kept in sync with it. Ids are prefixed by record kind (``drive-42``) so
records of different kinds never collide in one index.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from campus_search.domain.model import Document


Record = Mapping[str, Any]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _join(*parts: Any) -> str:
    return " ".join(text for text in (_text(part) for part in parts) if text)


def _split_skills(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [skill.strip() for skill in value.split(",") if skill.strip()]
    if isinstance(value, Iterable):
        return [_text(skill) for skill in value if _text(skill)]
    return []


def _optional(value: Any) -> str | None:
    return _text(value) or None


def _salary(value: Any) -> str | None:
    # Drive records send either "6,00,000 INR" or {"min": ..., "max": ..., "currency": ...}
    if isinstance(value, Mapping):
        amount = " - ".join(part for part in (_text(value.get("min")), _text(value.get("max"))) if part)
        return _optional(_join(amount, value.get("currency")))
    return _optional(value)


def document_id(kind: str, record_id: Any) -> str:
    """Build the index id for a record, e.g. ``document_id("drive", 7) == "drive-7"``."""
    return f"{kind}-{_text(record_id)}"


def drive_to_document(drive: Record) -> Document:
    recruiter = drive.get("recruiter") or {}
    company = drive.get("company") or recruiter.get("company")
    skills = _split_skills(drive.get("skills"))
    return Document(
        id=document_id("drive", drive["id"]),
        type="drive",
        title=_text(drive.get("position") or drive.get("title")),
        content=_join(
            drive.get("description"),
            company,
            " ".join(_split_skills(drive.get("requirements"))),
            " ".join(skills),
        ),
        metadata={
            "location": _optional(drive.get("location")),
            "salary": _salary(drive.get("salary")),
            "skills": skills,
            "status": _optional(drive.get("status")),
            "date": _optional(drive.get("postedDate") or drive.get("createdAt")),
            "category": _optional(drive.get("type")),
            "author": _optional(company),
            "openings": drive.get("openings"),
            "recruiter_id": drive.get("recruiterId"),
            "college_id": drive.get("collegeId"),
        },
    )


def student_to_document(student: Record) -> Document:
    skills = _split_skills(student.get("skills"))
    certifications = [
        _text(cert.get("name")) for cert in student.get("certifications") or [] if isinstance(cert, Mapping)
    ]
    title = _text(student.get("name"))
    if student.get("course"):
        title = _join(title, "-", student.get("course"))
    return Document(
        id=document_id("student", student["id"]),
        type="student",
        title=title,
        content=_join(
            student.get("branch"),
            student.get("collegeName"),
            " ".join(skills),
            " ".join(certifications),
        ),
        metadata={
            "skills": skills,
            "education": _optional(_join(student.get("course"), student.get("branch"))),
            "status": _optional(student.get("status")),
            "date": _optional(student.get("updatedAt") or student.get("createdAt")),
            "location": _optional(student.get("location") or student.get("collegeName")),
            "category": _optional(student.get("branch")),
            "tags": [cert for cert in certifications if cert],
            "year": student.get("year"),
            "ai_score": student.get("aiScore"),
            "college_id": student.get("collegeId"),
        },
    )


def recruiter_to_document(recruiter: Record) -> Document:
    return Document(
        id=document_id("company", recruiter["id"]),
        type="company",
        title=_text(recruiter.get("company") or recruiter.get("name")),
        content=_join(recruiter.get("position"), recruiter.get("department"), recruiter.get("experience")),
        metadata={
            "experience": _optional(recruiter.get("experience")),
            "author": _optional(recruiter.get("name")),
            "category": _optional(recruiter.get("department")),
            "date": _optional(recruiter.get("updatedAt") or recruiter.get("createdAt")),
            "college_id": recruiter.get("collegeId"),
        },
    )


def application_to_document(application: Record) -> Document:
    return Document(
        id=document_id("application", application["id"]),
        type="application",
        title=_join(application.get("driveTitle"), application.get("company")),
        content=_join(
            application.get("notes"),
            application.get("coverLetter"),
            application.get("currentRound"),
        ),
        metadata={
            "status": _optional(application.get("status")),
            "date": _optional(application.get("appliedAt")),
            "author": _optional(application.get("company")),
            "student_id": application.get("studentId"),
            "drive_id": application.get("driveId"),
        },
    )


RECORD_MAPPERS: dict[str, Callable[[Record], Document]] = {
    "drive": drive_to_document,
    "student": student_to_document,
    "company": recruiter_to_document,
    "application": application_to_document,
}

# Recruiter records are indexed as company documents
RECORD_KIND_ALIASES: dict[str, str] = {"recruiter": "company"}


def resolve_kind(kind: str) -> str:
    """Normalize a record kind to its registry key, e.g. ``"Recruiter"`` -> ``"company"``."""
    normalized = kind.lower()
    normalized = RECORD_KIND_ALIASES.get(normalized, normalized)
    if normalized not in RECORD_MAPPERS:
        available = sorted([*RECORD_MAPPERS, *RECORD_KIND_ALIASES])
        msg = f"Unknown record kind '{kind}'. Available: {available}"
        raise ValueError(msg)
    return normalized


def get_mapper(kind: str) -> Callable[[Record], Document]:
    """Return the mapper for a record kind."""
    return RECORD_MAPPERS[resolve_kind(kind)]
