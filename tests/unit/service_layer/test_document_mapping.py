"""Unit tests for mapping placement API records into documents."""

from campus_corpus import APPLICATION_RECORDS, DRIVE_RECORDS, RECRUITER_RECORDS, STUDENT_RECORDS
import pytest

from campus_search.domain.search import SearchFilters
from campus_search.search.filters import matches_filters
from campus_search.service_layer.document_mapping import (
    RECORD_MAPPERS,
    application_to_document,
    document_id,
    drive_to_document,
    get_mapper,
    recruiter_to_document,
    resolve_kind,
    student_to_document,
)
from campus_search.utils.parsing import parse_salary


pytestmark = pytest.mark.unit


class TestDocumentId:
    def test_prefixes_kind(self):
        assert document_id("drive", 7) == "drive-7"
        assert document_id("student", " s-7 ") == "student-s-7"


class TestDriveMapping:
    def test_drive_with_nested_recruiter(self):
        doc = drive_to_document(DRIVE_RECORDS[0])

        assert doc.id == "drive-41"
        assert doc.type == "drive"
        assert doc.title == "Data Analyst"
        assert doc.content == (
            "Analyse placement data with SQL and Python dashboards. Insight Labs SQL Python Tableau"
        )
        assert doc.metadata.skills == ["SQL", "Python", "Tableau"]
        assert doc.metadata.location == "Pune"
        assert doc.metadata.salary == "6,00,000 INR"
        assert doc.metadata.date == "2024-01-12"
        assert doc.metadata.category == "on-campus"
        assert doc.metadata.author == "Insight Labs"
        assert doc.metadata.extra["openings"] == 4
        assert doc.metadata.extra["recruiter_id"] == "r-9"

    def test_drive_with_flat_company(self):
        doc = drive_to_document(DRIVE_RECORDS[1])

        assert doc.metadata.author == "Nimbus Systems"
        assert "Nimbus Systems" in doc.content
        assert doc.metadata.status == "draft"

    def test_structured_salary_is_formatted(self):
        record = {
            "id": "43",
            "title": "SDE Intern",
            "salary": {"min": 600000, "max": 900000, "currency": "INR"},
            "createdAt": "2024-01-20",
        }

        doc = drive_to_document(record)

        assert doc.metadata.salary == "600000 - 900000 INR"
        assert doc.metadata.date == "2024-01-20"
        assert parse_salary(doc.metadata.salary) == 600000
        assert not matches_filters(doc, SearchFilters(salary=["min"]))
        assert matches_filters(doc, SearchFilters(salary=["inr"]))

    def test_partial_structured_salary(self):
        doc = drive_to_document({"id": "44", "salary": {"min": 25000}})

        assert doc.metadata.salary == "25000"
        assert drive_to_document({"id": "45", "salary": {}}).metadata.salary is None

    def test_sparse_drive(self):
        doc = drive_to_document({"id": 3, "title": "Trainee"})

        assert doc.id == "drive-3"
        assert doc.title == "Trainee"
        assert doc.content == ""
        assert doc.metadata.location is None
        assert doc.metadata.skills == []


class TestStudentMapping:
    def test_student_profile(self):
        doc = student_to_document(STUDENT_RECORDS[0])

        assert doc.id == "student-s-7"
        assert doc.title == "Priya Nair - B.Tech"
        assert doc.content == "Computer Science Coastal Institute Python Django PostgreSQL AWS Cloud Practitioner"
        assert doc.metadata.education == "B.Tech Computer Science"
        assert doc.metadata.location == "Coastal Institute"
        assert doc.metadata.category == "Computer Science"
        assert doc.metadata.date == "2024-01-18"
        assert doc.metadata.tags == ["AWS Cloud Practitioner"]

    def test_contact_details_are_not_indexed(self):
        doc = student_to_document(STUDENT_RECORDS[0])

        assert "priya@example.edu" not in doc.text
        assert "email" not in doc.metadata.extra

    def test_created_at_is_the_date_fallback(self):
        doc = student_to_document({"id": "s-1", "name": "Ravi", "createdAt": "2023-08-01"})

        assert doc.title == "Ravi"
        assert doc.metadata.date == "2023-08-01"


class TestOtherMappings:
    def test_recruiter_becomes_company(self):
        doc = recruiter_to_document(RECRUITER_RECORDS[0])

        assert doc.id == "company-r-9"
        assert doc.type == "company"
        assert doc.title == "Insight Labs"
        assert doc.content == "Talent Lead Analytics 8 years"
        assert doc.metadata.author == "Asha Rao"
        assert doc.metadata.experience == "8 years"

    def test_application(self):
        doc = application_to_document(APPLICATION_RECORDS[0])

        assert doc.id == "application-a-100"
        assert doc.title == "Data Analyst Insight Labs"
        assert doc.content == "Strong SQL portfolio Technical interview"
        assert doc.metadata.status == "shortlisted"
        assert doc.metadata.extra["drive_id"] == "41"


class TestGetMapper:
    def test_known_kinds(self):
        assert set(RECORD_MAPPERS) == {"drive", "student", "company", "application"}
        assert get_mapper("Drive") is drive_to_document

    def test_recruiter_is_an_alias_for_company(self):
        assert resolve_kind("Recruiter") == "company"
        assert get_mapper("recruiter") is recruiter_to_document

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown record kind"):
            get_mapper("college")
