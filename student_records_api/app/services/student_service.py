"""
Service layer for student records.

``StudentService`` owns every business rule around students: email
uniqueness, existence checks, search, pagination and the conversion
between the stored ``Student`` entity and the ``StudentRead`` view.
It trusts that incoming ``StudentCreate`` views were validated by the
schema layer and only checks semantic rules.

A service instance is bound to one request‑scoped connection.  Each
public method runs inside a single transaction covering its probes and
its write.  The email probe is a fast path for a friendly error; the
``UNIQUE`` constraint on ``students.email`` remains the authoritative
guard, and a violation reported by SQLite surfaces as the same
``DuplicateEmailError``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from ..core.db import transaction
from ..core.exceptions import DuplicateEmailError, NotFoundError, ValidationFailure
from ..models.student import Student
from ..repositories.student_repository import SORT_COLUMNS, StudentRepository
from ..schemas.page import Page
from ..schemas.student import StudentCreate, StudentRead, StudentStatistics

logger = logging.getLogger(__name__)

# Field names accepted from clients that differ from the column name.
SORT_ALIASES = {
    "studentId": "id",
    "phoneNumber": "phone_number",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

DEFAULT_SORT_FIELD = "id"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def resolve_sort_column(sort_by: Optional[str]) -> str:
    """Map a client supplied sort field to a column, or raise ``ValidationFailure``."""
    if not sort_by:
        return DEFAULT_SORT_FIELD
    column = SORT_ALIASES.get(sort_by, sort_by)
    if column not in SORT_COLUMNS:
        raise ValidationFailure(
            f"Cannot sort by '{sort_by}'. Allowed fields: {', '.join(sorted(SORT_COLUMNS))}"
        )
    return column


def is_descending(direction: Optional[str]) -> bool:
    """``desc`` in any case sorts descending; everything else ascends."""
    return bool(direction) and direction.strip().lower() == "desc"


class StudentService:
    """Business rules for the student collection."""

    def __init__(self, conn: sqlite3.Connection, repository: Optional[StudentRepository] = None):
        self.conn = conn
        self.repository = repository or StudentRepository(conn)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------
    @staticmethod
    def to_view(student: Student) -> StudentRead:
        return StudentRead(
            id=student.id,
            name=student.name,
            email=student.email,
            department=student.department,
            year=student.year,
            phone_number=student.phone_number,
        )

    @staticmethod
    def to_entity(view: StudentCreate, timestamp: datetime) -> Student:
        stamp = timestamp.isoformat()
        return Student(
            name=view.name,
            email=view.email,
            department=view.department,
            year=view.year,
            phone_number=view.phone_number,
            created_at=stamp,
            updated_at=stamp,
        )

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def create_student(self, view: StudentCreate) -> StudentRead:
        """Persist a new student; fails if the email is already taken."""
        logger.info("Creating student with email %s", view.email)
        with transaction(self.conn, immediate=True):
            if self.repository.exists_by_email(view.email):
                logger.warning("Email already exists: %s", view.email)
                raise DuplicateEmailError(view.email)
            try:
                student = self.repository.insert(self.to_entity(view, _utcnow()))
            except sqlite3.IntegrityError as exc:
                logger.warning("Store rejected duplicate email %s", view.email)
                raise DuplicateEmailError(view.email) from exc
        logger.info("Student created with ID %s", student.id)
        return self.to_view(student)

    def _get_entity(self, student_id: int) -> Student:
        student = self.repository.find_by_id(student_id)
        if student is None:
            logger.warning("Student not found with ID %s", student_id)
            raise NotFoundError("Student", student_id)
        return student

    def get_student(self, student_id: int) -> StudentRead:
        logger.info("Fetching student with ID %s", student_id)
        with transaction(self.conn):
            return self.to_view(self._get_entity(student_id))

    def update_student(self, student_id: int, view: StudentCreate) -> StudentRead:
        """Overwrite the editable fields of an existing student.

        ``id`` and ``created_at`` never change.  ``updated_at`` is
        refreshed and never moves backwards, even if the clock does.
        """
        logger.info("Updating student with ID %s", student_id)
        with transaction(self.conn, immediate=True):
            student = self._get_entity(student_id)
            if view.email != student.email and self.repository.exists_by_email(view.email):
                logger.warning("Email already exists: %s", view.email)
                raise DuplicateEmailError(view.email)

            previous = datetime.fromisoformat(student.updated_at)
            student.name = view.name
            student.email = view.email
            student.department = view.department
            student.year = view.year
            student.phone_number = view.phone_number
            student.updated_at = max(_utcnow(), previous).isoformat()
            try:
                self.repository.update(student)
            except sqlite3.IntegrityError as exc:
                logger.warning("Store rejected duplicate email %s", view.email)
                raise DuplicateEmailError(view.email) from exc
        logger.info("Student updated with ID %s", student_id)
        return self.to_view(student)

    def delete_student(self, student_id: int) -> None:
        logger.info("Deleting student with ID %s", student_id)
        with transaction(self.conn, immediate=True):
            if not self.repository.exists_by_id(student_id):
                logger.warning("Student not found with ID %s", student_id)
                raise NotFoundError("Student", student_id)
            self.repository.delete_by_id(student_id)
        logger.info("Student deleted with ID %s", student_id)

    # ------------------------------------------------------------------
    # Listing and search
    # ------------------------------------------------------------------
    def list_students(self) -> List[StudentRead]:
        with transaction(self.conn):
            students = self.repository.find_all()
        logger.info("Found %s students", len(students))
        return [self.to_view(s) for s in students]

    def search_students(self, keyword: Optional[str]) -> List[StudentRead]:
        """Case‑insensitive substring match over name and department.

        A missing or blank keyword returns the whole collection.
        """
        if keyword is None or not keyword.strip():
            return self.list_students()
        logger.info("Searching students with term %r", keyword)
        with transaction(self.conn):
            students = self.repository.search(keyword)
        logger.info("Found %s students matching %r", len(students), keyword)
        return [self.to_view(s) for s in students]

    def list_by_department(self, department: str) -> List[StudentRead]:
        with transaction(self.conn):
            students = self.repository.find_by_department(department)
        logger.info("Found %s students in department %s", len(students), department)
        return [self.to_view(s) for s in students]

    def list_by_year(self, year: int) -> List[StudentRead]:
        with transaction(self.conn):
            students = self.repository.find_by_year(year)
        logger.info("Found %s students in year %s", len(students), year)
        return [self.to_view(s) for s in students]

    # ------------------------------------------------------------------
    # Paging
    # ------------------------------------------------------------------
    @staticmethod
    def _check_paging(page: int, size: int) -> None:
        if page < 0:
            raise ValidationFailure("Page index must not be negative")
        if size < 1:
            raise ValidationFailure("Page size must be at least 1")

    def list_students_paged(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: Optional[str] = DEFAULT_SORT_FIELD,
        direction: Optional[str] = "asc",
    ) -> Page[StudentRead]:
        self._check_paging(page, size)
        column = resolve_sort_column(sort_by)
        descending = is_descending(direction)
        logger.info(
            "Fetching students page %s (size %s, sort %s %s)",
            page, size, column, "desc" if descending else "asc",
        )
        with transaction(self.conn):
            students, total = self.repository.find_page(page * size, size, column, descending)
        result = Page[StudentRead].build([self.to_view(s) for s in students], page, size, total)
        logger.info(
            "Retrieved page %s of %s with %s students",
            page, result.total_pages, result.number_of_elements,
        )
        return result

    def search_students_paged(
        self,
        keyword: Optional[str],
        page: int = 0,
        size: int = 10,
        sort_by: Optional[str] = DEFAULT_SORT_FIELD,
        direction: Optional[str] = "asc",
    ) -> Page[StudentRead]:
        """Page over students whose name, department or email contains ``keyword``."""
        self._check_paging(page, size)
        column = resolve_sort_column(sort_by)
        descending = is_descending(direction)
        logger.info("Searching students with term %r, page %s, size %s", keyword, page, size)
        with transaction(self.conn):
            if keyword is None or not keyword.strip():
                students, total = self.repository.find_page(page * size, size, column, descending)
            else:
                students, total = self.repository.search_page(
                    keyword, page * size, size, column, descending
                )
        logger.info("Found %s students matching %r", total, keyword)
        return Page[StudentRead].build([self.to_view(s) for s in students], page, size, total)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    def list_departments(self) -> List[str]:
        with transaction(self.conn):
            departments = self.repository.distinct_departments()
        logger.info("Found %s departments", len(departments))
        return departments

    def count_by_department(self, department: str) -> int:
        with transaction(self.conn):
            count = self.repository.count_by_department(department)
        logger.info("Found %s students in department %s", count, department)
        return count

    def get_statistics(self) -> StudentStatistics:
        with transaction(self.conn):
            total = self.repository.count()
            by_department = self.repository.count_per_department()
            by_year = self.repository.count_per_year()
        return StudentStatistics(
            total_students=total,
            total_departments=len(by_department),
            by_department=by_department,
            by_year=by_year,
        )
