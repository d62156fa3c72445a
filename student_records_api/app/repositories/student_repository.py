"""
Data access for the ``students`` table.

``StudentRepository`` wraps one ``sqlite3.Connection`` and exposes the
lookups, filters and paged queries the record service relies on.  It
performs no business checks and never commits; the caller owns the
transaction.  All queries use parameterized statements; sort columns
are interpolated only after being checked against ``SORT_COLUMNS``.
"""

import sqlite3
from typing import Dict, List, Optional, Tuple

from ..models.student import Student

# Columns a page may be ordered by.
SORT_COLUMNS = frozenset(
    {"id", "name", "email", "department", "year", "phone_number", "created_at", "updated_at"}
)


def _like_pattern(term: str) -> str:
    """Build a case‑insensitive ``LIKE`` pattern matching ``term`` anywhere."""
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


_NAME_DEPT_CLAUSE = (
    "FOLD(name) LIKE ? ESCAPE '\\' OR FOLD(department) LIKE ? ESCAPE '\\'"
)
_NAME_DEPT_EMAIL_CLAUSE = _NAME_DEPT_CLAUSE + " OR FOLD(email) LIKE ? ESCAPE '\\'"


class StudentRepository:
    """Store contract for student rows."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def insert(self, student: Student) -> Student:
        cursor = self.conn.execute(
            """
            INSERT INTO students (name, email, department, year, phone_number, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                student.name,
                student.email,
                student.department,
                student.year,
                student.phone_number,
                student.created_at,
                student.updated_at,
            ),
        )
        student.id = cursor.lastrowid
        return student

    def update(self, student: Student) -> Student:
        self.conn.execute(
            """
            UPDATE students
            SET name = ?, email = ?, department = ?, year = ?, phone_number = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                student.name,
                student.email,
                student.department,
                student.year,
                student.phone_number,
                student.updated_at,
                student.id,
            ),
        )
        return student

    def delete_by_id(self, student_id: int) -> bool:
        cursor = self.conn.execute("DELETE FROM students WHERE id = ?", (student_id,))
        return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def find_by_id(self, student_id: int) -> Optional[Student]:
        row = self.conn.execute("SELECT * FROM students WHERE id = ?", (student_id,)).fetchone()
        return Student.from_row(row) if row else None

    def find_by_email(self, email: str) -> Optional[Student]:
        row = self.conn.execute("SELECT * FROM students WHERE email = ?", (email,)).fetchone()
        return Student.from_row(row) if row else None

    def exists_by_id(self, student_id: int) -> bool:
        row = self.conn.execute("SELECT 1 FROM students WHERE id = ?", (student_id,)).fetchone()
        return row is not None

    def exists_by_email(self, email: str) -> bool:
        row = self.conn.execute("SELECT 1 FROM students WHERE email = ?", (email,)).fetchone()
        return row is not None

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------
    def find_all(self) -> List[Student]:
        rows = self.conn.execute("SELECT * FROM students ORDER BY id").fetchall()
        return [Student.from_row(row) for row in rows]

    def find_by_department(self, department: str) -> List[Student]:
        rows = self.conn.execute(
            "SELECT * FROM students WHERE department = ? ORDER BY id", (department,)
        ).fetchall()
        return [Student.from_row(row) for row in rows]

    def find_by_year(self, year: int) -> List[Student]:
        rows = self.conn.execute(
            "SELECT * FROM students WHERE year = ? ORDER BY id", (year,)
        ).fetchall()
        return [Student.from_row(row) for row in rows]

    def search(self, term: str) -> List[Student]:
        """Students whose name or department contains ``term``, ignoring case."""
        pattern = _like_pattern(term)
        rows = self.conn.execute(
            f"SELECT * FROM students WHERE {_NAME_DEPT_CLAUSE} ORDER BY id",
            (pattern, pattern),
        ).fetchall()
        return [Student.from_row(row) for row in rows]

    def search_with_email(self, term: str) -> List[Student]:
        """Like :meth:`search` but also matching the email column."""
        pattern = _like_pattern(term)
        rows = self.conn.execute(
            f"SELECT * FROM students WHERE {_NAME_DEPT_EMAIL_CLAUSE} ORDER BY id",
            (pattern, pattern, pattern),
        ).fetchall()
        return [Student.from_row(row) for row in rows]

    # ------------------------------------------------------------------
    # Paging
    # ------------------------------------------------------------------
    @staticmethod
    def _order_by(sort_column: str, descending: bool) -> str:
        if sort_column not in SORT_COLUMNS:
            raise ValueError(f"Unknown sort column: {sort_column}")
        order = "DESC" if descending else "ASC"
        # id breaks ties so consecutive pages never repeat a row
        if sort_column == "id":
            return f"ORDER BY id {order}"
        return f"ORDER BY {sort_column} {order}, id {order}"

    def find_page(
        self, offset: int, limit: int, sort_column: str = "id", descending: bool = False
    ) -> Tuple[List[Student], int]:
        """Return one slice of all students and the total row count."""
        order_by = self._order_by(sort_column, descending)
        rows = self.conn.execute(
            f"SELECT * FROM students {order_by} LIMIT ? OFFSET ?", (limit, offset)
        ).fetchall()
        return [Student.from_row(row) for row in rows], self.count()

    def search_page(
        self,
        term: str,
        offset: int,
        limit: int,
        sort_column: str = "id",
        descending: bool = False,
    ) -> Tuple[List[Student], int]:
        """Return one slice of the name/department/email matches and their count."""
        order_by = self._order_by(sort_column, descending)
        pattern = _like_pattern(term)
        params = (pattern, pattern, pattern)
        rows = self.conn.execute(
            f"SELECT * FROM students WHERE {_NAME_DEPT_EMAIL_CLAUSE} {order_by} LIMIT ? OFFSET ?",
            params + (limit, offset),
        ).fetchall()
        total = self.conn.execute(
            f"SELECT COUNT(*) AS count FROM students WHERE {_NAME_DEPT_EMAIL_CLAUSE}", params
        ).fetchone()["count"]
        return [Student.from_row(row) for row in rows], total

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) AS count FROM students").fetchone()["count"]

    def distinct_departments(self) -> List[str]:
        rows = self.conn.execute(
            "SELECT DISTINCT department FROM students ORDER BY department"
        ).fetchall()
        return [row["department"] for row in rows]

    def count_by_department(self, department: str) -> int:
        row = self.conn.execute(
            "SELECT COUNT(*) AS count FROM students WHERE department = ?", (department,)
        ).fetchone()
        return row["count"]

    def count_per_department(self) -> Dict[str, int]:
        rows = self.conn.execute(
            "SELECT department, COUNT(*) AS count FROM students GROUP BY department ORDER BY department"
        ).fetchall()
        return {row["department"]: row["count"] for row in rows}

    def count_per_year(self) -> Dict[int, int]:
        rows = self.conn.execute(
            "SELECT year, COUNT(*) AS count FROM students GROUP BY year ORDER BY year"
        ).fetchall()
        return {row["year"]: row["count"] for row in rows}
