"""Student entity as stored in the ``students`` table."""

import sqlite3
from dataclasses import dataclass
from typing import Optional


@dataclass
class Student:
    """A student row.

    ``id`` is assigned by the database on insert.  ``created_at`` and
    ``updated_at`` are ISO‑8601 UTC strings managed by ``StudentService``.
    """

    name: str
    email: str
    department: str
    year: int
    phone_number: str
    created_at: str
    updated_at: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Student":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            department=row["department"],
            year=row["year"],
            phone_number=row["phone_number"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
