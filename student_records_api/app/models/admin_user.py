"""Admin credential entity as stored in the ``admin_users`` table."""

import sqlite3
from dataclasses import dataclass
from typing import Optional

ADMIN_ROLE = "ADMIN"


@dataclass
class AdminUser:
    """An administrator account.

    The password is kept exactly as supplied at registration; checking
    it is the job of a ``CredentialVerifier``.
    """

    username: str
    password: str
    email: str
    role: str = ADMIN_ROLE
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "AdminUser":
        return cls(
            id=row["id"],
            username=row["username"],
            password=row["password"],
            email=row["email"],
            role=row["role"],
        )
