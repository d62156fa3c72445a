"""Data access for the ``admin_users`` table."""

import sqlite3
from typing import Optional

from ..models.admin_user import AdminUser


class AdminUserRepository:
    """Store contract for admin credentials."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def insert(self, user: AdminUser) -> AdminUser:
        cursor = self.conn.execute(
            "INSERT INTO admin_users (username, password, email, role) VALUES (?, ?, ?, ?)",
            (user.username, user.password, user.email, user.role),
        )
        user.id = cursor.lastrowid
        return user

    def find_by_username(self, username: str) -> Optional[AdminUser]:
        row = self.conn.execute(
            "SELECT id, username, password, email, role FROM admin_users WHERE username = ?",
            (username,),
        ).fetchone()
        return AdminUser.from_row(row) if row else None

    def exists_by_username(self, username: str) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM admin_users WHERE username = ?", (username,)
        ).fetchone()
        return row is not None

    def exists_by_email(self, email: str) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM admin_users WHERE email = ?", (email,)
        ).fetchone()
        return row is not None
