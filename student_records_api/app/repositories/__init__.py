"""
Repositories over the SQLite store.

Each repository is constructed around a request‑scoped connection and
translates between rows and the entities in ``app.models``.
"""

from .admin_user_repository import AdminUserRepository
from .student_repository import SORT_COLUMNS, StudentRepository

__all__ = ["AdminUserRepository", "SORT_COLUMNS", "StudentRepository"]
