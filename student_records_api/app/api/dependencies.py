"""
Dependency injection for FastAPI routes.

Each request gets its own SQLite connection from ``core.db.get_db``;
the services below are built around that connection and discarded
with it, so no state is shared between requests.
"""

import sqlite3
from typing import Annotated

from fastapi import Depends

from ..core.db import get_db
from ..services.auth_service import AuthService
from ..services.student_service import StudentService


def get_student_service(conn: sqlite3.Connection = Depends(get_db)) -> StudentService:
    """Get a StudentService bound to the request's connection."""
    return StudentService(conn)


def get_auth_service(conn: sqlite3.Connection = Depends(get_db)) -> AuthService:
    """Get an AuthService bound to the request's connection."""
    return AuthService(conn)


StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
