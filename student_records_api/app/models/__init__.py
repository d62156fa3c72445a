"""
Stored entities.

These dataclasses mirror the rows of the ``students`` and
``admin_users`` tables.  They never leave the service layer; the API
exchanges the pydantic schemas defined in ``app.schemas``.
"""

from .admin_user import AdminUser
from .student import Student

__all__ = ["AdminUser", "Student"]
