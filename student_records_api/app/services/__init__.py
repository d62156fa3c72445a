"""
Service layer.

Services hold the business rules and are the only code that converts
between stored entities and API schemas.  Endpoints obtain a service
bound to the request's database connection through the dependencies
in ``app.api.dependencies``.
"""

from .auth_service import AuthService
from .student_service import StudentService

__all__ = ["AuthService", "StudentService"]
