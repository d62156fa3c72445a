"""
Pydantic schemas exchanged through the API.

Request schemas validate field constraints before any service method
runs; response schemas shape what the API returns.  Stored entities
live in ``app.models`` and are converted by the services only.
"""

from .auth import AdminRead, LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UsernameCheck
from .common import ErrorResponse, MessageResponse
from .page import Page
from .student import DepartmentCount, StudentCreate, StudentRead, StudentStatistics

__all__ = [
    "AdminRead",
    "DepartmentCount",
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Page",
    "RegisterRequest",
    "RegisterResponse",
    "StudentCreate",
    "StudentRead",
    "StudentStatistics",
    "UsernameCheck",
]
