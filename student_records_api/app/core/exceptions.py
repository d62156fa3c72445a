"""
Error taxonomy shared by the services and the HTTP layer.

Services raise these exceptions; the handlers registered in
``app.main`` turn each one into a JSON error response using the
``status_code`` carried by the exception class.
"""

from typing import Any

from fastapi import status


class StudentRecordsError(Exception):
    """Base exception for all Student Records API errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(StudentRecordsError):
    """Raised when a requested record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found with ID: {identifier}")


class DuplicateResourceError(StudentRecordsError):
    """Raised when a write would violate a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class DuplicateEmailError(DuplicateResourceError):
    """Raised when an email is already owned by another record."""

    def __init__(self, email: str, resource: str = "Student"):
        self.email = email
        super().__init__(f"{resource} with email {email} already exists")


class DuplicateUsernameError(DuplicateResourceError):
    """Raised when an admin username is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username {username} already exists")


class ValidationFailure(StudentRecordsError):
    """Raised when input is structurally invalid.

    Field constraints on request bodies are enforced by the pydantic
    schemas; the services raise this for parameters they interpret
    themselves, such as an unknown sort field or a negative page.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class AuthenticationFailure(StudentRecordsError):
    """Raised by the HTTP layer when a login attempt is rejected."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)
