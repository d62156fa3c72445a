"""
Admin authentication endpoints for API v1.

Registration and login only check credentials; no token or session
is issued.  A rejected login is reported as 401 with the same message
for an unknown username and a wrong password.
"""

from fastapi import APIRouter, Query, status

from student_records_api.app.api.dependencies import AuthServiceDep
from student_records_api.app.core.exceptions import AuthenticationFailure
from student_records_api.app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UsernameCheck,
)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: AuthServiceDep) -> RegisterResponse:
    """Register a new administrator.  Returns 409 on a taken username or email."""
    admin = service.register(payload.username, payload.password, payload.email)
    return RegisterResponse(username=admin.username)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, service: AuthServiceDep) -> LoginResponse:
    admin = service.login(payload.username, payload.password)
    if admin is None:
        raise AuthenticationFailure()
    return LoginResponse(username=admin.username, email=admin.email, role=admin.role)


@router.get("/check-username", response_model=UsernameCheck)
def check_username(service: AuthServiceDep, username: str = Query(...)) -> UsernameCheck:
    """Tell a registration form whether a username is already taken."""
    return UsernameCheck(exists=service.username_exists(username))
