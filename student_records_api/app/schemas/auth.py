"""
Pydantic models for admin registration and login.

The password is accepted on registration and login but never
returned; ``AdminRead`` is the only shape of an admin account that
leaves the service layer.
"""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=4, max_length=50, examples=["admin1"])
    password: str = Field(..., min_length=6, examples=["secret1"])
    email: EmailStr = Field(..., examples=["a@x.com"])


class LoginRequest(BaseModel):
    username: str
    password: str


class AdminRead(BaseModel):
    """Schema for reading an admin account."""

    id: int
    username: str
    email: str
    role: str


class RegisterResponse(BaseModel):
    message: str = "Registration successful"
    username: str


class LoginResponse(BaseModel):
    message: str = "Login successful"
    username: str
    email: str
    role: str
    success: bool = True


class UsernameCheck(BaseModel):
    exists: bool
