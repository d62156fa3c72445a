"""
Pydantic models for student data.

``StudentCreate`` is the validated input view used for both creating
and updating a student; ``StudentRead`` adds the server‑assigned
``id`` for responses.  Timestamps are never part of the view.  The
phone number travels as ``phoneNumber`` on the wire, matching the
existing frontend.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class StudentBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=2, max_length=100, examples=["Ada Lovelace"])
    email: EmailStr = Field(..., examples=["ada@example.com"])
    department: str = Field(..., min_length=1, max_length=50, examples=["CS"])
    year: int = Field(..., ge=1, le=4, examples=[3])
    phone_number: str = Field(
        ...,
        alias="phoneNumber",
        pattern=r"^[0-9]{10}$",
        examples=["1234567890"],
    )

    @field_validator("name", "department")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def email_length(cls, v: str) -> str:
        if len(v) > 100:
            raise ValueError("must be at most 100 characters")
        return v


class StudentCreate(StudentBase):
    """Schema for creating or updating a student."""

    pass


class StudentRead(StudentBase):
    """Schema for reading a student from the API."""

    id: int


class DepartmentCount(BaseModel):
    department: str
    count: int


class StudentStatistics(BaseModel):
    """Dashboard summary of the student collection."""

    model_config = ConfigDict(populate_by_name=True)

    total_students: int = Field(..., alias="totalStudents")
    total_departments: int = Field(..., alias="totalDepartments")
    by_department: Dict[str, int] = Field(default_factory=dict, alias="byDepartment")
    by_year: Dict[int, int] = Field(default_factory=dict, alias="byYear")
