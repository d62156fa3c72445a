"""
Student endpoints for API v1.

CRUD, search, filters and pagination over the student collection.
Failures raised by ``StudentService`` propagate to the exception
handlers in ``app.main``, which map them to 404/409/400 responses.

Static paths (``/search``, ``/paginated``, ``/departments``...) are
declared before ``/{student_id}`` so they are not captured by it.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from student_records_api.app.api.dependencies import StudentServiceDep
from student_records_api.app.core.config import settings
from student_records_api.app.schemas.common import MessageResponse
from student_records_api.app.schemas.page import Page
from student_records_api.app.schemas.student import (
    DepartmentCount,
    StudentCreate,
    StudentRead,
    StudentStatistics,
)

router = APIRouter()


@router.get("/", response_model=List[StudentRead])
def list_students(service: StudentServiceDep) -> List[StudentRead]:
    """Return every student ordered by ID."""
    return service.list_students()


@router.post("/", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
def create_student(student: StudentCreate, service: StudentServiceDep) -> StudentRead:
    """Create a student.  Returns 409 if the email is already registered."""
    return service.create_student(student)


@router.get("/search", response_model=List[StudentRead])
def search_students(
    service: StudentServiceDep,
    keyword: Optional[str] = Query(None, description="Substring of name or department"),
    q: Optional[str] = Query(None, description="Alias of keyword"),
) -> List[StudentRead]:
    """Case‑insensitive search over name and department.

    Without a keyword the full collection is returned.
    """
    return service.search_students(keyword if keyword is not None else q)


@router.get("/paginated", response_model=Page[StudentRead])
def list_students_paginated(
    service: StudentServiceDep,
    page: int = Query(0, description="Zero‑based page index"),
    size: int = Query(settings.default_page_size, le=settings.max_page_size),
    sort_by: str = Query("id", alias="sortBy"),
    direction: str = Query("asc", description="asc or desc, case‑insensitive"),
) -> Page[StudentRead]:
    return service.list_students_paged(page, size, sort_by, direction)


@router.get("/search/paginated", response_model=Page[StudentRead])
def search_students_paginated(
    service: StudentServiceDep,
    keyword: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    page: int = Query(0),
    size: int = Query(settings.default_page_size, le=settings.max_page_size),
    sort_by: str = Query("id", alias="sortBy"),
    direction: str = Query("asc"),
) -> Page[StudentRead]:
    """Paged search over name, department and email."""
    term = keyword if keyword is not None else q
    return service.search_students_paged(term, page, size, sort_by, direction)


@router.get("/departments", response_model=List[str])
def list_departments(service: StudentServiceDep) -> List[str]:
    """Distinct departments in alphabetical order."""
    return service.list_departments()


@router.get("/statistics", response_model=StudentStatistics)
def get_statistics(service: StudentServiceDep) -> StudentStatistics:
    return service.get_statistics()


@router.get("/department/{department}", response_model=List[StudentRead])
def list_by_department(department: str, service: StudentServiceDep) -> List[StudentRead]:
    return service.list_by_department(department)


@router.get("/year/{year}", response_model=List[StudentRead])
def list_by_year(year: int, service: StudentServiceDep) -> List[StudentRead]:
    return service.list_by_year(year)


@router.get("/count/department/{department}", response_model=DepartmentCount)
def count_by_department(department: str, service: StudentServiceDep) -> DepartmentCount:
    """Number of students in a department; 0 for an unknown department."""
    return DepartmentCount(department=department, count=service.count_by_department(department))


@router.get("/{student_id}", response_model=StudentRead)
def get_student(student_id: int, service: StudentServiceDep) -> StudentRead:
    return service.get_student(student_id)


@router.put("/{student_id}", response_model=StudentRead)
def update_student(
    student_id: int, student: StudentCreate, service: StudentServiceDep
) -> StudentRead:
    """Replace the editable fields of a student."""
    return service.update_student(student_id, student)


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(student_id: int, service: StudentServiceDep) -> MessageResponse:
    service.delete_student(student_id)
    return MessageResponse(message="Student deleted successfully")
