import pytest
from fastapi.testclient import TestClient

from student_records_api.app.core.config import settings
from student_records_api.app.core.db import get_connection, init_db
from student_records_api.app.main import app
from student_records_api.app.schemas.student import StudentCreate


@pytest.fixture
def test_db(tmp_path):
    # Point the app at a fresh database file for each test
    original = settings.database_url
    settings.database_url = str(tmp_path / "test_students.db")
    init_db()
    yield settings.database_url
    settings.database_url = original


@pytest.fixture
def conn(test_db):
    connection = get_connection()
    yield connection
    connection.close()


@pytest.fixture
def client(test_db):
    return TestClient(app)


def make_student(**overrides) -> StudentCreate:
    data = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "department": "CS",
        "year": 3,
        "phone_number": "1234567890",
    }
    data.update(overrides)
    return StudentCreate(**data)


def student_payload(**overrides) -> dict:
    data = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "department": "CS",
        "year": 3,
        "phoneNumber": "1234567890",
    }
    data.update(overrides)
    return data
