from tests.conftest import student_payload


def create(client, **overrides):
    response = client.post("/api/v1/students/", json=student_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def test_create_student(client):
    data = create(client)

    assert data["id"] is not None
    assert data["name"] == "Ada Lovelace"
    assert data["email"] == "ada@example.com"
    assert data["department"] == "CS"
    assert data["year"] == 3
    assert data["phoneNumber"] == "1234567890"
    assert "created_at" not in data and "createdAt" not in data


def test_create_duplicate_email_is_conflict(client):
    create(client)

    response = client.post("/api/v1/students/", json=student_payload(name="Ada Again"))
    assert response.status_code == 409
    body = response.json()
    assert body["status"] == 409
    assert body["error"] == "Conflict"
    assert "ada@example.com" in body["message"]
    assert body["path"] == "/api/v1/students/"


def test_invalid_fields_are_bad_request(client):
    bad_inputs = [
        {"phoneNumber": "123456789"},
        {"phoneNumber": "12345abcde"},
        {"year": 5},
        {"year": 0},
        {"email": "not-an-email"},
        {"name": "A"},
        {"name": "   "},
        {"department": ""},
        {"department": "x" * 51},
    ]
    for overrides in bad_inputs:
        response = client.post("/api/v1/students/", json=student_payload(**overrides))
        assert response.status_code == 400, overrides
        assert response.json()["error"] == "Bad Request"

    assert client.get("/api/v1/students/").json() == []


def test_get_update_delete(client):
    created = create(client)
    student_id = created["id"]

    assert client.get(f"/api/v1/students/{student_id}").json() == created

    response = client.put(
        f"/api/v1/students/{student_id}", json=student_payload(department="Math", year=4)
    )
    assert response.status_code == 200
    assert response.json()["department"] == "Math"
    assert response.json()["id"] == student_id

    response = client.delete(f"/api/v1/students/{student_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Student deleted successfully"}

    response = client.get(f"/api/v1/students/{student_id}")
    assert response.status_code == 404
    assert response.json()["error"] == "Not Found"


def test_missing_student_is_not_found(client):
    assert client.get("/api/v1/students/9999").status_code == 404
    assert client.put("/api/v1/students/9999", json=student_payload()).status_code == 404
    assert client.delete("/api/v1/students/9999").status_code == 404


def test_search_accepts_keyword_and_q(client):
    create(client)
    create(client, name="Alan Turing", email="alan@example.com", department="Math")

    by_keyword = client.get("/api/v1/students/search", params={"keyword": "turing"}).json()
    by_q = client.get("/api/v1/students/search", params={"q": "TURING"}).json()
    assert [s["name"] for s in by_keyword] == ["Alan Turing"]
    assert by_q == by_keyword
    assert len(client.get("/api/v1/students/search").json()) == 2


def test_filters_and_counts(client):
    create(client)
    create(client, name="Alan Turing", email="alan@example.com", year=4)
    create(client, name="Emmy Noether", email="emmy@example.com", department="Math", year=1)

    assert len(client.get("/api/v1/students/department/CS").json()) == 2
    assert client.get("/api/v1/students/department/History").json() == []
    assert len(client.get("/api/v1/students/year/4").json()) == 1
    assert client.get("/api/v1/students/departments").json() == ["CS", "Math"]
    assert client.get("/api/v1/students/count/department/CS").json() == {"department": "CS", "count": 2}
    assert client.get("/api/v1/students/count/department/History").json()["count"] == 0

    stats = client.get("/api/v1/students/statistics").json()
    assert stats["totalStudents"] == 3
    assert stats["totalDepartments"] == 2
    assert stats["byDepartment"] == {"CS": 2, "Math": 1}


def test_paginated_listing(client):
    for i in range(5):
        create(client, name=f"Student {i}", email=f"s{i}@example.com")

    response = client.get(
        "/api/v1/students/paginated",
        params={"page": 1, "size": 2, "sortBy": "name", "direction": "desc"},
    )
    assert response.status_code == 200
    page = response.json()
    assert page["page"] == 1
    assert page["size"] == 2
    assert page["totalElements"] == 5
    assert page["totalPages"] == 3
    assert [s["name"] for s in page["content"]] == ["Student 2", "Student 1"]


def test_paginated_unknown_sort_field_is_bad_request(client):
    response = client.get("/api/v1/students/paginated", params={"sortBy": "shoeSize"})

    assert response.status_code == 400
    assert "shoeSize" in response.json()["message"]


def test_paginated_search(client):
    create(client)
    create(client, name="Grace Hopper", email="grace@navy.mil", department="Math")

    page = client.get("/api/v1/students/search/paginated", params={"keyword": "navy"}).json()
    assert page["totalElements"] == 1
    assert page["content"][0]["name"] == "Grace Hopper"


def test_paginated_search_without_keyword_and_sorting(client):
    for i in range(3):
        create(client, name=f"Student {i}", email=f"s{i}@example.com")

    page = client.get(
        "/api/v1/students/search/paginated",
        params={"keyword": "", "size": 2, "sortBy": "name", "direction": "desc"},
    ).json()
    assert page["totalElements"] == 3
    assert [s["name"] for s in page["content"]] == ["Student 2", "Student 1"]


def test_paginated_search_unknown_sort_field_is_bad_request(client):
    response = client.get(
        "/api/v1/students/search/paginated", params={"keyword": "ada", "sortBy": "shoeSize"}
    )

    assert response.status_code == 400
    assert "shoeSize" in response.json()["message"]


def test_health_and_cors(client):
    response = client.get("/health", headers={"Origin": "http://localhost:3000"})

    assert response.json() == {"status": "ok"}
    assert response.headers["access-control-allow-origin"] == "*"
