from datetime import datetime

import pytest

from student_records_api.app.core.exceptions import DuplicateEmailError, NotFoundError, ValidationFailure
from student_records_api.app.repositories.student_repository import StudentRepository
from student_records_api.app.services.student_service import StudentService
from tests.conftest import make_student


@pytest.fixture
def service(conn):
    return StudentService(conn)


def seed(service):
    rows = [
        make_student(name="Ada Lovelace", email="ada@example.com", department="CS", year=3),
        make_student(name="Alan Turing", email="alan@example.com", department="CS", year=4),
        make_student(name="Grace Hopper", email="grace@navy.mil", department="Math", year=2),
        make_student(name="Emmy Noether", email="emmy@example.com", department="Math", year=1),
        make_student(name="Marie Curie", email="marie@example.com", department="Physics", year=4),
    ]
    return [service.create_student(r) for r in rows]


def test_create_student_returns_view_with_id(service):
    view = make_student()
    created = service.create_student(view)

    assert created.id is not None
    assert created.name == "Ada Lovelace"
    assert created.email == "ada@example.com"
    assert created.department == "CS"
    assert created.year == 3
    assert created.phone_number == "1234567890"


def test_create_then_get_matches_input(service):
    view = make_student()
    created = service.create_student(view)

    fetched = service.get_student(created.id)
    assert fetched.model_dump(exclude={"id"}) == view.model_dump()


def test_create_duplicate_email_fails(service):
    service.create_student(make_student())

    with pytest.raises(DuplicateEmailError):
        service.create_student(make_student(name="Another Ada"))
    assert len(service.list_students()) == 1


def test_store_constraint_is_translated_to_duplicate_email(conn):
    class BlindRepository(StudentRepository):
        # Simulates a concurrent writer slipping past the probe
        def exists_by_email(self, email):
            return False

    service = StudentService(conn, repository=BlindRepository(conn))
    service.create_student(make_student())

    with pytest.raises(DuplicateEmailError):
        service.create_student(make_student(name="Second Writer"))
    assert len(service.list_students()) == 1


def test_get_missing_student_fails(service):
    with pytest.raises(NotFoundError):
        service.get_student(9999)


def test_delete_then_get_fails(service):
    created = service.create_student(make_student())
    service.delete_student(created.id)

    with pytest.raises(NotFoundError):
        service.get_student(created.id)


def test_delete_missing_student_fails(service):
    with pytest.raises(NotFoundError):
        service.delete_student(42)


def test_update_keeps_id_and_created_at(service, conn):
    created = service.create_student(make_student())
    before = StudentRepository(conn).find_by_id(created.id)

    updated = service.update_student(
        created.id, make_student(name="Augusta Ada King", email="augusta@example.com", year=4)
    )
    after = StudentRepository(conn).find_by_id(created.id)

    assert updated.id == created.id
    assert updated.name == "Augusta Ada King"
    assert updated.email == "augusta@example.com"
    assert updated.year == 4
    assert after.created_at == before.created_at
    assert datetime.fromisoformat(after.updated_at) >= datetime.fromisoformat(before.updated_at)


def test_update_with_same_email_is_allowed(service):
    created = service.create_student(make_student())

    updated = service.update_student(created.id, make_student(department="Math"))
    assert updated.department == "Math"


def test_update_to_taken_email_fails(service):
    seed(service)
    ada = service.search_students("ada")[0]

    with pytest.raises(DuplicateEmailError):
        service.update_student(ada.id, make_student(email="alan@example.com"))
    assert service.get_student(ada.id).email == "ada@example.com"


def test_update_missing_student_reports_not_found_first(service):
    service.create_student(make_student())

    with pytest.raises(NotFoundError):
        service.update_student(777, make_student())


def test_search_is_case_insensitive_over_name_and_department(service):
    seed(service)

    assert {s.name for s in service.search_students("TURING")} == {"Alan Turing"}
    assert {s.name for s in service.search_students("math")} == {"Grace Hopper", "Emmy Noether"}
    # email is not part of the plain search
    assert service.search_students("navy") == []


def test_search_without_keyword_returns_everything(service):
    seed(service)
    everything = {s.id for s in service.list_students()}

    assert {s.id for s in service.search_students("")} == everything
    assert {s.id for s in service.search_students(None)} == everything
    assert {s.id for s in service.search_students("   ")} == everything


def test_search_treats_wildcards_literally(service):
    seed(service)

    assert service.search_students("%") == []
    assert service.search_students("_") == []


def test_filters_return_empty_lists(service):
    seed(service)

    assert [s.name for s in service.list_by_department("Physics")] == ["Marie Curie"]
    assert {s.name for s in service.list_by_year(4)} == {"Alan Turing", "Marie Curie"}
    assert service.list_by_department("History") == []
    assert service.list_by_year(5) == []


def test_paged_listing_never_repeats_ids(service):
    seed(service)

    first = service.list_students_paged(page=0, size=2)
    second = service.list_students_paged(page=1, size=2)
    third = service.list_students_paged(page=2, size=2)

    assert first.total_elements == 5
    assert first.total_pages == 3
    assert first.first and not first.last
    assert third.last
    assert len(third.content) == 1
    ids = [s.id for page in (first, second, third) for s in page.content]
    assert len(ids) == len(set(ids)) == 5


def test_paged_listing_sorts_with_direction(service):
    seed(service)

    desc = service.list_students_paged(page=0, size=5, sort_by="name", direction="DESC")
    assert [s.name for s in desc.content] == sorted((s.name for s in desc.content), reverse=True)

    fallback = service.list_students_paged(page=0, size=5, sort_by="name", direction="sideways")
    assert [s.name for s in fallback.content] == sorted(s.name for s in fallback.content)


def test_paged_listing_accepts_camel_case_sort_fields(service):
    seed(service)

    page = service.list_students_paged(page=0, size=5, sort_by="phoneNumber")
    assert page.total_elements == 5


def test_paged_listing_rejects_unknown_sort_field(service):
    with pytest.raises(ValidationFailure):
        service.list_students_paged(page=0, size=5, sort_by="favouriteColour")


def test_paged_listing_rejects_bad_paging(service):
    with pytest.raises(ValidationFailure):
        service.list_students_paged(page=-1, size=5)
    with pytest.raises(ValidationFailure):
        service.list_students_paged(page=0, size=0)


def test_paged_listing_on_empty_store(service):
    page = service.list_students_paged(page=0, size=10)

    assert page.content == []
    assert page.total_elements == 0
    assert page.total_pages == 0


def test_paged_search_includes_email(service):
    seed(service)

    page = service.search_students_paged("navy", page=0, size=10)
    assert [s.name for s in page.content] == ["Grace Hopper"]
    assert page.total_elements == 1

    page = service.search_students_paged("example", page=1, size=2)
    assert page.total_elements == 4
    assert page.total_pages == 2
    assert len(page.content) == 2


def test_departments_are_distinct_and_sorted(service):
    seed(service)

    assert service.list_departments() == ["CS", "Math", "Physics"]


@pytest.mark.parametrize("department", ["CS", "Math", "Physics", "History"])
def test_count_matches_department_listing(service, department):
    seed(service)

    assert service.count_by_department(department) == len(service.list_by_department(department))


def test_statistics(service):
    seed(service)

    stats = service.get_statistics()
    assert stats.total_students == 5
    assert stats.total_departments == 3
    assert stats.by_department == {"CS": 2, "Math": 2, "Physics": 1}
    assert stats.by_year == {1: 1, 2: 1, 3: 1, 4: 2}


@pytest.mark.parametrize("keyword", [None, "", "   "])
def test_paged_search_without_keyword_pages_everything(service, keyword):
    seed(service)

    page = service.search_students_paged(keyword, page=1, size=2)
    assert page.total_elements == 5
    assert page.total_pages == 3
    assert len(page.content) == 2


def test_paged_search_sorts_with_direction(service):
    seed(service)

    page = service.search_students_paged("example", page=0, size=10, sort_by="name", direction="desc")
    assert [s.name for s in page.content] == ["Marie Curie", "Emmy Noether", "Alan Turing", "Ada Lovelace"]


def test_paged_search_rejects_unknown_sort_field(service):
    with pytest.raises(ValidationFailure):
        service.search_students_paged("ada", page=0, size=5, sort_by="favouriteColour")


def test_search_folds_non_ascii_case(service):
    seed(service)
    service.create_student(make_student(name="Élodie Durand", email="elodie@example.com", department="Génie"))

    assert [s.name for s in service.search_students("élodie")] == ["Élodie Durand"]
    assert [s.name for s in service.search_students("GÉNIE")] == ["Élodie Durand"]
    assert service.search_students_paged("ÉLODIE", page=0, size=5).total_elements == 1
