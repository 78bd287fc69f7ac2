"""HTTP tests driving the records API through FastAPI's test client."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from schooldb.app import app
from schooldb.dependencies import get_records
from schooldb.errors import StorageUnavailable
from schooldb.services import SchoolRecords
from schooldb.storage import open_collections


@pytest.fixture(params=["memory", "json", "sqlite"])
def records(request, tmp_path) -> SchoolRecords:
    collections = open_collections(
        request.param,
        database_url=f"sqlite:///{(tmp_path / 'api.db').as_posix()}",
        data_dir=tmp_path,
    )
    return SchoolRecords(collections, backend=request.param)


@pytest.fixture()
def client(records):
    app.dependency_overrides[get_records] = lambda: records
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def teacher_payload() -> dict:
    return {
        "firstName": "Grace",
        "lastName": "Hopper",
        "email": "grace@example.com",
        "department": "Computer Science",
    }


@pytest.fixture()
def student_payload() -> dict:
    return {
        "firstName": "Alan",
        "lastName": "Turing",
        "grade": 10,
        "studentNumber": "S-1",
    }


def _create(client: TestClient, path: str, payload: dict) -> dict:
    response = client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _course_payload(teacher_id: int, **overrides) -> dict:
    payload = {
        "code": "CS1",
        "name": "Programming",
        "teacherId": teacher_id,
        "semester": "Fall",
        "room": "C3",
    }
    payload.update(overrides)
    return payload


def _test_payload(student_id: int, course_id: int, mark: float, out_of: float) -> dict:
    return {
        "studentId": student_id,
        "courseId": course_id,
        "testName": "Quiz",
        "date": "2024-10-01",
        "mark": mark,
        "outOf": out_of,
    }


def test_create_and_fetch_teacher(client, teacher_payload) -> None:
    created = _create(client, "/teachers", teacher_payload)
    assert created == {"id": 1, **teacher_payload, "room": ""}

    response = client.get("/teachers/1")
    assert response.status_code == 200
    assert response.json() == created
    assert client.get("/teachers").json() == [created]


def test_create_with_missing_fields_lists_them(client) -> None:
    response = client.post("/teachers", json={"firstName": "Grace"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["fields"] == ["lastName", "email", "department"]


def test_create_without_body_reports_all_required_fields(client) -> None:
    response = client.post("/students")
    assert response.status_code == 400
    assert response.json()["fields"] == ["firstName", "lastName", "grade", "studentNumber"]


def test_malformed_and_unknown_ids(client) -> None:
    response = client.get("/students/abc")
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_id"

    response = client.get("/students/5")
    assert response.status_code == 404
    assert response.json() == {
        "error": "not_found",
        "detail": "Student 5 not found",
        "collection": "students",
        "id": 5,
    }


def test_body_type_errors_are_validation_errors(client, records) -> None:
    response = client.post(
        "/students",
        json={"firstName": "Alan", "lastName": "Turing", "grade": "ten", "studentNumber": "S-1"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["fields"] == ["grade"]
    assert records.students.list_all() == []

    response = client.post("/courses", json=_course_payload("abc"))
    assert response.status_code == 400
    assert response.json()["fields"] == ["teacherId"]


def test_malformed_json_body_is_a_validation_error(client) -> None:
    response = client.post(
        "/teachers", content="{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_ids_beyond_integer_range_are_rejected(client, teacher_payload) -> None:
    huge = "99999999999999999999"

    response = client.get(f"/teachers/{huge}")
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_id"

    assert client.get("/tests", params={"studentId": huge}).status_code == 400

    _create(client, "/teachers", teacher_payload)
    response = client.post("/courses", json=_course_payload(int(huge)))
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert response.json()["fields"] == ["teacherId"]


def test_course_with_unknown_teacher_is_rejected(client, records) -> None:
    response = client.post("/courses", json=_course_payload(7))

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_reference"
    assert response.json()["field"] == "teacherId"
    assert records.courses.list_all() == []


def test_partial_update_and_empty_update(client, teacher_payload) -> None:
    _create(client, "/teachers", teacher_payload)

    response = client.patch("/teachers/1", json={"room": "B7"})
    assert response.status_code == 200
    assert response.json()["room"] == "B7"
    assert response.json()["email"] == teacher_payload["email"]

    response = client.put("/teachers/1", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"

    response = client.put("/teachers/9", json={"room": "B8"})
    assert response.status_code == 404


def test_delete_teacher_blocked_by_course(client, teacher_payload) -> None:
    teacher = _create(client, "/teachers", teacher_payload)
    course = _create(client, "/courses", _course_payload(teacher["id"]))

    response = client.delete(f"/teachers/{teacher['id']}")
    assert response.status_code == 409
    assert response.json()["dependent"] == "courses"

    assert client.delete(f"/courses/{course['id']}").json() == course
    response = client.delete(f"/teachers/{teacher['id']}")
    assert response.status_code == 200
    assert response.json() == teacher


def test_averages_and_summary(client, teacher_payload, student_payload) -> None:
    teacher = _create(client, "/teachers", teacher_payload)
    student = _create(client, "/students", student_payload)
    algebra = _create(client, "/courses", _course_payload(teacher["id"], name="Algebra"))
    _create(client, "/courses", _course_payload(teacher["id"], code="CS2", name="Geometry"))

    empty = client.get(f"/students/{student['id']}/average").json()
    assert empty == {"kind": "students", "id": 1, "count": 0, "averagePercent": None}

    _create(client, "/tests", _test_payload(student["id"], algebra["id"], 8, 10))
    _create(client, "/tests", _test_payload(student["id"], algebra["id"], 18, 20))

    average = client.get(f"/students/{student['id']}/average").json()
    assert average["count"] == 2
    assert average["averagePercent"] == 85.0
    assert client.get(f"/courses/{algebra['id']}/average").json()["averagePercent"] == 85.0

    summary = client.get(f"/teachers/{teacher['id']}/summary").json()
    assert summary == {
        "teacherId": 1,
        "teacherName": "Grace Hopper",
        "courses": [
            {"courseId": 1, "courseName": "Algebra", "testCount": 2},
            {"courseId": 2, "courseName": "Geometry", "testCount": 0},
        ],
    }


def test_zero_out_of_is_reported_as_invalid_test_data(client, teacher_payload, student_payload) -> None:
    teacher = _create(client, "/teachers", teacher_payload)
    student = _create(client, "/students", student_payload)
    course = _create(client, "/courses", _course_payload(teacher["id"]))
    _create(client, "/tests", _test_payload(student["id"], course["id"], 3, 0))

    response = client.get(f"/courses/{course['id']}/average")
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_test_data"


def test_list_filters(client, teacher_payload, student_payload) -> None:
    first = _create(client, "/teachers", teacher_payload)
    second = _create(client, "/teachers", dict(teacher_payload, email="other@example.com"))
    student = _create(client, "/students", student_payload)
    course_a = _create(client, "/courses", _course_payload(first["id"]))
    course_b = _create(client, "/courses", _course_payload(second["id"], code="CS9"))
    _create(client, "/tests", _test_payload(student["id"], course_a["id"], 1, 2))
    _create(client, "/tests", _test_payload(student["id"], course_b["id"], 1, 2))

    assert client.get("/courses", params={"teacherId": second["id"]}).json() == [course_b]
    assert len(client.get("/tests", params={"studentId": student["id"]}).json()) == 2
    filtered = client.get(
        "/tests", params={"studentId": student["id"], "courseId": course_b["id"]}
    ).json()
    assert [test["courseId"] for test in filtered] == [course_b["id"]]
    assert client.get("/tests", params={"courseId": "x"}).status_code == 400


def test_health_reports_collection_counts(client, records, teacher_payload) -> None:
    _create(client, "/teachers", teacher_payload)

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "backend": records.backend,
        "counts": {"teachers": 1, "courses": 0, "students": 0, "tests": 0},
    }


class _BrokenCollection:
    name = "teachers"

    def find_all(self):
        raise StorageUnavailable("connection reset by peer")


def test_storage_failures_return_generic_503() -> None:
    collections = open_collections("memory", names=("courses", "students", "tests"))
    broken = SchoolRecords({"teachers": _BrokenCollection(), **collections})
    app.dependency_overrides[get_records] = lambda: broken
    try:
        response = TestClient(app).get("/teachers")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert "connection reset" not in response.text
    assert response.json()["error"] == "storage_unavailable"
