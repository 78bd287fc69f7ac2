from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from schooldb.services import SchoolRecords
from schooldb.storage import open_collections


@pytest.fixture(params=["memory", "json", "sqlite"])
def records(request, tmp_path) -> SchoolRecords:
    collections = open_collections(
        request.param,
        database_url=f"sqlite:///{(tmp_path / 'records.db').as_posix()}",
        data_dir=tmp_path,
    )
    return SchoolRecords(collections, backend=request.param)


@pytest.fixture()
def teacher_fields() -> dict:
    return {
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace.hopper@example.com",
        "department": "Computer Science",
    }


@pytest.fixture()
def student_fields() -> dict:
    return {
        "first_name": "Katherine",
        "last_name": "Johnson",
        "grade": 11,
        "student_number": "S-1001",
    }


@pytest.fixture()
def teacher(records, teacher_fields) -> dict:
    return records.teachers.create(teacher_fields)


@pytest.fixture()
def student(records, student_fields) -> dict:
    return records.students.create(student_fields)


@pytest.fixture()
def add_course(records):
    def _add(teacher_id: int, **overrides) -> dict:
        fields = {
            "code": "CS101",
            "name": "Programming Basics",
            "teacher_id": teacher_id,
            "semester": "Fall",
            "room": "C3",
        }
        fields.update(overrides)
        return records.courses.create(fields)

    return _add


@pytest.fixture()
def course(teacher, add_course) -> dict:
    return add_course(teacher["id"])


@pytest.fixture()
def add_result(records):
    def _add(student_id: int, course_id: int, mark: float = 8, out_of: float = 10, **overrides) -> dict:
        fields = {
            "student_id": student_id,
            "course_id": course_id,
            "test_name": "Quiz",
            "date": "2024-10-01",
            "mark": mark,
            "out_of": out_of,
        }
        fields.update(overrides)
        return records.tests.create(fields)

    return _add
