"""Development fixture helpers."""
from __future__ import annotations

import logging

from schooldb.services import SchoolRecords

LOGGER = logging.getLogger(__name__)


def seed_dev_data(records: SchoolRecords) -> bool:
    """Populate empty storage with a demo teacher, course, student and test.

    Returns ``True`` when records were created.
    """
    if records.teachers.list_all():
        return False

    teacher = records.teachers.create(
        {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada.lovelace@example.com",
            "department": "Mathematics",
            "room": "B12",
        }
    )
    course = records.courses.create(
        {
            "code": "MAT101",
            "name": "Introduction to Algebra",
            "teacher_id": teacher["id"],
            "semester": "Fall",
            "room": "B12",
            "schedule": "Mon/Wed 09:00",
        }
    )
    student = records.students.create(
        {
            "first_name": "Alan",
            "last_name": "Turing",
            "grade": 10,
            "student_number": "S-0001",
            "homeroom": "10A",
        }
    )
    records.tests.create(
        {
            "student_id": student["id"],
            "course_id": course["id"],
            "test_name": "Unit 1 Quiz",
            "date": "2024-09-20",
            "mark": 18,
            "out_of": 20,
        }
    )
    LOGGER.info("Seeded demo records")
    return True
