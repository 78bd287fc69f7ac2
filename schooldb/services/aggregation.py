"""Derived statistics over stored test results."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..errors import InvalidTestDataError
from ..storage import Record
from .identifiers import parse_record_id
from .repositories import CourseRepository, StudentRepository, TeacherRepository, TestRepository

_ONE_DECIMAL = Decimal("0.1")
_HUNDRED = Decimal(100)

# Collections that can be averaged and the test field that links them.
AVERAGE_KEYS: dict[str, str] = {"students": "student_id", "courses": "course_id"}


@dataclass(frozen=True)
class Average:
    kind: str
    id: int
    count: int
    average_percent: Optional[float]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "id": self.id,
            "count": self.count,
            "average_percent": self.average_percent,
        }


@dataclass(frozen=True)
class CourseTestCount:
    course_id: int
    course_name: str
    test_count: int


@dataclass(frozen=True)
class TeacherSummary:
    teacher_id: int
    teacher_name: str
    courses: list[CourseTestCount] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "teacher_id": self.teacher_id,
            "teacher_name": self.teacher_name,
            "courses": [
                {
                    "course_id": course.course_id,
                    "course_name": course.course_name,
                    "test_count": course.test_count,
                }
                for course in self.courses
            ],
        }


def _percentage(test: Record) -> Decimal:
    out_of = Decimal(str(test["out_of"]))
    if out_of == 0:
        raise InvalidTestDataError(test["id"], "outOf is zero")
    return Decimal(str(test["mark"])) / out_of * _HUNDRED


def average_percent(tests: Iterable[Record]) -> Optional[float]:
    """Mean of the per-test percentages, or ``None`` when there are no tests.

    Every test counts equally whatever its ``out_of``. The result is rounded
    to one decimal place, halves away from zero.
    """

    percentages = [_percentage(test) for test in tests]
    if not percentages:
        return None
    mean = sum(percentages, Decimal(0)) / len(percentages)
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


class AggregationEngine:
    def __init__(
        self,
        teachers: TeacherRepository,
        courses: CourseRepository,
        students: StudentRepository,
        tests: TestRepository,
    ) -> None:
        self.teachers = teachers
        self.courses = courses
        self.students = students
        self.tests = tests

    def average_for(self, kind: str, record_id: int | str) -> Average:
        """Average percentage of all tests recorded for a student or a course."""

        if kind not in AVERAGE_KEYS:
            raise ValueError(f"Cannot average tests by {kind!r}")
        record_id = parse_record_id(record_id)
        owner = self.students if kind == "students" else self.courses
        owner.get_by_id(record_id)

        tests = self.tests.list_where(AVERAGE_KEYS[kind], record_id)
        return Average(
            kind=kind,
            id=record_id,
            count=len(tests),
            average_percent=average_percent(tests),
        )

    def summary_for(self, teacher_id: int | str) -> TeacherSummary:
        teacher = self.teachers.get_by_id(teacher_id)
        courses = [
            CourseTestCount(
                course_id=course["id"],
                course_name=course["name"],
                test_count=len(self.tests.list_for_course(course["id"])),
            )
            for course in self.courses.list_for_teacher(teacher["id"])
        ]
        return TeacherSummary(
            teacher_id=teacher["id"],
            teacher_name=f"{teacher['first_name']} {teacher['last_name']}",
            courses=courses,
        )


__all__ = [
    "AVERAGE_KEYS",
    "AggregationEngine",
    "Average",
    "CourseTestCount",
    "TeacherSummary",
    "average_percent",
]
