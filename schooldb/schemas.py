"""Pydantic schemas shared across the records API.

Write schemas keep every field optional at the type level; required-field
checks belong to the repositories so that all missing fields are reported
together. Field names are snake_case in Python and camelCase on the wire.
"""
from __future__ import annotations

from datetime import date as Date
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import MAX_SQL_INTEGER, MIN_SQL_INTEGER


# Integers stored in SQLite INTEGER columns.
SqlInt = Annotated[int, Field(ge=MIN_SQL_INTEGER, le=MAX_SQL_INTEGER)]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Teachers
# ---------------------------------------------------------------------------


class TeacherCreate(ApiModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    room: Optional[str] = None


class TeacherUpdate(TeacherCreate):
    pass


class TeacherRead(ApiModel):
    id: int
    first_name: str
    last_name: str
    email: str
    department: str
    room: str = ""

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------


class CourseCreate(ApiModel):
    code: Optional[str] = None
    name: Optional[str] = None
    teacher_id: Optional[SqlInt] = None
    semester: Optional[str] = None
    room: Optional[str] = None
    schedule: Optional[str] = None


class CourseUpdate(CourseCreate):
    pass


class CourseRead(ApiModel):
    id: int
    code: str
    name: str
    teacher_id: int
    semester: str
    room: str
    schedule: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------


class StudentCreate(ApiModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    grade: Optional[SqlInt] = None
    student_number: Optional[str] = None
    homeroom: Optional[str] = None


class StudentUpdate(StudentCreate):
    pass


class StudentRead(ApiModel):
    id: int
    first_name: str
    last_name: str
    grade: int
    student_number: str
    homeroom: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Tests (assessment results)
# ---------------------------------------------------------------------------


class TestCreate(ApiModel):
    __test__ = False

    student_id: Optional[SqlInt] = None
    course_id: Optional[SqlInt] = None
    test_name: Optional[str] = None
    date: Optional[Date] = None
    mark: Optional[float] = None
    out_of: Optional[float] = None
    weight: Optional[float] = None


class TestUpdate(TestCreate):
    __test__ = False


class TestRead(ApiModel):
    __test__ = False

    id: int
    student_id: int
    course_id: int
    test_name: str
    date: Date
    mark: float
    out_of: float
    weight: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Derived reads
# ---------------------------------------------------------------------------


class AverageResponse(ApiModel):
    kind: str
    id: int
    count: int
    # None means "no tests recorded", which is distinct from an average of 0%.
    average_percent: Optional[float] = None


class CourseTestCountResponse(ApiModel):
    course_id: int
    course_name: str
    test_count: int


class TeacherSummaryResponse(ApiModel):
    teacher_id: int
    teacher_name: str
    courses: List[CourseTestCountResponse] = Field(default_factory=list)


class HealthResponse(ApiModel):
    status: str
    backend: str
    counts: dict[str, int]
