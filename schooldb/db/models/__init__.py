"""SQLAlchemy model package."""
from schooldb.db.models.course import Course
from schooldb.db.models.student import Student
from schooldb.db.models.teacher import Teacher
from schooldb.db.models.test import Test

MODELS_BY_COLLECTION = {
    "teachers": Teacher,
    "courses": Course,
    "students": Student,
    "tests": Test,
}

__all__ = [
    "Course",
    "MODELS_BY_COLLECTION",
    "Student",
    "Teacher",
    "Test",
]
