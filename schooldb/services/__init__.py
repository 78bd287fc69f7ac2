"""Convenient re-exports for the records service layer."""
from __future__ import annotations

from typing import Mapping

from ..storage import Collection
from .aggregation import (
    AggregationEngine,
    Average,
    CourseTestCount,
    TeacherSummary,
    average_percent,
)
from .identifiers import IdentifierAllocator, parse_record_id
from .integrity import DEPENDENTS, REFERENCES, IntegrityChecker
from .repositories import (
    CourseRepository,
    EntityRepository,
    StudentRepository,
    TeacherRepository,
    TestRepository,
)


class SchoolRecords:
    """The four repositories and the aggregation engine over one storage handle."""

    def __init__(self, collections: Mapping[str, Collection], backend: str = "memory") -> None:
        self.collections = dict(collections)
        self.backend = backend
        self.allocator = IdentifierAllocator()
        self.integrity = IntegrityChecker(self.collections)

        shared = (self.collections, self.allocator, self.integrity)
        self.teachers = TeacherRepository(*shared)
        self.courses = CourseRepository(*shared)
        self.students = StudentRepository(*shared)
        self.tests = TestRepository(*shared)
        self.aggregation = AggregationEngine(self.teachers, self.courses, self.students, self.tests)

    def counts(self) -> dict[str, int]:
        return {name: collection.count() for name, collection in self.collections.items()}


__all__ = [
    "AggregationEngine",
    "Average",
    "CourseRepository",
    "CourseTestCount",
    "DEPENDENTS",
    "EntityRepository",
    "IdentifierAllocator",
    "IntegrityChecker",
    "REFERENCES",
    "SchoolRecords",
    "StudentRepository",
    "TeacherRepository",
    "TeacherSummary",
    "TestRepository",
    "average_percent",
    "parse_record_id",
]
