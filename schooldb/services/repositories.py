"""Create/read/update/delete services for the four record collections."""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping

import pydantic
from pydantic import BaseModel

from ..errors import NotFound, ValidationError
from ..schemas import (
    CourseCreate,
    CourseUpdate,
    StudentCreate,
    StudentUpdate,
    TeacherCreate,
    TeacherUpdate,
    TestCreate,
    TestUpdate,
)
from ..storage import Collection, Record
from .identifiers import IdentifierAllocator, parse_record_id
from .integrity import IntegrityChecker

LOGGER = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class EntityRepository:
    """Shared CRUD rules; subclasses declare their collection and fields.

    Only fields declared by ``create_schema``/``update_schema`` ever reach
    storage. Creates, updates and deletes of one collection run under that
    collection's allocator lock.
    """

    name: ClassVar[str]
    create_schema: ClassVar[type[BaseModel]]
    update_schema: ClassVar[type[BaseModel]]
    required: ClassVar[tuple[str, ...]] = ()
    defaults: ClassVar[dict[str, Any]] = {}

    def __init__(
        self,
        collections: Mapping[str, Collection],
        allocator: IdentifierAllocator,
        integrity: IntegrityChecker,
    ) -> None:
        self.collection = collections[self.name]
        self.allocator = allocator
        self.integrity = integrity

    def list_all(self) -> list[Record]:
        return self.collection.find_all()

    def list_where(self, field: str, value: Any) -> list[Record]:
        return self.collection.find_where(field, value)

    def get_by_id(self, record_id: int | str) -> Record:
        record_id = parse_record_id(record_id)
        record = self.collection.find_by_id(record_id)
        if record is None:
            raise NotFound(self.name, record_id)
        return record

    def create(self, fields: BaseModel | Mapping[str, Any]) -> Record:
        data = self._allowed_fields(self.create_schema, fields)
        missing = [field for field in self.required if _is_blank(data.get(field))]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing)
        for field, default in self.defaults.items():
            if data.get(field) is None:
                data[field] = default

        self.integrity.check_references(self.name, data)
        with self.allocator.lock_for(self.name):
            record_id = self.allocator.next_id(self.collection)
            record = self.collection.insert({"id": record_id, **data})

        LOGGER.info("Created %s %s", self.name, record_id)
        return record

    def update(self, record_id: int | str, fields: BaseModel | Mapping[str, Any]) -> Record:
        record_id = parse_record_id(record_id)
        data = self._allowed_fields(self.update_schema, fields)
        with self.allocator.lock_for(self.name):
            if self.collection.find_by_id(record_id) is None:
                raise NotFound(self.name, record_id)
            if not data:
                raise ValidationError("No fields to update")
            blank = [field for field in self.required if field in data and _is_blank(data[field])]
            if blank:
                raise ValidationError(f"Required fields cannot be blank: {', '.join(blank)}", blank)
            for field, default in self.defaults.items():
                if field in data and data[field] is None:
                    data[field] = default

            self.integrity.check_references(self.name, data)
            updated = self.collection.update_by_id(record_id, data)

        if updated is None:
            raise NotFound(self.name, record_id)
        return updated

    def delete(self, record_id: int | str) -> Record:
        """Remove a record and return its last stored state."""

        record_id = parse_record_id(record_id)
        with self.allocator.lock_for(self.name):
            if self.collection.find_by_id(record_id) is None:
                raise NotFound(self.name, record_id)
            self.integrity.check_deletable(self.name, record_id)
            removed = self.collection.delete_by_id(record_id)

        if removed is None:
            raise NotFound(self.name, record_id)
        LOGGER.info("Deleted %s %s", self.name, record_id)
        return removed

    def _allowed_fields(
        self, schema: type[BaseModel], fields: BaseModel | Mapping[str, Any]
    ) -> dict[str, Any]:
        if not isinstance(fields, schema):
            source = fields
            if isinstance(fields, BaseModel):
                source = fields.model_dump(exclude_unset=True)
            try:
                fields = schema.model_validate(source)
            except pydantic.ValidationError as exc:
                names = {info.alias or name: name for name, info in schema.model_fields.items()}
                invalid = []
                for error in exc.errors():
                    parts = [str(names.get(part, part)) for part in error["loc"]]
                    invalid.append(".".join(parts))
                raise ValidationError(f"Invalid values for: {', '.join(invalid)}", invalid) from exc
        return fields.model_dump(mode="json", exclude_unset=True)


class TeacherRepository(EntityRepository):
    name = "teachers"
    create_schema = TeacherCreate
    update_schema = TeacherUpdate
    required = ("first_name", "last_name", "email", "department")
    defaults = {"room": ""}


class CourseRepository(EntityRepository):
    name = "courses"
    create_schema = CourseCreate
    update_schema = CourseUpdate
    required = ("code", "name", "teacher_id", "semester", "room")
    defaults = {"schedule": None}

    def list_for_teacher(self, teacher_id: int | str) -> list[Record]:
        return self.list_where("teacher_id", parse_record_id(teacher_id))


class StudentRepository(EntityRepository):
    name = "students"
    create_schema = StudentCreate
    update_schema = StudentUpdate
    required = ("first_name", "last_name", "grade", "student_number")
    defaults = {"homeroom": None}


class TestRepository(EntityRepository):
    __test__ = False

    name = "tests"
    create_schema = TestCreate
    update_schema = TestUpdate
    required = ("student_id", "course_id", "test_name", "date", "mark", "out_of")
    defaults = {"weight": None}

    def list_for_student(self, student_id: int | str) -> list[Record]:
        return self.list_where("student_id", parse_record_id(student_id))

    def list_for_course(self, course_id: int | str) -> list[Record]:
        return self.list_where("course_id", parse_record_id(course_id))


__all__ = [
    "CourseRepository",
    "EntityRepository",
    "StudentRepository",
    "TeacherRepository",
    "TestRepository",
]
