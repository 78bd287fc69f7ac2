"""Reference checks between the four record collections."""
from __future__ import annotations

import logging
from typing import Mapping

from ..errors import DependencyExistsError, InvalidReferenceError
from ..storage import Collection

LOGGER = logging.getLogger(__name__)

# Foreign-key fields per collection and the collection each one points at.
REFERENCES: dict[str, dict[str, str]] = {
    "courses": {"teacher_id": "teachers"},
    "tests": {"student_id": "students", "course_id": "courses"},
}

# Collections whose records block a delete, keyed by the referenced collection.
DEPENDENTS: dict[str, tuple[tuple[str, str], ...]] = {
    "teachers": (("courses", "teacher_id"),),
    "students": (("tests", "student_id"),),
    "courses": (("tests", "course_id"),),
}


class IntegrityChecker:
    def __init__(self, collections: Mapping[str, Collection]) -> None:
        self._collections = collections

    def assert_exists(self, kind: str, record_id: int, field: str = "id") -> None:
        if self._collections[kind].find_by_id(record_id) is None:
            raise InvalidReferenceError(field, kind, record_id)

    def assert_no_dependents(self, kind: str, foreign_key: str, record_id: int) -> None:
        """Fail if any record in ``kind`` has ``foreign_key == record_id``."""

        if self._collections[kind].find_where(foreign_key, record_id):
            raise DependencyExistsError(_target_of(kind, foreign_key), record_id, kind, foreign_key)

    def check_references(self, kind: str, fields: Mapping[str, object]) -> None:
        """Validate every reference field of ``kind`` present in ``fields``."""

        for field, target in REFERENCES.get(kind, {}).items():
            if field in fields:
                self.assert_exists(target, fields[field], field=field)

    def check_deletable(self, kind: str, record_id: int) -> None:
        for dependent, foreign_key in DEPENDENTS.get(kind, ()):
            try:
                self.assert_no_dependents(dependent, foreign_key, record_id)
            except DependencyExistsError:
                LOGGER.info("Delete of %s %s blocked by %s", kind, record_id, dependent)
                raise


def _target_of(kind: str, foreign_key: str) -> str:
    return REFERENCES[kind][foreign_key]


__all__ = ["DEPENDENTS", "REFERENCES", "IntegrityChecker"]
