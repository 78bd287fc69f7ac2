"""Error taxonomy shared by the storage layer, the services and the API."""
from __future__ import annotations

from typing import Any, Iterable


def _singular(kind: str) -> str:
    return kind[:-1] if kind.endswith("s") else kind


class RecordsError(Exception):
    """Base class for expected, locally recoverable record errors."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.kind, "detail": self.message}
        payload.update(self.details())
        return payload


class InvalidIdError(RecordsError):
    """An identifier supplied by the caller is not well formed."""

    kind = "invalid_id"

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid id: {value!r}")
        self.value = value

    def details(self) -> dict[str, Any]:
        return {"value": str(self.value)}


class ValidationError(RecordsError):
    """Required fields are missing or blank, or an update carried no fields."""

    kind = "validation_error"

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.fields = list(fields)

    def details(self) -> dict[str, Any]:
        return {"fields": self.fields}


class InvalidReferenceError(RecordsError):
    """A foreign-key field names a record that does not exist."""

    kind = "invalid_reference"

    def __init__(self, field: str, target: str, record_id: int) -> None:
        super().__init__(f"{field} {record_id} does not match any {_singular(target)}")
        self.field = field
        self.target = target
        self.record_id = record_id

    def details(self) -> dict[str, Any]:
        return {"field": self.field, "collection": self.target, "id": self.record_id}


class DependencyExistsError(RecordsError):
    """A delete is blocked because other records still reference the target."""

    kind = "dependency_exists"

    def __init__(self, target: str, record_id: int, dependent: str, field: str) -> None:
        super().__init__(
            f"Cannot delete {_singular(target)} {record_id}: {dependent} still reference it"
        )
        self.target = target
        self.record_id = record_id
        self.dependent = dependent
        self.field = field

    def details(self) -> dict[str, Any]:
        return {
            "collection": self.target,
            "id": self.record_id,
            "dependent": self.dependent,
            "field": self.field,
        }


class NotFound(RecordsError):
    """The requested record does not exist."""

    kind = "not_found"

    def __init__(self, target: str, record_id: int) -> None:
        super().__init__(f"{_singular(target).capitalize()} {record_id} not found")
        self.target = target
        self.record_id = record_id

    def details(self) -> dict[str, Any]:
        return {"collection": self.target, "id": self.record_id}


class InvalidTestDataError(RecordsError):
    """A stored test cannot be aggregated, e.g. because ``out_of`` is zero."""

    kind = "invalid_test_data"

    def __init__(self, record_id: int, reason: str) -> None:
        super().__init__(f"Test {record_id} cannot be aggregated: {reason}")
        self.record_id = record_id
        self.reason = reason

    def details(self) -> dict[str, Any]:
        return {"collection": "tests", "id": self.record_id}


class StorageUnavailable(RuntimeError):
    """Raised when the storage backend fails unexpectedly.

    This is a fault rather than a :class:`RecordsError`: the core does not
    retry and the API answers with a generic failure.
    """


__all__ = [
    "DependencyExistsError",
    "InvalidIdError",
    "InvalidReferenceError",
    "InvalidTestDataError",
    "NotFound",
    "RecordsError",
    "StorageUnavailable",
    "ValidationError",
]
