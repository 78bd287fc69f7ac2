"""In-memory and JSON-file backed collections."""
from __future__ import annotations

import json
import logging
import os
import threading
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

from ..errors import StorageUnavailable

LOGGER = logging.getLogger(__name__)

Record = dict[str, Any]


class MemoryCollection:
    """Thread-safe list of records kept in insertion order."""

    def __init__(self, name: str, records: list[Record] | None = None) -> None:
        self.name = name
        self._records: list[Record] = [dict(record) for record in records or []]
        self._lock = threading.Lock()

    def find_all(self) -> list[Record]:
        with self._lock:
            return deepcopy(self._records)

    def find_by_id(self, record_id: int) -> Record | None:
        with self._lock:
            index = self._index_of(record_id)
            return None if index is None else deepcopy(self._records[index])

    def find_where(self, field: str, value: Any) -> list[Record]:
        with self._lock:
            return [deepcopy(record) for record in self._records if record.get(field) == value]

    def insert(self, record: Mapping[str, Any]) -> Record:
        stored = dict(record)
        with self._lock:
            self._commit([*self._records, stored])
            return deepcopy(stored)

    def update_by_id(self, record_id: int, changes: Mapping[str, Any]) -> Record | None:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            updated = {**self._records[index], **changes}
            records = list(self._records)
            records[index] = updated
            self._commit(records)
            return deepcopy(updated)

    def delete_by_id(self, record_id: int) -> Record | None:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            records = list(self._records)
            removed = records.pop(index)
            self._commit(records)
            return removed

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def _index_of(self, record_id: int) -> int | None:
        for index, record in enumerate(self._records):
            if record.get("id") == record_id:
                return index
        return None

    def _commit(self, records: list[Record]) -> None:
        # Memory only changes once the new state has been persisted.
        self._persist(records)
        self._records = records

    def _persist(self, records: list[Record]) -> None:
        """Hook for subclasses; called with the lock held before each mutation lands."""


class JsonFileCollection(MemoryCollection):
    """Collection mirrored to a pretty-printed JSON array on disk.

    A missing file is a fresh collection. A file that exists but cannot be
    read as a JSON array is a startup fault, never an empty collection.
    """

    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(name, self._load())

    def _load(self) -> list[Record]:
        if not self.path.exists():
            LOGGER.info("No stored %s at %s; starting with an empty collection", self.name, self.path)
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageUnavailable(f"Could not read {self.name} from {self.path}") from exc
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise StorageUnavailable(f"{self.path} does not contain a list of {self.name} records")

        LOGGER.info("Loaded %s %s from %s", len(data), self.name, self.path)
        return data

    def _persist(self, records: list[Record]) -> None:
        payload = json.dumps(records, indent=2, ensure_ascii=False)
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(payload, encoding="utf-8")
            os.replace(temp_path, self.path)
        except OSError as exc:
            raise StorageUnavailable(f"Could not write {self.name} to {self.path}") from exc


__all__ = ["JsonFileCollection", "MemoryCollection"]
