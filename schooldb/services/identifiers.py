"""Legacy integer identifiers: allocation and strict parsing."""
from __future__ import annotations

import re
import threading

from ..config import MAX_SQL_INTEGER
from ..errors import InvalidIdError
from ..storage import Collection

_ID_PATTERN = re.compile(r"[0-9]+")


def parse_record_id(raw: object) -> int:
    """Parse a path or query identifier, rejecting anything but plain digits."""

    if isinstance(raw, bool):
        raise InvalidIdError(raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _ID_PATTERN.fullmatch(raw):
        value = int(raw)
    else:
        raise InvalidIdError(raw)
    if value < 0 or value > MAX_SQL_INTEGER:
        raise InvalidIdError(raw)
    return value


class IdentifierAllocator:
    """Hands out ``max(id) + 1`` per collection.

    Callers must hold :meth:`lock_for` of the collection from the call to
    :meth:`next_id` until the new record has been inserted.
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock_for(self, name: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.RLock()
            return lock

    def next_id(self, collection: Collection) -> int:
        ids = [record["id"] for record in collection.find_all() if record.get("id") is not None]
        return max(ids) + 1 if ids else 1


__all__ = ["IdentifierAllocator", "parse_record_id"]
