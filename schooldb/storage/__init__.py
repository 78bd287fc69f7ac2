"""Storage collaborators: one collection object per entity kind."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence

from sqlalchemy.engine import make_url

from ..config import COLLECTION_NAMES, DATA_DIR, DATABASE_URL

LOGGER = logging.getLogger(__name__)

Record = dict[str, Any]


class Collection(Protocol):
    """Minimal storage interface the services are written against.

    Records are plain dicts keyed by snake_case field names and always carry
    the integer ``id``. Backend identities never appear in them.
    """

    name: str

    def find_all(self) -> list[Record]: ...

    def find_by_id(self, record_id: int) -> Record | None: ...

    def find_where(self, field: str, value: Any) -> list[Record]: ...

    def insert(self, record: Mapping[str, Any]) -> Record: ...

    def update_by_id(self, record_id: int, changes: Mapping[str, Any]) -> Record | None: ...

    def delete_by_id(self, record_id: int) -> Record | None: ...

    def count(self) -> int: ...


def open_collections(
    backend: str,
    *,
    database_url: str = DATABASE_URL,
    data_dir: Path = DATA_DIR,
    names: Sequence[str] = COLLECTION_NAMES,
) -> dict[str, Collection]:
    """Build one collection per name for the requested backend."""

    backend = backend.lower()
    if backend in ("sqlite", "sql"):
        from .sql import open_sql_collections

        LOGGER.info(
            "Opening SQL storage at %s",
            make_url(database_url).render_as_string(hide_password=True),
        )
        return open_sql_collections(database_url, names)
    if backend == "json":
        from .json_store import JsonFileCollection

        LOGGER.info("Opening JSON storage in %s", data_dir)
        return {name: JsonFileCollection(name, data_dir / f"{name}.json") for name in names}
    if backend == "memory":
        from .json_store import MemoryCollection

        return {name: MemoryCollection(name) for name in names}
    raise ValueError(f"Unsupported storage backend: {backend}")


__all__ = ["Collection", "Record", "open_collections"]
