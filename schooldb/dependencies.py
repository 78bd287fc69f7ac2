"""FastAPI dependencies for shared services."""
from __future__ import annotations

from pathlib import Path

from fastapi import Request

from .config import DATA_DIR, DATABASE_URL, STORAGE_BACKEND
from .services import SchoolRecords
from .storage import open_collections


def open_records(
    backend: str = STORAGE_BACKEND,
    *,
    database_url: str = DATABASE_URL,
    data_dir: Path = DATA_DIR,
) -> SchoolRecords:
    """Open the configured storage and wrap it in the record services."""

    collections = open_collections(backend, database_url=database_url, data_dir=data_dir)
    return SchoolRecords(collections, backend=backend)


def get_records(request: Request) -> SchoolRecords:  # pragma: no cover - overridden in tests
    """Return the records service built at application startup."""

    return request.app.state.records
