"""Application configuration settings."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final

BASE_DIR: Final[Path] = Path(__file__).resolve().parent.parent
DATA_DIR: Final[Path] = Path(os.getenv("SCHOOLDB_DATA_DIR", str(BASE_DIR / "data")))

# Either "sqlite" (SQLAlchemy) or "json" (one file per collection).
STORAGE_BACKEND: Final[str] = os.getenv("SCHOOLDB_BACKEND", "sqlite").lower()

DATABASE_URL: Final[str] = os.getenv(
    "DATABASE_URL", f"sqlite:///{(DATA_DIR / 'schooldb.db').as_posix()}"
)
SQLALCHEMY_ECHO: Final[bool] = os.getenv("SQLALCHEMY_ECHO") == "1"

SEED_DEV_DATA: Final[bool] = os.getenv("SCHOOLDB_SEED") == "1"
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

COLLECTION_NAMES: Final[tuple[str, ...]] = ("teachers", "courses", "students", "tests")

# Range of a SQLite INTEGER column; ids and references above it are invalid.
MIN_SQL_INTEGER: Final[int] = -(2**63)
MAX_SQL_INTEGER: Final[int] = 2**63 - 1
