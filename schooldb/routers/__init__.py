"""API routers, one per record collection."""
from __future__ import annotations

from . import courses, students, teachers, tests

ROUTERS = (teachers.router, courses.router, students.router, tests.router)

__all__ = ["ROUTERS"]
