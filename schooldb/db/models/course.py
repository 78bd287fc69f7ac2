"""Course model."""
from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from schooldb.db import Base


class Course(Base):
    """A course taught by one teacher.

    ``teacher_id`` holds the teacher's legacy id rather than a database
    foreign key; deletes are guarded by the integrity checker instead.
    """

    __tablename__ = "courses"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    code: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    teacher_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    semester: Mapped[str] = mapped_column(String(64), nullable=False)
    room: Mapped[str] = mapped_column(String(64), nullable=False)
    schedule: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover
        return f"Course(id={self.id!r}, code={self.code!r})"
