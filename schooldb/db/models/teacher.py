"""Teacher domain model."""
from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from schooldb.db import Base


class Teacher(Base):
    """Represents an educator who teaches courses."""

    __tablename__ = "teachers"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    department: Mapped[str] = mapped_column(String(255), nullable=False)
    room: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"Teacher(id={self.id!r}, email={self.email!r})"
