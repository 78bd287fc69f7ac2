"""SQLAlchemy-backed collections."""
from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator, Mapping, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..db import Base, build_engine, build_session_factory, init_db, session_scope
from ..errors import StorageUnavailable

LOGGER = logging.getLogger(__name__)

Record = dict[str, Any]


class SqlCollection:
    """Collection view over one ORM model.

    The model's ``pk`` column is the storage-native identity and is never
    copied into returned records.
    """

    def __init__(self, name: str, model: type[Base], factory: sessionmaker[Session]) -> None:
        self.name = name
        self.model = model
        self._factory = factory
        self._fields = [column.key for column in model.__table__.columns if column.key != "pk"]

    @contextlib.contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with session_scope(self._factory) as session:
                yield session
        except SQLAlchemyError as exc:
            LOGGER.exception("Storage failure on %s", self.name)
            raise StorageUnavailable(f"Storage failure on {self.name}") from exc

    def _to_record(self, instance: Base) -> Record:
        return {field: getattr(instance, field) for field in self._fields}

    def _get(self, session: Session, record_id: int) -> Base | None:
        return session.scalar(select(self.model).where(self.model.id == record_id))

    def _check_field(self, field: str) -> None:
        if field not in self._fields:
            raise KeyError(f"{self.name} has no field {field!r}")

    def find_all(self) -> list[Record]:
        with self._session() as session:
            rows = session.scalars(select(self.model).order_by(self.model.pk)).all()
            return [self._to_record(row) for row in rows]

    def find_by_id(self, record_id: int) -> Record | None:
        with self._session() as session:
            instance = self._get(session, record_id)
            return None if instance is None else self._to_record(instance)

    def find_where(self, field: str, value: Any) -> list[Record]:
        self._check_field(field)
        stmt = (
            select(self.model)
            .where(getattr(self.model, field) == value)
            .order_by(self.model.pk)
        )
        with self._session() as session:
            return [self._to_record(row) for row in session.scalars(stmt).all()]

    def insert(self, record: Mapping[str, Any]) -> Record:
        for field in record:
            self._check_field(field)
        with self._session() as session:
            instance = self.model(**record)
            session.add(instance)
            session.flush()
            return self._to_record(instance)

    def update_by_id(self, record_id: int, changes: Mapping[str, Any]) -> Record | None:
        for field in changes:
            self._check_field(field)
        with self._session() as session:
            instance = self._get(session, record_id)
            if instance is None:
                return None
            for field, value in changes.items():
                setattr(instance, field, value)
            session.flush()
            return self._to_record(instance)

    def delete_by_id(self, record_id: int) -> Record | None:
        with self._session() as session:
            instance = self._get(session, record_id)
            if instance is None:
                return None
            snapshot = self._to_record(instance)
            session.delete(instance)
            return snapshot

    def count(self) -> int:
        with self._session() as session:
            return session.scalar(select(func.count()).select_from(self.model)) or 0


def open_sql_collections(database_url: str, names: Sequence[str]) -> dict[str, SqlCollection]:
    from ..db.models import MODELS_BY_COLLECTION

    engine = build_engine(database_url)
    try:
        init_db(engine)
    except SQLAlchemyError as exc:
        raise StorageUnavailable("Could not initialise the database schema") from exc

    factory = build_session_factory(engine)
    return {name: SqlCollection(name, MODELS_BY_COLLECTION[name], factory) for name in names}


__all__ = ["SqlCollection", "open_sql_collections"]
