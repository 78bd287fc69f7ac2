"""Database configuration and session management utilities."""
from __future__ import annotations

import contextlib
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from schooldb.config import DATABASE_URL, SQLALCHEMY_ECHO

Base = declarative_base()


def build_engine(url: str = DATABASE_URL, echo: bool = SQLALCHEMY_ECHO) -> Engine:
    """Create an engine for ``url``, preparing SQLite targets as needed."""

    if url in ("sqlite://", "sqlite:///:memory:"):
        # A single shared connection keeps the in-memory database alive across threads.
        return create_engine(
            url,
            future=True,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if url.startswith("sqlite:///"):
        target = url.replace("sqlite:///", "", 1)
        if not target.startswith("file:"):
            Path(target).expanduser().parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            url, future=True, echo=echo, connect_args={"check_same_thread": False}
        )

    return create_engine(url, future=True, echo=echo)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def init_db(engine: Engine) -> None:
    """Create database tables for all registered models."""
    from schooldb.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextlib.contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "init_db",
    "session_scope",
]
