"""Database session configuration and the unit-of-work helper."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from quizboard.core.errors import InternalError
from quizboard.core.settings import settings

logger = logging.getLogger(__name__)

_UOW_DEPTH_KEY = "quizboard.uow_depth"


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import quizboard.models  # noqa: E402,F401


def configure_sqlite(engine: Engine) -> Engine:
    """Let pysqlite honour BEGIN/SAVEPOINT so nested units of work roll back correctly.

    Transactions open with ``BEGIN IMMEDIATE``: SQLite ignores ``FOR UPDATE``,
    so the write lock is taken up front and concurrent units of work queue on
    the busy timeout instead of failing when they try to write.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:  # pragma: no cover - driver hook
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        return configure_sqlite(
            create_engine(
                url,
                connect_args={"check_same_thread": False, "timeout": settings.sqlite_busy_timeout},
                echo=settings.sql_debug,
            )
        )
    return create_engine(url, pool_pre_ping=True, echo=settings.sql_debug)


engine = _build_engine(settings.effective_database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Run the enclosed block as one unit of work.

    Units nest: only the outermost block commits, and any exception escaping
    any level rolls the whole unit back. Storage failures surface as
    ``InternalError``; core errors propagate unchanged.
    """
    depth = db.info.get(_UOW_DEPTH_KEY, 0)
    db.info[_UOW_DEPTH_KEY] = depth + 1
    try:
        yield db
        if depth == 0:
            db.commit()
    except SQLAlchemyError as err:
        if depth > 0:
            raise
        db.rollback()
        logger.error("Unit of work failed, rolled back: %s", err, exc_info=True)
        raise InternalError("Storage failure while applying changes") from err
    except BaseException:
        if depth == 0:
            db.rollback()
        raise
    finally:
        db.info[_UOW_DEPTH_KEY] = depth


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
