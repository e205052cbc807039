"""Database session configuration."""

from __future__ import annotations

import time
from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, ORMExecuteState, Session, sessionmaker

from middle_ground.core.settings import settings
from middle_ground.services.errors import DeadlineExceeded

# Session.info key holding a time.monotonic() value past which storage work is refused.
DEADLINE_KEY = "deadline"


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import middle_ground.models  # noqa: E402,F401


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.sql_debug}
    if url.startswith("sqlite"):
        # SQLite connections are handed across FastAPI's worker threads.
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return options


def enable_sqlite_savepoints(target: Engine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINTs work on pysqlite.

    Also switches on foreign key enforcement, which SQLite leaves off.
    """

    @event.listens_for(target, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(target, "begin")
    def _on_begin(connection: Any) -> None:
        connection.exec_driver_sql("BEGIN")


engine = create_engine(
    settings.effective_database_url,
    **_engine_options(settings.effective_database_url),
)
if engine.dialect.name == "sqlite":
    enable_sqlite_savepoints(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def check_deadline(session: Session) -> None:
    """Raise :class:`DeadlineExceeded` once the session's deadline has passed."""
    deadline = session.info.get(DEADLINE_KEY)
    if deadline is not None and time.monotonic() >= deadline:
        raise DeadlineExceeded()


@event.listens_for(Session, "do_orm_execute")
def _refuse_late_statements(orm_execute_state: ORMExecuteState) -> None:
    check_deadline(orm_execute_state.session)


@event.listens_for(Session, "before_commit")
def _refuse_late_commit(session: Session) -> None:
    check_deadline(session)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
