from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine, event  # type: ignore
from sqlalchemy.exc import IntegrityError, SQLAlchemyError  # type: ignore
from sqlalchemy.orm import Session, sessionmaker, declarative_base  # type: ignore
from sqlalchemy.pool import StaticPool  # type: ignore

from config import get_config
from config.base import DatabaseConfig
from shared.exceptions import ConsistencyError, RepositoryConnectionError


logger = logging.getLogger(__name__)

# DATABASE_URL example: postgresql+psycopg2://user:password@db:5432/handover
Base = declarative_base()

SessionFactory = Callable[[], Session]


def _enable_sqlite_foreign_keys(engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, _connection_record) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def make_engine(db_config: DatabaseConfig):
    """Build an engine; SQLite gets foreign keys and a shared connection."""
    url = db_config.url
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=db_config.echo, future=True, **kwargs)
        _enable_sqlite_foreign_keys(engine)
        return engine
    # Tune pool to avoid connection starvation and long waits
    return create_engine(
        url,
        pool_pre_ping=True,
        echo=db_config.echo,
        future=True,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_recycle=db_config.pool_recycle,
    )


def _make_engine():
    db_config = get_config().database
    if not db_config.url:
        return None
    try:
        return make_engine(db_config)
    except SQLAlchemyError as exc:
        logger.error(f"Could not create database engine: {exc}")
        return None


engine = _make_engine()
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None


def _resolve_factory(session_factory: Optional[SessionFactory]) -> SessionFactory:
    factory = session_factory or SessionLocal
    if factory is None:
        raise RepositoryConnectionError("database (DATABASE_URL not configured)")
    return factory


@contextmanager
def transaction(
    session_factory: Optional[SessionFactory] = None,
    operation: str = "write",
) -> Iterator[Session]:
    """
    Run a block as one unit of work.

    Commits when the block finishes, rolls back on any exception. Database
    failures surface as ``ConsistencyError``; domain errors raised inside the
    block propagate unchanged after the rollback.
    """
    session = _resolve_factory(session_factory)()
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.error(f"Integrity violation during {operation}: {exc}")
        raise ConsistencyError(operation, original_exception=exc, conflict=True) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f"Database error during {operation}: {exc}")
        raise ConsistencyError(operation, original_exception=exc) from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def read_session(session_factory: Optional[SessionFactory] = None) -> Iterator[Session]:
    """Session for read-only work; nothing is committed."""
    session = _resolve_factory(session_factory)()
    try:
        yield session
    finally:
        session.close()
