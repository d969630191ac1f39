"""
Database engine, session factory, and metadata shared across the application.

The engine is not created at import time: the application lifespan calls
``init_engine`` on startup and ``dispose_engine`` on shutdown, and every
request receives its own session through ``get_db``.
"""

from __future__ import annotations

from datetime import datetime
import logging
import random
import time
from typing import Any, Callable, Generator, Optional, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker[Session]] = None


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """Engine options per backend: SQLite needs cross-thread access, servers get a pool."""

    if db_url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "echo": settings.db_echo,
            "future": True,
        }
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "echo": settings.db_echo,
        "future": True,
    }


def _add_pool_events(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
        connection_record.info["connect_time"] = datetime.now()
        logger.debug("Database connection established")

    @event.listens_for(engine, "checkout")
    def receive_checkout(
        dbapi_connection: Any, connection_record: Any, connection_proxy: Any
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine, "checkin")
    def receive_checkin(dbapi_connection: Any, connection_record: Any) -> None:
        logger.debug("Connection returned to pool")


def enable_sqlite_savepoints(engine: Engine) -> None:
    """
    Let SQLAlchemy own BEGIN on pysqlite so SAVEPOINTs behave.

    pysqlite defers BEGIN until the first DML statement, which breaks
    ``Session.begin_nested``; this is the workaround from the SQLAlchemy
    SQLite dialect documentation.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def init_engine(db_url: Optional[str] = None) -> Engine:
    """Create the process-wide engine and session factory (idempotent)."""
    global _engine, _session_factory

    if _engine is not None:
        return _engine

    url = db_url or settings.database_url
    engine = create_engine(url, **_build_engine_kwargs(url))
    _add_pool_events(engine)
    if settings.is_sqlite(url):
        enable_sqlite_savepoints(engine)
    _engine = engine
    _session_factory = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    logger.info("Database engine initialized (dialect=%s)", engine.dialect.name)
    return engine


def dispose_engine() -> None:
    """Release pooled connections and forget the engine."""
    global _engine, _session_factory

    if _engine is None:
        return
    _engine.dispose()
    logger.info("Database engine disposed")
    _engine = None
    _session_factory = None


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database engine not initialized; call init_engine() first")
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    if _session_factory is None:
        raise RuntimeError("Database engine not initialized; call init_engine() first")
    return _session_factory


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


T = TypeVar("T")
# Only target transient disconnect errors emitted when the pooler restarts.
_RETRYABLE_ERROR_SNIPPETS = (
    "server closed the connection",
    "ssl connection has been closed unexpectedly",
)


def _is_retryable_db_error(exc: OperationalError) -> bool:
    message = str(exc).lower()
    return any(snippet in message for snippet in _RETRYABLE_ERROR_SNIPPETS)


def _retry_delay(attempt: int) -> float:
    base = 0.1 * (2 ** (attempt - 1))
    return base + random.uniform(0, 0.05 * attempt)


def with_db_retry(op_name: str, func: Callable[[], T], *, max_attempts: int = 3) -> T:
    """
    Execute a DB operation with retries for transient disconnects.
    """

    attempt = 1
    while True:
        try:
            return func()
        except OperationalError as exc:
            if attempt >= max_attempts or not _is_retryable_db_error(exc):
                raise

            delay = _retry_delay(attempt)
            logger.warning(
                "Transient DB failure detected, retrying",
                extra={
                    "event": "db_retry",
                    "op": op_name,
                    "attempt": attempt,
                    "delay": delay,
                    "error": str(exc),
                },
            )
            time.sleep(delay)
            attempt += 1


__all__ = [
    "Base",
    "dispose_engine",
    "enable_sqlite_savepoints",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_engine",
    "with_db_retry",
]
