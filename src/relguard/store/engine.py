"""Database engine and session management.

This module provides:
- create_store_engine: engine factory applying SQLite pragmas on connect
- Store: engine owner with plain and transactional session scopes

Cascade deletes issue one statement per relation level and commit nothing
themselves; wrap them in ``Store.transaction()`` to make the whole cascade
atomic.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from relguard.config.models import DatabaseConfig

logger = structlog.get_logger()

DEFAULT_BUSY_TIMEOUT_MS = 30000


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_store_engine(
    url: str,
    *,
    busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS,
    echo: bool = False,
) -> Engine:
    """Create an engine; SQLite connections get foreign keys and a busy timeout."""
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_url(url):
            # One shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _sqlite_pragmas(busy_timeout_ms))
    return engine


def _sqlite_pragmas(busy_timeout_ms: int) -> Any:
    def configure(dbapi_conn: Any, _connection_record: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return configure


class Store:
    """Engine owner handing out ORM sessions."""

    def __init__(
        self,
        url: str,
        busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS,
        echo: bool = False,
    ) -> None:
        self.url = url
        self.engine = create_store_engine(url, busy_timeout_ms=busy_timeout_ms, echo=echo)

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> Store:
        if not config.url:
            raise ValueError("database.url is not configured")
        return cls(config.url, busy_timeout_ms=config.busy_timeout_ms, echo=config.echo)

    def create_all(self) -> None:
        """Create all tables from SQLModel metadata."""
        SQLModel.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """ORM session; the caller decides when to commit."""
        with Session(self.engine) as session:
            yield session

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """Session that commits on successful exit and rolls back on exception."""
        with Session(self.engine) as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                logger.debug("store_transaction_rolled_back", url=self.engine.url.render_as_string())
                raise

    def dispose(self) -> None:
        self.engine.dispose()
