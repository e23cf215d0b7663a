"""
Async engine factory.

Every pooled PostgreSQL connection is reset on checkout so a tenant scope
can never survive a pool hand-off, even if a transaction-local reset was
skipped. SQLite connections get foreign keys switched on so tenant
deletion cascades the same way it does on PostgreSQL.
"""

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from .rls import supports_row_level_security

logger = logging.getLogger(__name__)


def reset_connection_state(dbapi_conn: Any, connection_record: Any, connection_proxy: Any) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("RESET ALL")
    cursor.close()


def enable_sqlite_foreign_keys(dbapi_conn: Any, connection_record: Any) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def configure_engine(engine: AsyncEngine) -> AsyncEngine:
    dialect = engine.dialect.name
    if supports_row_level_security(dialect):
        event.listen(engine.sync_engine, "checkout", reset_connection_state)
    elif dialect == "sqlite":
        event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
    logger.debug("Configured %s engine", dialect)
    return engine


def create_engine(db_uri: str, **kwargs: Any) -> AsyncEngine:
    return configure_engine(create_async_engine(db_uri, future=True, **kwargs))


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
