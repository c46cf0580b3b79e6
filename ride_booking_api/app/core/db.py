"""
Database integration.

This module builds the SQLAlchemy ``Engine`` the API reads from and
exposes it to request handlers through the ``get_engine`` dependency.
The engine's ``QueuePool`` bounds the number of open connections,
applies the acquisition timeout and returns each connection to the pool
(rolled back) when its ``with engine.connect()`` block exits.

The schema is owned outside this service; nothing here creates or
migrates tables.  Services open a connection only after their input
has been validated, so malformed requests never touch the database.

SQLite connections are switched to ``query_only`` and get a
``casefold`` SQL function for Unicode-aware case-insensitive matching.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.pool import QueuePool

from .config import settings

logger = logging.getLogger(__name__)


def resolve_database_url(database_url: Optional[Union[str, URL]] = None) -> URL:
    """Parse the configured URL, anchoring relative SQLite paths at the project root."""
    url = make_url(database_url or settings.database_url)
    if url.get_backend_name() == "sqlite":
        database = url.database
        if database and database != ":memory:" and not os.path.isabs(database):
            base_dir = Path(__file__).resolve().parents[3]
            url = url.set(database=str((base_dir / database).resolve()))
    return url


def _casefold(value: Optional[str]) -> Optional[str]:
    return None if value is None else value.casefold()


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA query_only = ON")
    finally:
        cursor.close()


def create_db_engine(
    database_url: Optional[Union[str, URL]] = None,
    *,
    pool_size: Optional[int] = None,
    max_overflow: Optional[int] = None,
    pool_timeout: Optional[float] = None,
) -> Engine:
    """Build an engine; unspecified pool bounds come from the settings."""
    url = resolve_database_url(database_url)
    options = {
        "poolclass": QueuePool,
        "pool_size": settings.db_pool_size if pool_size is None else pool_size,
        "max_overflow": settings.db_max_overflow if max_overflow is None else max_overflow,
        "pool_timeout": settings.db_pool_timeout if pool_timeout is None else pool_timeout,
        "pool_pre_ping": True,
    }
    if url.get_backend_name() == "sqlite":
        # Pooled connections move between worker threads.
        engine = create_engine(url, connect_args={"check_same_thread": False}, **options)
        event.listen(engine, "connect", _configure_sqlite_connection)
    else:
        engine = create_engine(url, **options)
    logger.info(
        "Using database %s (pool size %d, overflow %d)",
        url.render_as_string(hide_password=True),
        options["pool_size"],
        options["max_overflow"],
    )
    return engine


def get_engine(request: Request) -> Engine:
    """FastAPI dependency returning the application's engine.

    Operations check a connection out themselves, after validating
    their input.
    """
    return request.app.state.engine
