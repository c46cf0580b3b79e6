"""
Service layer for city lookups.

Provides the substring search used by the booking form's autocomplete
and the full alphabetical list.  All queries use bound parameters.

Case-insensitive matching follows the backend: PostgreSQL uses
``ILIKE``; SQLite compares values folded by the ``casefold`` function
that ``core.db`` registers on every SQLite connection, since SQLite's
own ``LIKE`` only folds ASCII letters.
"""

import logging
from typing import List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ..schemas.city import CityRead

logger = logging.getLogger(__name__)

# Maximum number of suggestions returned by ``search_cities``.
CITY_SEARCH_LIMIT = 10

_SQLITE_SEARCH = text(
    """
    SELECT id, name
    FROM "City"
    WHERE instr(casefold(name), :term) > 0
    ORDER BY casefold(name) ASC, id ASC
    LIMIT :limit
    """
)

_SQLITE_LIST = text(
    """
    SELECT id, name
    FROM "City"
    ORDER BY casefold(name) ASC, id ASC
    """
)

_POSTGRES_SEARCH = text(
    """
    SELECT id, name
    FROM "City"
    WHERE name ILIKE :pattern ESCAPE '\\'
    ORDER BY lower(name) ASC, id ASC
    LIMIT :limit
    """
)

_POSTGRES_LIST = text(
    """
    SELECT id, name
    FROM "City"
    ORDER BY lower(name) ASC, id ASC
    """
)


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CityService:
    """Read-only queries against the ``City`` table."""

    @classmethod
    def search_cities(cls, engine: Engine, q: Optional[str]) -> List[CityRead]:
        """Return up to ``CITY_SEARCH_LIMIT`` cities whose name contains ``q``.

        Matching is case-insensitive and results are ordered by name.
        A missing or blank ``q`` yields an empty list without opening a
        connection.
        """
        term = (q or "").strip()
        if not term:
            return []
        with engine.connect() as conn:
            if conn.dialect.name == "sqlite":
                result = conn.execute(_SQLITE_SEARCH, {"term": term.casefold(), "limit": CITY_SEARCH_LIMIT})
            else:
                pattern = f"%{_escape_like(term)}%"
                result = conn.execute(_POSTGRES_SEARCH, {"pattern": pattern, "limit": CITY_SEARCH_LIMIT})
            rows = result.mappings().all()
        logger.debug("City search %r matched %d rows", term, len(rows))
        return [cls._row_to_city(row) for row in rows]

    @classmethod
    def list_cities(cls, engine: Engine) -> List[CityRead]:
        """Return every city ordered alphabetically by name."""
        with engine.connect() as conn:
            statement = _SQLITE_LIST if conn.dialect.name == "sqlite" else _POSTGRES_LIST
            rows = conn.execute(statement).mappings().all()
        return [cls._row_to_city(row) for row in rows]

    @staticmethod
    def _row_to_city(row: Mapping) -> CityRead:
        return CityRead(id=str(row["id"]), name=row["name"])
