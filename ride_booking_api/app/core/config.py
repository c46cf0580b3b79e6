"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, with defaults for every field.  Deployments
override these via the environment (for example an ``.env`` file
loaded by the process manager); nothing here reads files itself.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Ride Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # Log every SQL statement through the ``sqlalchemy.engine`` logger.
    log_sql: bool = os.getenv("LOG_SQL", "false").lower() in {"1", "true", "yes"}

    # Prefix applied to every route.  Existing mobile clients call the
    # bare paths (``/cities``, ``/trips/search``), so the default is empty.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # SQLAlchemy database URL, e.g. ``postgresql+psycopg://user:pw@host/rides``.
    # Relative SQLite paths are resolved against the project root by the
    # ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///ride_booking.db")

    # Connection pool bounds: ``db_pool_size`` persistent connections plus
    # up to ``db_max_overflow`` temporary ones; a request waits at most
    # ``db_pool_timeout`` seconds for a free connection.
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    db_max_overflow: int = int(os.getenv("DB_MAX_OVERFLOW", "0"))
    db_pool_timeout: float = float(os.getenv("DB_POOL_TIMEOUT", "30"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
