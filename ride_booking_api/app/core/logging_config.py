"""
Logging configuration for the API process.

``setup_logging`` installs the console (and optional file) handlers on
the root logger the first time it runs, and on every call sets how
chatty SQLAlchemy is: statements are logged only when ``LOG_SQL`` is
enabled, otherwise the engine loggers stay at WARNING.
"""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# SQLAlchemy loggers that emit per-statement and per-checkout records.
SQL_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def _handler_config(level: str, logfile: Optional[str]) -> Dict[str, Any]:
    handlers: Dict[str, Any] = {
        "console": {"class": "logging.StreamHandler", "formatter": "standard"},
    }
    if logfile:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "filename": str(Path(logfile).resolve()),
            "encoding": "utf-8",
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}},
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
    }


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, sql_echo: bool = False) -> None:
    """Configure logging for the service.

    Parameters
    ----------
    level : str
        Root level name (``"DEBUG"``, ``"INFO"``...), case insensitive.
        Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Extra file to write records to.  Empty means console only.
    sql_echo : bool
        Log SQL statements at INFO.
    """
    sql_level = logging.INFO if sql_echo else logging.WARNING
    for name in SQL_LOGGERS:
        logging.getLogger(name).setLevel(sql_level)

    if logging.getLogger().handlers:
        # Handlers already installed by uvicorn, pytest or an earlier call.
        return

    level_name = level.upper()
    if not isinstance(logging.getLevelName(level_name), int):
        level_name = "INFO"
    logging.config.dictConfig(_handler_config(level_name, logfile))
