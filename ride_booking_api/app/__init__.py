"""
Application package initializer.

The API is organised in layers: ``core`` (settings, logging, database
pool, exceptions), ``services`` (SQL queries and response assembly),
``schemas`` (pydantic output records) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
