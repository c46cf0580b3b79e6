"""
Main entrypoint for the Ride Booking API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn ride_booking_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import create_db_engine
from .core.exceptions import ResourceNotFoundError, ValidationError
from .core.logging_config import setup_logging
from .schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(detail=detail).model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and driver exceptions to HTTP responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("Bad request %s %s: %s", request.method, request.url.path, exc.message)
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        logger.warning("Bad request %s %s: %s", request.method, request.url.path, problems)
        return _error(status.HTTP_400_BAD_REQUEST, problems or "Invalid request")

    @app.exception_handler(ResourceNotFoundError)
    async def not_found_handler(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        # The driver message may reveal schema details; it is logged only.
        error_id = str(uuid.uuid4())
        logger.error(
            "Database error (ID: %s) while handling %s %s: %s",
            error_id,
            request.method,
            request.url.path,
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    engine : Optional[Engine]
        Engine to serve requests from.  When omitted, one is built from
        the settings at startup and disposed of at shutdown.  An engine
        passed in is owned by the caller and is left open.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the code below can
    # safely log messages.
    setup_logging(settings.log_level, settings.log_file or None, sql_echo=settings.log_sql)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.engine = engine

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    if engine is None:

        @app.on_event("startup")
        async def startup_event() -> None:
            app.state.engine = create_db_engine()

        @app.on_event("shutdown")
        async def shutdown_event() -> None:
            if app.state.engine is not None:
                app.state.engine.dispose()
                app.state.engine = None

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
