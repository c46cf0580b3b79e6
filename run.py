"""Entry point for the Ride Booking API server.

Starts the FastAPI application under Uvicorn.  It is intended to be
executed from the project root, for example under Docker or a process
manager where you only specify a single Python file to run.

Configuration such as DATABASE_URL, HOST and PORT is read from the
environment; see ``ride_booking_api/app/core/config.py`` for the full
list of supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from ride_booking_api.app.core.config import settings
from ride_booking_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting server on http://%s:%d", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
