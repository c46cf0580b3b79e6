"""
Domain exceptions raised by the service layer.

Services never build HTTP responses themselves.  They raise one of the
classes below and the handlers registered in ``main.create_app`` turn
them into the matching status code.  Database errors
(``sqlalchemy.exc.SQLAlchemyError``) are not wrapped; they are mapped
to a generic 500 response at the same place.
"""


class RideBookingError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(RideBookingError):
    """Raised when request input is malformed (HTTP 400)."""


class ResourceNotFoundError(RideBookingError):
    """Raised when a requested record does not exist (HTTP 404)."""
