"""
Top-level package for the Ride Booking API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``ride_booking_api.app.main:app``.
"""

__all__ = []
