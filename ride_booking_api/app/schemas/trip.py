"""
Pydantic models for trip data.

``TripRead`` mirrors a single row of the ``Trip`` table and is returned
by the lookup-by-id endpoint.  ``TripSearchResult`` extends it with the
denormalised route, vehicle, driver and user records returned by trip
search.  The driver record appears twice, under ``vehicle.driver`` and
as a top-level ``driver``; older clients read one or the other and
both must carry the same content.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from .city import CityRead
from .common import CamelModel


class TripRead(CamelModel):
    id: str
    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    route_id: Optional[str] = None
    travel_date: Optional[datetime] = Field(None, examples=["2024-06-01T08:00:00"])
    departure_time: Optional[str] = Field(None, examples=["08:00"])
    total_seats: Optional[int] = None
    available_seats: Optional[int] = None
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserSummary(CamelModel):
    id: str
    name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    language_preference: Optional[str] = None


class DriverSummary(CamelModel):
    id: str
    user_id: str
    is_active: Optional[bool] = None
    user: UserSummary


class VehicleSummary(CamelModel):
    id: str
    type: Optional[str] = None
    total_seats: Optional[int] = None
    number_plate: Optional[str] = None
    driver: DriverSummary


class RouteSummary(CamelModel):
    id: str
    # Stored as JSON and passed through untouched.
    checkpoints: Any = None
    source_city_id: str
    destination_city_id: str
    source_city: CityRead
    destination_city: CityRead


class TripSearchResult(TripRead):
    """A trip together with its route, vehicle, driver and user."""

    boarding_city_id: str
    destination_city_id: str
    route: RouteSummary
    vehicle: VehicleSummary
    driver: DriverSummary
