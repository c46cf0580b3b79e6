"""
Trip endpoints for API v1.

``/trips/search`` must be registered before ``/trips/{trip_id}``,
otherwise the literal ``search`` segment would be captured as an id.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.engine import Engine

from ride_booking_api.app.core.db import get_engine
from ride_booking_api.app.schemas.common import SuccessResponse
from ride_booking_api.app.schemas.trip import TripRead, TripSearchResult
from ride_booking_api.app.services.trip_service import TripService, parse_travel_date

router = APIRouter()


@router.get("/search", response_model=SuccessResponse[List[TripSearchResult]])
def search_trips(
    from_city_id: str = Query(..., alias="fromCityId"),
    to_city_id: str = Query(..., alias="toCityId"),
    travel_date: str = Query(..., alias="date", description="Travel day as YYYY-MM-DD"),
    engine: Engine = Depends(get_engine),
) -> SuccessResponse[List[TripSearchResult]]:
    """Find active trips between two cities on a given day.

    Each result embeds its route (with both cities), vehicle, driver
    and the driver's user record.  Responds 400 when ``date`` is not a
    valid ``YYYY-MM-DD`` day; an empty list when nothing matches.
    """
    day = parse_travel_date(travel_date)
    trips = TripService.search_trips(engine, from_city_id, to_city_id, day)
    return SuccessResponse[List[TripSearchResult]](data=trips)


@router.get("/{trip_id}", response_model=SuccessResponse[TripRead])
def get_trip(
    trip_id: str = Path(...),
    engine: Engine = Depends(get_engine),
) -> SuccessResponse[TripRead]:
    """Retrieve a single trip by its ID.  Responds 404 if it does not exist."""
    return SuccessResponse[TripRead](data=TripService.get_trip(engine, trip_id))
