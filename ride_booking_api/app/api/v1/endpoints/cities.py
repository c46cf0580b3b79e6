"""
City endpoints for API v1.

``GET /cities/search?q=`` powers the origin/destination autocomplete;
``GET /cities`` returns the full list.  Both are public and read-only.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.engine import Engine

from ride_booking_api.app.core.db import get_engine
from ride_booking_api.app.schemas.city import CityRead
from ride_booking_api.app.schemas.common import SuccessResponse
from ride_booking_api.app.services.city_service import CityService

router = APIRouter()


@router.get("/search", response_model=SuccessResponse[List[CityRead]])
def search_cities(
    q: Optional[str] = Query(None, description="Case-insensitive part of the city name"),
    engine: Engine = Depends(get_engine),
) -> SuccessResponse[List[CityRead]]:
    """Search cities by name.

    Returns at most ten cities ordered by name.  A blank ``q`` returns
    an empty list.
    """
    return SuccessResponse[List[CityRead]](data=CityService.search_cities(engine, q))


@router.get("", response_model=SuccessResponse[List[CityRead]])
def list_cities(engine: Engine = Depends(get_engine)) -> SuccessResponse[List[CityRead]]:
    """Return all cities ordered by name."""
    return SuccessResponse[List[CityRead]](data=CityService.list_cities(engine))
