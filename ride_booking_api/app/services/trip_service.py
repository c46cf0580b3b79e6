"""
Service layer for trips.

Two read operations are offered:

* ``get_trip`` fetches one ``Trip`` row by id.
* ``search_trips`` finds the active trips between two cities on a
  given day and returns each one with its route, cities, vehicle,
  driver and user embedded.

Trip search runs as a single statement so that every nested record
comes from the same snapshot.  Every hop is an inner join: a trip whose
route, cities, vehicle, driver or user is missing is left out rather
than returned with empty nested objects.
"""

import json
import logging
import re
from datetime import date, datetime
from typing import Any, List, Mapping, Optional, Union

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ..core.exceptions import ResourceNotFoundError, ValidationError
from ..schemas.city import CityRead
from ..schemas.trip import (
    DriverSummary,
    RouteSummary,
    TripRead,
    TripSearchResult,
    UserSummary,
    VehicleSummary,
)

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_TRIP_COLUMNS = """
    t.id,
    t."driverId",
    t."vehicleId",
    t."routeId",
    t."travelDate",
    t."departureTime",
    t."totalSeats",
    t."availableSeats",
    t."isActive",
    t."createdAt",
    t."updatedAt"
"""

_GET_TRIP_SQL = text(f'SELECT {_TRIP_COLUMNS} FROM "Trip" t WHERE t.id = :trip_id')

_SEARCH_TRIPS_SQL = text(
    f"""
    SELECT
        {_TRIP_COLUMNS},

        r."sourceCityId",
        r."destinationCityId",
        r.checkpoints,

        sc.id   AS source_city_id,
        sc.name AS source_city_name,

        dc.id   AS destination_city_id,
        dc.name AS destination_city_name,

        v.id           AS vehicle_id,
        v.type         AS vehicle_type,
        v."totalSeats" AS vehicle_total_seats,
        v."numberPlate",

        d.id         AS driver_id,
        d."userId",
        d."isActive" AS driver_active,

        u.id AS user_id,
        u.name,
        u.phone,
        u.role,
        u."languagePreference"

    FROM "Trip" t
    JOIN "Route"   r  ON r.id = t."routeId"
    JOIN "City"    sc ON sc.id = r."sourceCityId"
    JOIN "City"    dc ON dc.id = r."destinationCityId"
    JOIN "Vehicle" v  ON v.id = t."vehicleId"
    JOIN "Driver"  d  ON d.id = t."driverId"
    JOIN "User"    u  ON u.id = d."userId"

    WHERE
        t."isActive" = :is_active
        AND r."sourceCityId" = :from_city_id
        AND r."destinationCityId" = :to_city_id
        AND DATE(t."travelDate") = :travel_date

    ORDER BY t."departureTime" ASC, t.id ASC
    """
)


def parse_travel_date(value: Optional[str]) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date``.

    Raises ``ValidationError`` if the value is missing, is not in that
    exact shape, or does not name a real calendar day.
    """
    raw = (value or "").strip()
    if not _DATE_PATTERN.match(raw):
        raise ValidationError("Invalid date format")
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError("Invalid date format") from exc


def _decode_json(value: Any) -> Any:
    """Decode a JSON text column, passing through anything that is not JSON."""
    if not isinstance(value, (str, bytes)):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return value


def _as_bool(value: Any) -> Optional[bool]:
    return None if value is None else bool(value)


def _as_id(value: Any) -> Optional[str]:
    """Render an id column as a string; NULL stays ``None``."""
    return None if value is None else str(value)


class TripService:
    """Read-only queries against ``Trip`` and its related tables."""

    @classmethod
    def get_trip(cls, engine: Engine, trip_id: str) -> TripRead:
        """Retrieve a single trip by id.

        Raises ``ResourceNotFoundError`` when no row matches; that is a
        normal outcome and is reported as 404, not as a server error.
        """
        with engine.connect() as conn:
            row = conn.execute(_GET_TRIP_SQL, {"trip_id": trip_id}).mappings().first()
        if row is None:
            logger.info("Trip %s not found", trip_id)
            raise ResourceNotFoundError("Trip not found")
        return cls._row_to_trip(row)

    @classmethod
    def search_trips(
        cls,
        engine: Engine,
        from_city_id: str,
        to_city_id: str,
        travel_date: Union[date, str],
    ) -> List[TripSearchResult]:
        """Return active trips from ``from_city_id`` to ``to_city_id`` on ``travel_date``.

        ``travel_date`` may be a ``date`` or a ``YYYY-MM-DD`` string; a
        string is validated before a connection is opened.  Only the
        date part of each trip's ``travelDate`` is compared.  Results
        are ordered by departure time.  No match gives an empty list.
        """
        if not isinstance(travel_date, date):
            travel_date = parse_travel_date(travel_date)
        params = {
            "is_active": True,
            "from_city_id": from_city_id,
            "to_city_id": to_city_id,
            "travel_date": travel_date.isoformat(),
        }
        with engine.connect() as conn:
            rows = conn.execute(_SEARCH_TRIPS_SQL, params).mappings().all()
        logger.info(
            "Trip search %s -> %s on %s returned %d trips",
            from_city_id,
            to_city_id,
            travel_date.isoformat(),
            len(rows),
        )
        return [cls._row_to_search_result(row) for row in rows]

    @staticmethod
    def _trip_fields(row: Mapping) -> dict:
        return {
            "id": _as_id(row["id"]),
            "driver_id": _as_id(row["driverId"]),
            "vehicle_id": _as_id(row["vehicleId"]),
            "route_id": _as_id(row["routeId"]),
            "travel_date": row["travelDate"],
            "departure_time": row["departureTime"],
            "total_seats": row["totalSeats"],
            "available_seats": row["availableSeats"],
            "is_active": _as_bool(row["isActive"]),
            "created_at": row["createdAt"],
            "updated_at": row["updatedAt"],
        }

    @classmethod
    def _row_to_trip(cls, row: Mapping) -> TripRead:
        return TripRead(**cls._trip_fields(row))

    @classmethod
    def _row_to_search_result(cls, row: Mapping) -> TripSearchResult:
        source_city_id = _as_id(row["sourceCityId"])
        destination_city_id = _as_id(row["destinationCityId"])

        # One instance serves both vehicle.driver and the top-level driver.
        driver = DriverSummary(
            id=_as_id(row["driver_id"]),
            user_id=_as_id(row["userId"]),
            is_active=_as_bool(row["driver_active"]),
            user=UserSummary(
                id=_as_id(row["user_id"]),
                name=row["name"],
                phone=row["phone"],
                role=row["role"],
                language_preference=row["languagePreference"],
            ),
        )
        route = RouteSummary(
            id=_as_id(row["routeId"]),
            checkpoints=_decode_json(row["checkpoints"]),
            source_city_id=source_city_id,
            destination_city_id=destination_city_id,
            source_city=CityRead(id=_as_id(row["source_city_id"]), name=row["source_city_name"]),
            destination_city=CityRead(
                id=_as_id(row["destination_city_id"]),
                name=row["destination_city_name"],
            ),
        )
        vehicle = VehicleSummary(
            id=_as_id(row["vehicle_id"]),
            type=row["vehicle_type"],
            total_seats=row["vehicle_total_seats"],
            number_plate=row["numberPlate"],
            driver=driver,
        )
        return TripSearchResult(
            **cls._trip_fields(row),
            boarding_city_id=source_city_id,
            destination_city_id=destination_city_id,
            route=route,
            vehicle=vehicle,
            driver=driver,
        )
