"""Ride Booking API client.

A thin wrapper around the HTTP surface of the Ride Booking API, meant
for bots, scripts and integration checks.  It uses the ``requests``
library internally.

The client exposes one method per endpoint:

* :meth:`search_cities` – autocomplete cities by part of their name.
* :meth:`list_cities` – fetch every city.
* :meth:`get_trip` – fetch a single trip by its identifier.
* :meth:`search_trips` – find trips between two cities on a given day.

Every method returns a ``(data, error)`` tuple.  On success ``data`` is
the payload found under the ``data`` key of the response envelope and
``error`` is ``None``.  On failure ``data`` is empty and ``error`` is a
dictionary with ``status_code`` and ``message``.  Network errors never
raise; they are reported the same way with ``status_code`` set to
``None``.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class RideBookingAPI:
    """Client for interacting with the Ride Booking API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API including any path prefix,
                e.g. ``https://rides.example.com`` or
                ``http://localhost:3000/api``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request and unwrap the response envelope.

        Args:
            method: HTTP method in upper case.
            path: Path relative to :attr:`base_url` (e.g. ``/cities``).
            params: Query parameters to include in the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(method=method, url=url, params=params, timeout=self.timeout)
            response.raise_for_status()
            body = response.json() if response.content else None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            # Also covers bodies that are not valid JSON.
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if isinstance(body, dict) and "data" in body:
            return body["data"], None
        return body, None

    # ------------------------------------------------------------------
    # City operations
    # ------------------------------------------------------------------
    def search_cities(self, q: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Search cities whose name contains ``q`` (case-insensitive).

        Returns:
            A tuple ``(cities, error)``; at most ten cities.
        """
        data, error = self._request("GET", "/cities/search", params={"q": q})
        if error:
            return [], error
        return data or [], None

    def list_cities(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all cities ordered by name."""
        data, error = self._request("GET", "/cities")
        if error:
            return [], error
        return data or [], None

    # ------------------------------------------------------------------
    # Trip operations
    # ------------------------------------------------------------------
    def get_trip(self, trip_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single trip by ID.

        A missing trip yields ``(None, {"status_code": 404, ...})``.
        """
        return self._request("GET", f"/trips/{trip_id}")

    def search_trips(
        self,
        from_city_id: Any,
        to_city_id: Any,
        travel_date: Union[date, str],
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Find active trips between two cities on a given day.

        Args:
            from_city_id: Identifier of the boarding city.
            to_city_id: Identifier of the destination city.
            travel_date: A ``date`` or a ``YYYY-MM-DD`` string.
        Returns:
            A tuple ``(trips, error)``.  An invalid date is reported by
            the server as a 400 error.
        """
        if isinstance(travel_date, date):
            travel_date = travel_date.isoformat()
        params = {"fromCityId": from_city_id, "toCityId": to_city_id, "date": travel_date}
        data, error = self._request("GET", "/trips/search", params=params)
        if error:
            return [], error
        return data or [], None
