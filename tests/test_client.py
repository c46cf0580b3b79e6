import json
from datetime import date
from typing import Any
from unittest.mock import MagicMock

import requests

from ride_booking_client import RideBookingAPI


def _response(status_code: int, body: Any, url: str = "http://rides.test/") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response._content = json.dumps(body).encode("utf-8")
    return response


def _client(response: Any) -> tuple:
    session = MagicMock(spec=requests.Session)
    if isinstance(response, Exception):
        session.request.side_effect = response
    else:
        session.request.return_value = response
    return RideBookingAPI(base_url="http://rides.test/", session=session), session


def test_search_cities_unwraps_envelope() -> None:
    cities = [{"id": "c_lhr", "name": "Lahore"}]
    api, session = _client(_response(200, {"success": True, "data": cities}))

    data, error = api.search_cities("lah")

    assert error is None
    assert data == cities
    session.request.assert_called_once_with(
        method="GET", url="http://rides.test/cities/search", params={"q": "lah"}, timeout=15
    )


def test_list_cities() -> None:
    api, session = _client(_response(200, {"success": True, "data": []}))

    assert api.list_cities() == ([], None)
    assert session.request.call_args.kwargs["url"] == "http://rides.test/cities"


def test_get_trip_not_found() -> None:
    api, _ = _client(_response(404, {"success": False, "detail": "Trip not found"}))

    data, error = api.get_trip("t_missing")

    assert data is None
    assert error == {"status_code": 404, "message": "Trip not found"}


def test_search_trips_formats_date() -> None:
    trips = [{"id": "t_early"}]
    api, session = _client(_response(200, {"success": True, "data": trips}))

    data, error = api.search_trips("c_lhr", "c_kar", date(2024, 6, 1))

    assert (data, error) == (trips, None)
    assert session.request.call_args.kwargs["params"] == {
        "fromCityId": "c_lhr",
        "toCityId": "c_kar",
        "date": "2024-06-01",
    }


def test_search_trips_reports_bad_request() -> None:
    api, _ = _client(_response(400, {"success": False, "detail": "Invalid date format"}))

    data, error = api.search_trips("c_lhr", "c_kar", "2024-13-40")

    assert data == []
    assert error == {"status_code": 400, "message": "Invalid date format"}


def test_network_errors_are_reported() -> None:
    api, _ = _client(requests.ConnectionError("connection refused"))

    data, error = api.list_cities()

    assert data == []
    assert error["status_code"] is None
    assert "connection refused" in error["message"]
