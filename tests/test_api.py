from __future__ import annotations

import json
import random

import pytest

from trip_planner.exceptions import ExternalServiceError, NoRouteFoundError
from trip_planner.models import TripHistoryEntry
from trip_planner.services.planner import TripPlannerService
from trip_planner.services.types import Coordinate, RouteData

TRIP_PAYLOAD = {
    "vehicle": "Suzuki Cultus",
    "fuel_type": "petrol",
    "average_mileage": 16,
    "origin": {"latitude": 25.3960, "longitude": 68.3578, "name": "Hyderabad"},
    "destination": {"latitude": 24.8250, "longitude": 67.0300, "name": "Saddar, Karachi"},
    "preferred_speed_band": "70-80 km/h",
}


@pytest.fixture
def planner(mocker) -> TripPlannerService:
    directions_client = mocker.Mock()
    directions_client.route.return_value = RouteData(
        distance_km=160.0,
        duration_text="2 hours 20 mins",
        path=[Coordinate(25.3960, 68.3578), Coordinate(24.8250, 67.0300)],
    )
    places_client = mocker.Mock()
    places_client.nearby_search.side_effect = ExternalServiceError("Places request failed")
    service = TripPlannerService(
        directions_client=directions_client,
        places_client=places_client,
        rng=random.Random(1),
    )
    mocker.patch("trip_planner.views.get_trip_planner", return_value=service)
    return service


def _post_trip(api_client, payload: dict | None = None):
    return api_client.post(
        "/api/v1/trip-plan",
        data=json.dumps(payload or TRIP_PAYLOAD),
        content_type="application/json",
    )


@pytest.mark.django_db
def test_health_endpoint_reports_history_and_key(api_client) -> None:
    response = api_client.get("/api/v1/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["history"]["entries"] == 0
    assert payload["maps_configured"] is True


@pytest.mark.django_db
def test_trip_plan_returns_cost_and_ranked_stations(api_client, planner) -> None:
    response = _post_trip(api_client)

    assert response.status_code == 200
    payload = response.json()
    assert payload["distance_km"] == 160.0
    assert payload["estimated_cost"] == 2800.0
    assert payload["estimated_duration"] == "2 hours 20 mins"
    assert payload["station_source"] == "fallback"
    assert payload["preferred_speed_band"] == "70-80 km/h"
    assert payload["stations"][0]["station_id"] == "2"
    assert sum(station["is_best_price"] for station in payload["stations"]) == 1
    assert payload["assumptions"] == {"search_radius_km": 5.0, "filter_radius_km": 10.0}
    assert payload["eco_tip"]


def test_trip_plan_validation_error_returns_400(api_client) -> None:
    response = _post_trip(api_client, {**TRIP_PAYLOAD, "average_mileage": 0})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


def test_trip_plan_rejects_unknown_speed_band(api_client) -> None:
    response = _post_trip(api_client, {**TRIP_PAYLOAD, "preferred_speed_band": "fast"})

    assert response.status_code == 400


def test_trip_plan_invalid_json_returns_400(api_client) -> None:
    response = api_client.post(
        "/api/v1/trip-plan", data="{not json", content_type="application/json"
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_json"


@pytest.mark.django_db
def test_trip_plan_route_failure_returns_502(api_client, planner) -> None:
    planner.directions_client.route.side_effect = NoRouteFoundError("Could not compute route")

    response = _post_trip(api_client)

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "no_route"


@pytest.mark.django_db
def test_save_without_planned_trip_returns_409(api_client) -> None:
    response = api_client.post("/api/v1/history")

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "no_trip_result"


@pytest.mark.django_db
def test_saved_trip_shows_in_history_with_monthly_totals(api_client, planner, mocker) -> None:
    save_trip = mocker.spy(planner, "save_trip")
    _post_trip(api_client)

    saved = api_client.post("/api/v1/history")
    assert saved.status_code == 201
    assert saved.json()["destination_name"] == "Saddar, Karachi"

    api_client.post("/api/v1/history")
    history = api_client.get("/api/v1/history").json()

    assert [entry["vehicle"] for entry in history["entries"]] == ["Suzuki Cultus"] * 2
    assert len(history["monthly_expenses"]) == 1
    assert history["monthly_expenses"][0]["cost"] == 5600.0
    assert history["currency"] == "PKR"
    assert TripHistoryEntry.objects.count() == 2
    assert save_trip.call_count == 2


@pytest.mark.django_db
def test_delete_clears_history(api_client, planner) -> None:
    _post_trip(api_client)
    api_client.post("/api/v1/history")

    response = api_client.delete("/api/v1/history")

    assert response.status_code == 204
    assert api_client.get("/api/v1/history").json()["entries"] == []
