from __future__ import annotations

import logging
import random

from django.conf import settings

from trip_planner.exceptions import ExternalServiceError
from trip_planner.schemas import Location, StationResponse, TripPlanRequest, TripPlanResponse
from trip_planner.services.cost import estimate_cost
from trip_planner.services.directions import GoogleDirectionsClient
from trip_planner.services.history_store import HistoryStore
from trip_planner.services.places import GooglePlacesClient
from trip_planner.services.pricing import (
    ECO_DRIVING_TIPS,
    FALLBACK_STATIONS,
    price_for,
    quote_place_price,
)
from trip_planner.services.station_ranking import rank_stations
from trip_planner.services.types import (
    Coordinate,
    HistoryEntry,
    Station,
    StationRanking,
    StationSource,
    TripRequest,
    TripResult,
)

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION_NAME = "Unknown"


class TripPlannerService:
    def __init__(
        self,
        directions_client: GoogleDirectionsClient | None = None,
        places_client: GooglePlacesClient | None = None,
        history_store: HistoryStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.directions_client = directions_client or GoogleDirectionsClient()
        self.places_client = places_client or GooglePlacesClient()
        self.history_store = history_store or HistoryStore()
        self.rng = rng or random.Random()

    def plan(self, request: TripPlanRequest) -> TripResult:
        trip = to_trip_request(request)

        route = self.directions_client.route(trip.origin, trip.destination)

        unit_price = price_for(trip.fuel_type)
        estimated_cost = estimate_cost(route.distance_km, trip.average_mileage, unit_price)

        candidates, station_source = self._find_candidate_stations(trip)
        ranking = rank_stations(
            trip.destination,
            candidates,
            radius_km=float(settings.STATION_FILTER_RADIUS_KM),
        )

        return TripResult(
            request=trip,
            distance_km=route.distance_km,
            estimated_cost=estimated_cost,
            estimated_duration=route.duration_text,
            unit_price=unit_price,
            ranking=ranking,
            route_path=route.path,
            station_source=station_source,
            eco_tip=self.rng.choice(ECO_DRIVING_TIPS),
        )

    def save_trip(self, result: TripResult) -> HistoryEntry:
        return self.history_store.append(
            vehicle=result.request.vehicle,
            origin_name=result.request.origin.name or UNKNOWN_LOCATION_NAME,
            destination_name=result.request.destination.name or UNKNOWN_LOCATION_NAME,
            distance_km=result.distance_km,
            cost=result.estimated_cost,
        )

    def _find_candidate_stations(
        self, trip: TripRequest
    ) -> tuple[list[Station], StationSource]:
        try:
            places = self.places_client.nearby_search(
                trip.destination, float(settings.STATION_SEARCH_RADIUS_KM)
            )
        except ExternalServiceError as exc:
            logger.warning("Place search failed, using fallback stations: %s", exc)
            return list(FALLBACK_STATIONS), "fallback"

        if not places:
            logger.warning("Place search returned no stations, using fallback stations")
            return list(FALLBACK_STATIONS), "fallback"

        stations = [
            Station(
                station_id=place.place_id,
                name=place.name,
                location=place.location,
                unit_price=quote_place_price(trip.fuel_type, self.rng),
            )
            for place in places
        ]
        return stations, "places"


def to_trip_request(request: TripPlanRequest) -> TripRequest:
    return TripRequest(
        vehicle=request.vehicle,
        fuel_type=request.fuel_type,
        average_mileage=request.average_mileage,
        origin=_to_coordinate(request.origin),
        destination=_to_coordinate(request.destination),
        preferred_speed_band=request.preferred_speed_band,
    )


def to_response(result: TripResult) -> TripPlanResponse:
    trip = result.request
    stations = [
        StationResponse(
            station_id=station.station_id,
            name=station.name,
            location=_to_location(station.location),
            unit_price=round(station.unit_price, 2),
            distance_km=round(station.distance_km or 0.0, 3),
            is_best_price=station.station_id == result.ranking.best_price_station_id,
        )
        for station in result.ranking.stations
    ]

    return TripPlanResponse(
        vehicle=trip.vehicle,
        fuel_type=trip.fuel_type,
        average_mileage=trip.average_mileage,
        preferred_speed_band=trip.preferred_speed_band,
        origin=_to_location(trip.origin),
        destination=_to_location(trip.destination),
        distance_km=round(result.distance_km, 3),
        estimated_cost=round(result.estimated_cost, 2),
        estimated_duration=result.estimated_duration,
        unit_price=round(result.unit_price, 2),
        currency=settings.CURRENCY,
        stations=stations,
        best_price_station_id=result.ranking.best_price_station_id,
        station_source=result.station_source,
        route_path=[_to_location(point) for point in result.route_path],
        eco_tip=result.eco_tip,
        assumptions={
            "search_radius_km": float(settings.STATION_SEARCH_RADIUS_KM),
            "filter_radius_km": float(settings.STATION_FILTER_RADIUS_KM),
        },
    )


def from_response(response: TripPlanResponse) -> TripResult:
    """Rebuild a planned trip from its serialized form, e.g. one kept in a session."""
    return TripResult(
        request=TripRequest(
            vehicle=response.vehicle,
            fuel_type=response.fuel_type,
            average_mileage=response.average_mileage,
            origin=_to_coordinate(response.origin),
            destination=_to_coordinate(response.destination),
            preferred_speed_band=response.preferred_speed_band,
        ),
        distance_km=response.distance_km,
        estimated_cost=response.estimated_cost,
        estimated_duration=response.estimated_duration,
        unit_price=response.unit_price,
        ranking=StationRanking(
            stations=[
                Station(
                    station_id=station.station_id,
                    name=station.name,
                    location=_to_coordinate(station.location),
                    unit_price=station.unit_price,
                    distance_km=station.distance_km,
                )
                for station in response.stations
            ],
            best_price_station_id=response.best_price_station_id,
        ),
        route_path=[_to_coordinate(point) for point in response.route_path],
        station_source=response.station_source,
        eco_tip=response.eco_tip,
    )


def _to_coordinate(location: Location) -> Coordinate:
    return Coordinate(
        latitude=location.latitude, longitude=location.longitude, name=location.name
    )


def _to_location(point: Coordinate) -> Location:
    return Location(
        latitude=round(point.latitude, 6), longitude=round(point.longitude, 6), name=point.name
    )
