from __future__ import annotations

import hashlib
import logging
import time
from typing import Any

import httpx
from django.conf import settings
from django.core.cache import cache

from trip_planner.exceptions import ExternalServiceError, NoRouteFoundError
from trip_planner.services.geo import decode_polyline
from trip_planner.services.types import Coordinate, RouteData

logger = logging.getLogger(__name__)

METERS_PER_KM = 1000.0
NO_ROUTE_STATUSES = frozenset({"ZERO_RESULTS", "NOT_FOUND"})


class GoogleDirectionsClient:
    def __init__(self) -> None:
        self.base_url = settings.GOOGLE_MAPS_BASE_URL.rstrip("/")
        self.api_key = settings.GOOGLE_MAPS_API_KEY
        self.timeout = settings.GOOGLE_MAPS_TIMEOUT_SECONDS
        self.retry_count = settings.GOOGLE_MAPS_RETRY_COUNT

    def route(self, origin: Coordinate, destination: Coordinate) -> RouteData:
        if not self.api_key:
            raise ExternalServiceError("Google Maps API key is not configured")

        cache_key = self._cache_key(origin, destination)
        cached = cache.get(cache_key)
        if cached:
            return RouteData(
                distance_km=cached["distance_km"],
                duration_text=cached["duration_text"],
                path=[Coordinate(latitude=lat, longitude=lng) for lat, lng in cached["path"]],
            )

        params = {
            "origin": f"{origin.latitude:.6f},{origin.longitude:.6f}",
            "destination": f"{destination.latitude:.6f},{destination.longitude:.6f}",
            "mode": "driving",
            "key": self.api_key,
        }

        for attempt in range(self.retry_count + 1):
            try:
                response = httpx.get(
                    f"{self.base_url}/maps/api/directions/json",
                    params=params,
                    timeout=self.timeout,
                )
                response.raise_for_status()
                route_data = self._parse_response(response.json())
                cache.set(
                    cache_key,
                    {
                        "distance_km": route_data.distance_km,
                        "duration_text": route_data.duration_text,
                        "path": [(point.latitude, point.longitude) for point in route_data.path],
                    },
                    timeout=settings.ROUTE_CACHE_TTL_SECONDS,
                )
                return route_data
            except httpx.HTTPError as exc:
                if attempt >= self.retry_count:
                    raise ExternalServiceError("Directions request failed") from exc
                logger.warning("Directions request failed (attempt %s): %s", attempt + 1, exc)
                time.sleep(0.3 * (attempt + 1))

        raise ExternalServiceError("Directions request failed")

    @staticmethod
    def _cache_key(origin: Coordinate, destination: Coordinate) -> str:
        encoded = (
            f"{origin.latitude:.5f}:{origin.longitude:.5f}|"
            f"{destination.latitude:.5f}:{destination.longitude:.5f}"
        ).encode()
        digest = hashlib.sha256(encoded).hexdigest()
        return f"directions:{digest}"

    @staticmethod
    def _parse_response(payload: Any) -> RouteData:
        status = payload.get("status")
        if status in NO_ROUTE_STATUSES:
            raise NoRouteFoundError("Could not compute route")
        if status != "OK":
            raise ExternalServiceError(f"Directions request returned status {status}")

        routes = payload.get("routes") or []
        if not routes or not routes[0].get("legs"):
            raise NoRouteFoundError("Could not compute route")

        first = routes[0]
        leg = first["legs"][0]
        distance_meters = float((leg.get("distance") or {}).get("value", 0.0))
        duration_text = (leg.get("duration") or {}).get("text") or "N/A"
        path = decode_polyline((first.get("overview_polyline") or {}).get("points", ""))

        return RouteData(
            distance_km=distance_meters / METERS_PER_KM,
            duration_text=duration_text,
            path=path,
        )
