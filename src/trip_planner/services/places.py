from __future__ import annotations

import hashlib
import logging
import time
import uuid
from typing import Any

import httpx
from django.conf import settings
from django.core.cache import cache

from trip_planner.exceptions import ExternalServiceError
from trip_planner.services.types import Coordinate, PlaceCandidate

logger = logging.getLogger(__name__)


class GooglePlacesClient:
    def __init__(self) -> None:
        self.base_url = settings.GOOGLE_MAPS_BASE_URL.rstrip("/")
        self.api_key = settings.GOOGLE_MAPS_API_KEY
        self.timeout = settings.GOOGLE_MAPS_TIMEOUT_SECONDS
        self.retry_count = settings.GOOGLE_MAPS_RETRY_COUNT

    def nearby_search(
        self, location: Coordinate, radius_km: float, *, place_type: str = "gas_station"
    ) -> list[PlaceCandidate]:
        if not self.api_key:
            raise ExternalServiceError("Google Maps API key is not configured")

        cache_key = self._cache_key(location, radius_km, place_type)
        cached = cache.get(cache_key)
        if cached is not None:
            return [
                PlaceCandidate(
                    place_id=item["place_id"],
                    name=item["name"],
                    location=Coordinate(
                        latitude=item["latitude"],
                        longitude=item["longitude"],
                        name=item["name"],
                    ),
                )
                for item in cached
            ]

        params = {
            "location": f"{location.latitude:.6f},{location.longitude:.6f}",
            "radius": int(radius_km * 1000),
            "type": place_type,
            "key": self.api_key,
        }

        for attempt in range(self.retry_count + 1):
            try:
                response = httpx.get(
                    f"{self.base_url}/maps/api/place/nearbysearch/json",
                    params=params,
                    timeout=self.timeout,
                )
                response.raise_for_status()
                places = self._parse_response(response.json())
                cache.set(
                    cache_key,
                    [
                        {
                            "place_id": place.place_id,
                            "name": place.name,
                            "latitude": place.location.latitude,
                            "longitude": place.location.longitude,
                        }
                        for place in places
                    ],
                    timeout=settings.PLACES_CACHE_TTL_SECONDS,
                )
                return places
            except httpx.HTTPError as exc:
                if attempt >= self.retry_count:
                    raise ExternalServiceError("Places request failed") from exc
                logger.warning("Places request failed (attempt %s): %s", attempt + 1, exc)
                time.sleep(0.3 * (attempt + 1))

        raise ExternalServiceError("Places request failed")

    @staticmethod
    def _cache_key(location: Coordinate, radius_km: float, place_type: str) -> str:
        encoded = (
            f"{location.latitude:.5f}:{location.longitude:.5f}|{radius_km:.3f}|{place_type}"
        ).encode()
        digest = hashlib.sha256(encoded).hexdigest()
        return f"places:{digest}"

    @staticmethod
    def _parse_response(payload: Any) -> list[PlaceCandidate]:
        status = payload.get("status")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            raise ExternalServiceError(f"Places request returned status {status}")

        places: list[PlaceCandidate] = []
        for result in payload.get("results") or []:
            try:
                point = result["geometry"]["location"]
                latitude = float(point["lat"])
                longitude = float(point["lng"])
            except (KeyError, TypeError, ValueError):
                continue

            name = result.get("name") or "Unknown Station"
            places.append(
                PlaceCandidate(
                    place_id=result.get("place_id") or uuid.uuid4().hex,
                    name=name,
                    location=Coordinate(latitude=latitude, longitude=longitude, name=name),
                )
            )
        return places
