from __future__ import annotations

import math

from trip_planner.services.types import Coordinate

EARTH_RADIUS_KM = 6371.0
POLYLINE_PRECISION = 1e5


def haversine_km(start: Coordinate, end: Coordinate) -> float:
    """Great-circle distance in km, NaN when any coordinate is not finite."""
    if not all(
        math.isfinite(value)
        for value in (start.latitude, start.longitude, end.latitude, end.longitude)
    ):
        return math.nan

    lat1_rad = math.radians(start.latitude)
    lat2_rad = math.radians(end.latitude)

    dlat = math.radians(end.latitude - start.latitude)
    dlon = math.radians(end.longitude - start.longitude)

    a = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2.0) ** 2
    )
    # rounding can push near-antipodal points just past 1
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def decode_polyline(encoded: str) -> list[Coordinate]:
    """Decode a Google encoded polyline into coordinates.

    Each point is stored as a pair of zig-zag encoded deltas in 5-bit chunks,
    offset by 63 into the printable ASCII range.
    """
    coordinates: list[Coordinate] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        deltas = []
        for _ in range(2):
            shift = 0
            result = 0
            while True:
                chunk = ord(encoded[index]) - 63
                index += 1
                result |= (chunk & 0x1F) << shift
                shift += 5
                if chunk < 0x20:
                    break
            deltas.append(~(result >> 1) if result & 1 else result >> 1)

        lat += deltas[0]
        lng += deltas[1]
        coordinates.append(
            Coordinate(latitude=lat / POLYLINE_PRECISION, longitude=lng / POLYLINE_PRECISION)
        )

    return coordinates
