from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace

from trip_planner.services.geo import haversine_km
from trip_planner.services.types import Coordinate, Station, StationRanking

DEFAULT_RADIUS_KM = 10.0


def rank_stations(
    reference: Coordinate,
    candidates: Iterable[Station],
    radius_km: float = DEFAULT_RADIUS_KM,
) -> StationRanking:
    within_radius: list[Station] = []
    for station in candidates:
        distance = haversine_km(reference, station.location)
        if math.isnan(distance) or distance > radius_km:
            continue
        within_radius.append(replace(station, distance_km=distance))

    # sorted() is stable, equal distances keep their input order
    ordered = sorted(within_radius, key=lambda station: station.distance_km)

    return StationRanking(
        stations=ordered,
        best_price_station_id=_best_price_station_id(ordered),
    )


def _best_price_station_id(stations: list[Station]) -> str | None:
    best: Station | None = None
    for station in stations:
        if best is None or station.unit_price < best.unit_price:
            best = station
    return best.station_id if best is not None else None
