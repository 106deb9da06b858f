from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal


class FuelType(str, Enum):
    PETROL = "petrol"
    DIESEL = "diesel"
    HYBRID = "hybrid"
    ELECTRIC = "electric"


SpeedBand = Literal["60-70 km/h", "70-80 km/h", "80-90 km/h", "90-100 km/h", "100-120 km/h"]
StationSource = Literal["places", "fallback"]


@dataclass(slots=True, frozen=True)
class Coordinate:
    latitude: float
    longitude: float
    name: str | None = None


@dataclass(slots=True, frozen=True)
class TripRequest:
    vehicle: str
    fuel_type: FuelType
    average_mileage: float
    origin: Coordinate
    destination: Coordinate
    preferred_speed_band: SpeedBand | None = None


@dataclass(slots=True, frozen=True)
class Station:
    station_id: str
    name: str
    location: Coordinate
    unit_price: float
    distance_km: float | None = None


@dataclass(slots=True, frozen=True)
class StationRanking:
    stations: list[Station]
    best_price_station_id: str | None

    @property
    def is_empty(self) -> bool:
        return not self.stations


@dataclass(slots=True, frozen=True)
class RouteData:
    distance_km: float
    duration_text: str
    path: list[Coordinate]


@dataclass(slots=True, frozen=True)
class PlaceCandidate:
    place_id: str
    name: str
    location: Coordinate


@dataclass(slots=True, frozen=True)
class TripResult:
    request: TripRequest
    distance_km: float
    estimated_cost: float
    estimated_duration: str
    unit_price: float
    ranking: StationRanking
    route_path: list[Coordinate]
    station_source: StationSource
    eco_tip: str


@dataclass(slots=True, frozen=True)
class HistoryEntry:
    entry_id: str
    timestamp: datetime
    vehicle: str
    origin_name: str
    destination_name: str
    distance_km: float
    cost: float


@dataclass(slots=True, frozen=True)
class MonthlyAggregate:
    month: str
    cost: float
