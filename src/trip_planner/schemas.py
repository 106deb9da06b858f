from __future__ import annotations

from datetime import datetime

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field

from trip_planner.services.types import FuelType, SpeedBand, StationSource


class Location(BaseModel):
    model_config = ConfigDict(extra="forbid")

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    name: str | None = Field(default=None, max_length=300)


class TripPlanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    vehicle: str = Field(min_length=1, max_length=120)
    fuel_type: FuelType = FuelType.PETROL
    average_mileage: float = Field(
        default_factory=lambda: float(settings.DEFAULT_MILEAGE), gt=0.0, le=1000.0
    )
    origin: Location
    destination: Location
    preferred_speed_band: SpeedBand | None = None


class StationResponse(BaseModel):
    station_id: str
    name: str
    location: Location
    unit_price: float
    distance_km: float
    is_best_price: bool


class TripPlanResponse(BaseModel):
    vehicle: str
    fuel_type: FuelType
    average_mileage: float
    preferred_speed_band: SpeedBand | None
    origin: Location
    destination: Location
    distance_km: float
    estimated_cost: float
    estimated_duration: str
    unit_price: float
    currency: str
    stations: list[StationResponse]
    best_price_station_id: str | None
    station_source: StationSource
    route_path: list[Location]
    eco_tip: str
    assumptions: dict[str, float]


class HistoryEntryResponse(BaseModel):
    id: str
    date: datetime
    vehicle: str
    origin_name: str
    destination_name: str
    distance_km: float
    cost: float


class MonthlyExpenseResponse(BaseModel):
    month: str
    cost: float


class HistoryResponse(BaseModel):
    entries: list[HistoryEntryResponse]
    monthly_expenses: list[MonthlyExpenseResponse]
    currency: str
