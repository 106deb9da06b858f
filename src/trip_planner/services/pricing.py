from __future__ import annotations

import random

from trip_planner.services.types import Coordinate, FuelType, Station

# Price per liter, or per kWh for electric vehicles.
FUEL_PRICES: dict[FuelType, float] = {
    FuelType.PETROL: 280.0,
    FuelType.DIESEL: 270.0,
    FuelType.HYBRID: 280.0,
    FuelType.ELECTRIC: 40.0,
}

PLACE_PRICE_SPREAD = 0.1


def price_for(fuel_type: FuelType) -> float:
    return FUEL_PRICES[fuel_type]


def quote_place_price(fuel_type: FuelType, rng: random.Random) -> float:
    """Price for a searched place, which carries no price of its own."""
    base = price_for(fuel_type)
    return base * (1.0 - PLACE_PRICE_SPREAD / 2 + rng.random() * PLACE_PRICE_SPREAD)


FALLBACK_STATIONS: tuple[Station, ...] = (
    Station(
        station_id="1",
        name="Shell Defence",
        location=Coordinate(24.8197, 67.0371, "Shell Defence, Karachi"),
        unit_price=FUEL_PRICES[FuelType.PETROL] * 0.98,
    ),
    Station(
        station_id="2",
        name="PSO Cantt",
        location=Coordinate(24.8250, 67.0300, "PSO Cantt, Karachi"),
        unit_price=FUEL_PRICES[FuelType.PETROL],
    ),
    Station(
        station_id="3",
        name="Total Clifton",
        location=Coordinate(24.8360, 67.0210, "Total Clifton, Karachi"),
        unit_price=FUEL_PRICES[FuelType.PETROL] * 1.02,
    ),
    Station(
        station_id="4",
        name="Go Petroleum DHA",
        location=Coordinate(24.8050, 67.0450, "Go Petroleum DHA, Karachi"),
        unit_price=FUEL_PRICES[FuelType.PETROL] * 0.95,
    ),
    Station(
        station_id="5",
        name="Hascol Korangi",
        location=Coordinate(24.8210, 67.0600, "Hascol Korangi, Karachi"),
        unit_price=FUEL_PRICES[FuelType.DIESEL] * 0.99,
    ),
    Station(
        station_id="6",
        name="EV Charge Point Gizri",
        location=Coordinate(24.8300, 67.0150, "EV Charge Point Gizri, Karachi"),
        unit_price=FUEL_PRICES[FuelType.ELECTRIC] * 1.1,
    ),
)

ECO_DRIVING_TIPS: tuple[str, ...] = (
    "Keep tire pressure optimal for better fuel economy.",
    "Avoid rapid acceleration and harsh braking.",
    "Plan routes to skip heavy traffic and unnecessary detours.",
    "Use cruise control on highways to maintain a steady speed.",
    "Remove unnecessary weight from your vehicle.",
    "Turn off your engine if idling for more than 30 seconds.",
    "Use air conditioning sparingly, especially at lower speeds.",
    "Drive at a moderate speed; excessive speed increases fuel consumption.",
    "Regularly service your vehicle to ensure efficiency.",
    "Combine multiple errands into a single trip.",
    "Maintain a steady speed between 60-70 km/h for optimal fuel efficiency.",
    "Driving in the 70-80 km/h range balances speed and economy for most vehicles.",
    "Be aware that speeds above 80 km/h generally increase fuel consumption.",
    "Consistently driving at 100 km/h or higher will noticeably impact your fuel costs.",
    "For long trips, consider maintaining speeds below 120 km/h to maximize fuel savings.",
)
