from __future__ import annotations

import math

from trip_planner.exceptions import InvalidInputError


def estimate_cost(distance_km: float, mileage: float, unit_price: float) -> float:
    """Fuel cost of covering ``distance_km`` at ``mileage`` km per unit."""
    if not math.isfinite(mileage) or mileage <= 0:
        raise InvalidInputError("Average mileage must be a finite number greater than zero")
    if not math.isfinite(unit_price) or unit_price <= 0:
        raise InvalidInputError("Fuel unit price must be a finite number greater than zero")
    if not math.isfinite(distance_km) or distance_km < 0:
        raise InvalidInputError("Distance must be a finite, non-negative number")

    return (distance_km / mileage) * unit_price
