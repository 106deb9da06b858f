from __future__ import annotations

import math

import pytest

from trip_planner.exceptions import InvalidInputError
from trip_planner.services.cost import estimate_cost


def test_cost_is_distance_over_mileage_times_price() -> None:
    assert estimate_cost(150.0, 15.0, 280.0) == pytest.approx(2800.0)


def test_zero_distance_costs_nothing() -> None:
    assert estimate_cost(0.0, 12.0, 270.0) == 0.0


@pytest.mark.parametrize("mileage", [0.0, -1.0, math.nan, math.inf])
def test_non_positive_mileage_is_rejected(mileage: float) -> None:
    with pytest.raises(InvalidInputError):
        estimate_cost(100.0, mileage, 280.0)


@pytest.mark.parametrize("price", [0.0, -5.0, math.nan, math.inf])
def test_non_positive_price_is_rejected(price: float) -> None:
    with pytest.raises(InvalidInputError):
        estimate_cost(100.0, 15.0, price)


def test_negative_distance_is_rejected() -> None:
    with pytest.raises(InvalidInputError):
        estimate_cost(-1.0, 15.0, 280.0)


def test_cost_monotonicity() -> None:
    base = estimate_cost(100.0, 15.0, 280.0)

    assert estimate_cost(120.0, 15.0, 280.0) >= base
    assert estimate_cost(100.0, 15.0, 300.0) >= base
    assert estimate_cost(100.0, 20.0, 280.0) <= base


@pytest.mark.parametrize("distance", [math.nan, math.inf])
def test_non_finite_distance_is_rejected(distance: float) -> None:
    with pytest.raises(InvalidInputError):
        estimate_cost(distance, 15.0, 280.0)
