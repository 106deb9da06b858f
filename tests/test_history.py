from __future__ import annotations

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

import pytest
from django.utils import timezone

from trip_planner.services.history import aggregate_monthly
from trip_planner.services.history_store import HistoryStore
from trip_planner.services.types import HistoryEntry, MonthlyAggregate


def _entry(entry_id: str, timestamp: datetime, cost: float) -> HistoryEntry:
    return HistoryEntry(
        entry_id=entry_id,
        timestamp=timestamp,
        vehicle="Corolla",
        origin_name="Karachi",
        destination_name="Hyderabad",
        distance_km=160.0,
        cost=cost,
    )


def test_costs_are_summed_per_month_in_order() -> None:
    entries = [
        _entry("1", datetime(2024, 1, 5), 100.0),
        _entry("2", datetime(2024, 1, 20), 50.0),
        _entry("3", datetime(2024, 2, 1), 75.0),
    ]

    assert aggregate_monthly(entries) == [
        MonthlyAggregate(month="Jan 2024", cost=150.0),
        MonthlyAggregate(month="Feb 2024", cost=75.0),
    ]


def test_months_are_sorted_chronologically_not_by_insertion() -> None:
    entries = [
        _entry("1", datetime(2024, 3, 2), 10.0),
        _entry("2", datetime(2023, 12, 30), 20.0),
        _entry("3", datetime(2024, 1, 15), 30.0),
        _entry("4", datetime(2023, 12, 1), 5.0),
    ]

    result = aggregate_monthly(entries)

    assert [aggregate.month for aggregate in result] == ["Dec 2023", "Jan 2024", "Mar 2024"]
    assert result[0].cost == pytest.approx(25.0)


def test_same_month_in_different_years_is_kept_apart() -> None:
    result = aggregate_monthly(
        [_entry("1", datetime(2025, 6, 1), 1.0), _entry("2", datetime(2024, 6, 1), 2.0)]
    )

    assert result == [
        MonthlyAggregate(month="Jun 2024", cost=2.0),
        MonthlyAggregate(month="Jun 2025", cost=1.0),
    ]


def test_no_history_gives_no_aggregates() -> None:
    assert aggregate_monthly([]) == []


@pytest.mark.django_db
def test_appended_entry_is_last_when_read_back() -> None:
    store = HistoryStore()
    store.append(
        vehicle="Civic",
        origin_name="Karachi",
        destination_name="Thatta",
        distance_km=98.4,
        cost=1836.8,
        timestamp=timezone.now() - timedelta(days=3),
    )

    appended = store.append(
        vehicle="Corolla",
        origin_name="Karachi",
        destination_name="Hyderabad",
        distance_km=163.25,
        cost=3047.333,
    )

    history = store.read()
    assert len(history) == 2
    assert history[-1] == appended
    assert store.count() == 2


@pytest.mark.django_db
def test_read_keeps_insertion_order_not_date_order() -> None:
    store = HistoryStore()
    now = timezone.now()
    store.append(
        vehicle="A",
        origin_name="x",
        destination_name="y",
        distance_km=1.0,
        cost=1.0,
        timestamp=now,
    )
    store.append(
        vehicle="B",
        origin_name="x",
        destination_name="y",
        distance_km=1.0,
        cost=1.0,
        timestamp=now - timedelta(days=60),
    )

    assert [entry.vehicle for entry in store.read()] == ["A", "B"]


@pytest.mark.django_db
def test_clear_removes_all_history() -> None:
    store = HistoryStore()
    store.append(vehicle="A", origin_name="x", destination_name="y", distance_km=1.0, cost=1.0)

    assert store.clear() == 1
    assert store.read() == []


def test_aware_timestamps_are_bucketed_in_local_time(settings) -> None:
    settings.TIME_ZONE = "Asia/Karachi"
    entries = [
        # 01:30 on 1 Feb in Karachi
        _entry("1", datetime(2024, 1, 31, 20, 30, tzinfo=dt_timezone.utc), 40.0),
        _entry("2", datetime(2024, 1, 31, 18, 0, tzinfo=dt_timezone.utc), 60.0),
    ]

    assert aggregate_monthly(entries) == [
        MonthlyAggregate(month="Jan 2024", cost=60.0),
        MonthlyAggregate(month="Feb 2024", cost=40.0),
    ]
