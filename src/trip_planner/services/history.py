from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from django.utils import timezone

from trip_planner.services.types import HistoryEntry, MonthlyAggregate

MONTH_LABEL_FORMAT = "%b %Y"


def month_label(timestamp: datetime) -> str:
    # aware timestamps are bucketed in the local time zone, naive ones as given
    if timezone.is_aware(timestamp):
        timestamp = timezone.localtime(timestamp)
    return timestamp.strftime(MONTH_LABEL_FORMAT)


def aggregate_monthly(entries: Iterable[HistoryEntry]) -> list[MonthlyAggregate]:
    """Sum trip costs per calendar month, oldest month first.

    Entries may arrive in any order; the result is always chronological.
    """
    totals: dict[str, float] = {}
    for entry in entries:
        label = month_label(entry.timestamp)
        totals[label] = totals.get(label, 0.0) + entry.cost

    ordered_labels = sorted(
        totals, key=lambda label: datetime.strptime(label, MONTH_LABEL_FORMAT)
    )
    return [MonthlyAggregate(month=label, cost=totals[label]) for label in ordered_labels]
