from __future__ import annotations

import logging
from datetime import datetime

from django.utils import timezone

from trip_planner.models import TripHistoryEntry
from trip_planner.services.types import HistoryEntry

logger = logging.getLogger(__name__)


class HistoryStore:
    """Append-only trip history backed by the ``TripHistoryEntry`` table."""

    def append(
        self,
        *,
        vehicle: str,
        origin_name: str,
        destination_name: str,
        distance_km: float,
        cost: float,
        timestamp: datetime | None = None,
    ) -> HistoryEntry:
        row = TripHistoryEntry.objects.create(
            recorded_at=timestamp or timezone.now(),
            vehicle=vehicle,
            origin_name=origin_name,
            destination_name=destination_name,
            distance_km=distance_km,
            cost=cost,
        )
        logger.info("Saved trip %s to history (%s -> %s)", row.pk, origin_name, destination_name)
        return self._to_entry(row)

    def read(self) -> list[HistoryEntry]:
        return [self._to_entry(row) for row in TripHistoryEntry.objects.order_by("id")]

    def count(self) -> int:
        return TripHistoryEntry.objects.count()

    def clear(self) -> int:
        deleted, _ = TripHistoryEntry.objects.all().delete()
        logger.info("Cleared %s history entries", deleted)
        return deleted

    @staticmethod
    def _to_entry(row: TripHistoryEntry) -> HistoryEntry:
        return HistoryEntry(
            entry_id=str(row.pk),
            timestamp=row.recorded_at,
            vehicle=row.vehicle,
            origin_name=row.origin_name,
            destination_name=row.destination_name,
            distance_km=row.distance_km,
            cost=row.cost,
        )
