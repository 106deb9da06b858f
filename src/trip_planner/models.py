from __future__ import annotations

from django.db import models


class TripHistoryEntry(models.Model):
    objects = models.Manager["TripHistoryEntry"]()

    recorded_at = models.DateTimeField(db_index=True)
    vehicle = models.CharField(max_length=120)
    origin_name = models.CharField(max_length=300)
    destination_name = models.CharField(max_length=300)
    distance_km = models.FloatField()
    cost = models.FloatField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        # Insertion order, not trip date.
        ordering = ("id",)
        verbose_name_plural = "trip history entries"

    def __str__(self) -> str:
        return f"{self.vehicle}: {self.origin_name} -> {self.destination_name}"
