from django.contrib import admin

from trip_planner.models import TripHistoryEntry


@admin.register(TripHistoryEntry)
class TripHistoryEntryAdmin(admin.ModelAdmin):
    list_display = (
        "recorded_at",
        "vehicle",
        "origin_name",
        "destination_name",
        "distance_km",
        "cost",
    )
    list_filter = ("vehicle",)
    search_fields = ("vehicle", "origin_name", "destination_name")
    ordering = ("-recorded_at",)
