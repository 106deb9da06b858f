from __future__ import annotations

from pathlib import Path
from typing import Any

import polars as pl
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from trip_planner.models import TripHistoryEntry


class Command(BaseCommand):
    help = "Append past trips from a CSV export to the trip history using Polars."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--csv-path",
            type=str,
            required=True,
            help="Path to the trip history CSV",
        )
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Clear existing history before importing",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        csv_path = Path(options["csv_path"])
        if not csv_path.exists():
            raise CommandError(f"CSV file does not exist: {csv_path}")

        frame = self._load_and_transform(csv_path)
        records = frame.to_dicts()

        if options["replace"]:
            TripHistoryEntry.objects.all().delete()

        TripHistoryEntry.objects.bulk_create(
            [
                TripHistoryEntry(
                    recorded_at=timezone.make_aware(row["recorded_at"]),
                    vehicle=row["vehicle"],
                    origin_name=row["origin_name"],
                    destination_name=row["destination_name"],
                    distance_km=row["distance_km"],
                    cost=row["cost"],
                )
                for row in records
            ],
            batch_size=1000,
        )

        self.stdout.write(
            self.style.SUCCESS(f"Imported trip history: {len(records)} trips appended")
        )

    @staticmethod
    def _load_and_transform(csv_path: Path) -> pl.DataFrame:
        frame = pl.read_csv(csv_path, infer_schema_length=0)
        required_columns = {"Date", "Vehicle", "From", "To", "Distance (km)", "Cost"}
        missing_columns = required_columns.difference(frame.columns)
        if missing_columns:
            raise CommandError(f"Missing expected columns: {sorted(missing_columns)}")

        date_text = pl.col("Date").str.strip_chars()
        normalized = (
            frame.select(
                pl.coalesce(
                    date_text.str.to_datetime("%Y-%m-%d %H:%M:%S", strict=False),
                    date_text.str.to_date("%Y-%m-%d", strict=False).cast(pl.Datetime("us")),
                ).alias("recorded_at"),
                _text_or_unknown("Vehicle").alias("vehicle"),
                _text_or_unknown("From").alias("origin_name"),
                _text_or_unknown("To").alias("destination_name"),
                pl.col("Distance (km)").cast(pl.Float64, strict=False).alias("distance_km"),
                pl.col("Cost").cast(pl.Float64, strict=False).alias("cost"),
            )
            .filter(
                pl.col("recorded_at").is_not_null()
                & pl.col("distance_km").is_not_null()
                & (pl.col("distance_km") >= 0)
                & pl.col("cost").is_not_null()
                & (pl.col("cost") >= 0)
            )
        )

        return normalized


def _text_or_unknown(column: str) -> pl.Expr:
    text = pl.col(column).str.strip_chars()
    return pl.when(text.str.len_chars() > 0).then(text).otherwise(pl.lit("Unknown"))
