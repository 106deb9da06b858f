from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="TripHistoryEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("recorded_at", models.DateTimeField(db_index=True)),
                ("vehicle", models.CharField(max_length=120)),
                ("origin_name", models.CharField(max_length=300)),
                ("destination_name", models.CharField(max_length=300)),
                ("distance_km", models.FloatField()),
                ("cost", models.FloatField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name_plural": "trip history entries",
                "ordering": ("id",),
            },
        ),
    ]
