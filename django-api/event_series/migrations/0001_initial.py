import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("key", models.CharField(max_length=64, unique=True)),
                ("label", models.CharField(max_length=100)),
                ("sort_order", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "categories",
                "ordering": ["sort_order", "label"],
                "indexes": [models.Index(fields=["is_active", "sort_order"], name="event_serie_is_acti_5c1f0e_idx")],
            },
        ),
        migrations.CreateModel(
            name="EventSeries",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("venue_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("organizer_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("created_by_user_id", models.CharField(max_length=255)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("cover_image_url", models.URLField(blank=True, max_length=500, null=True)),
                ("event_url", models.URLField(blank=True, max_length=500, null=True)),
                ("source", models.CharField(blank=True, max_length=50, null=True)),
                ("external_id", models.TextField(blank=True, null=True)),
                ("start_at", models.DateTimeField(db_index=True)),
                ("duration_minutes", models.IntegerField(blank=True, null=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(max_length=2)),
                ("categories", models.JSONField(blank=True, default=list)),
                (
                    "visibility",
                    models.CharField(
                        choices=[("public", "Public"), ("private", "Private")],
                        default="public",
                        max_length=16,
                    ),
                ),
                (
                    "frequency",
                    models.CharField(choices=[("daily", "Daily"), ("weekly", "Weekly")], max_length=16),
                ),
                ("interval", models.IntegerField(default=1)),
                ("days_of_week", models.JSONField(blank=True, null=True)),
                ("until_date", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("last_generated_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "event series",
                "ordering": ["start_at"],
                "indexes": [models.Index(fields=["city", "state"], name="event_serie_city_8a4b21_idx")],
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("venue_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("organizer_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("created_by_user_id", models.CharField(max_length=255)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("cover_image_url", models.URLField(blank=True, max_length=500, null=True)),
                ("event_url", models.URLField(blank=True, max_length=500, null=True)),
                ("source", models.CharField(blank=True, max_length=50, null=True)),
                ("external_id", models.TextField(blank=True, null=True)),
                ("start_at", models.DateTimeField()),
                ("end_at", models.DateTimeField(blank=True, null=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(max_length=2)),
                (
                    "visibility",
                    models.CharField(
                        choices=[("public", "Public"), ("private", "Private")],
                        default="public",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "series",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="events",
                        to="event_series.eventseries",
                    ),
                ),
            ],
            options={
                "ordering": ["start_at"],
            },
        ),
        migrations.CreateModel(
            name="EventCategory",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="event_links",
                        to="event_series.category",
                    ),
                ),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="category_links",
                        to="event_series.event",
                    ),
                ),
            ],
        ),
        migrations.AddField(
            model_name="event",
            name="categories",
            field=models.ManyToManyField(
                blank=True,
                related_name="events",
                through="event_series.EventCategory",
                to="event_series.category",
            ),
        ),
        migrations.AddIndex(
            model_name="event",
            index=models.Index(fields=["start_at"], name="event_serie_start_a_3e9d40_idx"),
        ),
        migrations.AddIndex(
            model_name="event",
            index=models.Index(fields=["city", "state"], name="event_serie_city_f27c6d_idx"),
        ),
        migrations.AddIndex(
            model_name="event",
            index=models.Index(fields=["start_at", "visibility"], name="event_serie_start_a_b0c7e2_idx"),
        ),
        migrations.AddConstraint(
            model_name="event",
            constraint=models.UniqueConstraint(
                fields=("series", "start_at"), name="events_series_start_at_unique"
            ),
        ),
        migrations.AddConstraint(
            model_name="eventcategory",
            constraint=models.UniqueConstraint(
                fields=("event", "category"), name="event_categories_event_category_unique"
            ),
        ),
    ]
