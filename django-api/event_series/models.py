"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
Places (venues, organizers) and users live in other services and are
referenced by id only.
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from event_series.domain.recurrence import normalize_days_of_week


class Visibility(models.TextChoices):
    PUBLIC = "public", "Public"
    PRIVATE = "private", "Private"


class RecurrenceFrequency(models.TextChoices):
    DAILY = "daily", "Daily"
    WEEKLY = "weekly", "Weekly"


class Category(models.Model):
    """Persistence model for event categories."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=64, unique=True)
    label = models.CharField(max_length=100)
    sort_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "label"]
        verbose_name_plural = "categories"
        indexes = [
            models.Index(fields=["is_active", "sort_order"], name="event_serie_is_acti_5c1f0e_idx"),
        ]

    def __str__(self) -> str:
        return self.label


class EventSeries(models.Model):
    """Persistence model for recurring event definitions."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    venue_id = models.UUIDField(blank=True, null=True, db_index=True)
    organizer_id = models.UUIDField(blank=True, null=True, db_index=True)
    created_by_user_id = models.CharField(max_length=255)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    cover_image_url = models.URLField(max_length=500, blank=True, null=True)
    event_url = models.URLField(max_length=500, blank=True, null=True)
    source = models.CharField(max_length=50, blank=True, null=True)
    external_id = models.TextField(blank=True, null=True)
    start_at = models.DateTimeField(db_index=True)
    duration_minutes = models.IntegerField(blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2)
    categories = models.JSONField(default=list, blank=True)
    visibility = models.CharField(
        max_length=16, choices=Visibility.choices, default=Visibility.PUBLIC
    )
    frequency = models.CharField(max_length=16, choices=RecurrenceFrequency.choices)
    interval = models.IntegerField(default=1)
    days_of_week = models.JSONField(blank=True, null=True)
    until_date = models.DateTimeField(blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    last_generated_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_at"]
        verbose_name_plural = "event series"
        indexes = [
            models.Index(fields=["city", "state"], name="event_serie_city_8a4b21_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.frequency})"

    def clean(self) -> None:
        if (self.venue_id is None) == (self.organizer_id is None):
            raise ValidationError("A series needs exactly one venue or organizer.")
        if self.until_date and self.start_at and self.until_date < self.start_at:
            raise ValidationError(
                {"until_date": "Series end date must be after the first event date."}
            )

    def save(self, *args, **kwargs) -> None:
        if self.start_at is not None:
            self.days_of_week = normalize_days_of_week(
                self.frequency, self.days_of_week, self.start_at
            )
        super().save(*args, **kwargs)


class Event(models.Model):
    """Persistence model for events, standalone or materialized from a series."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    series = models.ForeignKey(
        EventSeries,
        on_delete=models.SET_NULL,
        related_name="events",
        blank=True,
        null=True,
    )
    venue_id = models.UUIDField(blank=True, null=True, db_index=True)
    organizer_id = models.UUIDField(blank=True, null=True, db_index=True)
    created_by_user_id = models.CharField(max_length=255)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    cover_image_url = models.URLField(max_length=500, blank=True, null=True)
    event_url = models.URLField(max_length=500, blank=True, null=True)
    source = models.CharField(max_length=50, blank=True, null=True)
    external_id = models.TextField(blank=True, null=True)
    start_at = models.DateTimeField()
    end_at = models.DateTimeField(blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2)
    visibility = models.CharField(
        max_length=16, choices=Visibility.choices, default=Visibility.PUBLIC
    )
    categories = models.ManyToManyField(
        Category, through="EventCategory", related_name="events", blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["series", "start_at"], name="events_series_start_at_unique"
            ),
        ]
        indexes = [
            models.Index(fields=["start_at"], name="event_serie_start_a_3e9d40_idx"),
            models.Index(fields=["city", "state"], name="event_serie_city_f27c6d_idx"),
            models.Index(
                fields=["start_at", "visibility"], name="event_serie_start_a_b0c7e2_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} - {self.start_at}"


class EventCategory(models.Model):
    """Link between an event and one of its categories."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="category_links")
    category = models.ForeignKey(
        Category, on_delete=models.CASCADE, related_name="event_links"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["event", "category"], name="event_categories_event_category_unique"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.event_id} - {self.category_id}"
