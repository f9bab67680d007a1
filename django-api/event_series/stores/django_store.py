"""Django ORM implementation of the EventSeriesStore."""

import logging
from datetime import datetime

from django.db import DatabaseError, transaction

from event_series import models
from event_series.domain import (
    EventDraft,
    EventId,
    EventSeries,
    Frequency,
    SeriesId,
    Visibility,
    normalize_category_keys,
)
from event_series.domain.errors import StoreUnavailableError
from event_series.stores.interfaces import EventSeriesStore

logger = logging.getLogger(__name__)


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _to_domain(row: models.EventSeries) -> EventSeries:
    return EventSeries(
        id=SeriesId(value=row.id),
        venue_id=_optional_str(row.venue_id),
        organizer_id=_optional_str(row.organizer_id),
        created_by_user_id=row.created_by_user_id,
        title=row.title,
        description=row.description,
        cover_image_url=row.cover_image_url,
        event_url=row.event_url,
        source=row.source,
        address=row.address,
        city=row.city,
        state=row.state,
        start_at=row.start_at,
        frequency=Frequency.coerce(row.frequency),
        interval=row.interval,
        days_of_week=tuple(row.days_of_week) if row.days_of_week is not None else None,
        duration_minutes=row.duration_minutes,
        until_date=row.until_date,
        categories=tuple(row.categories or ()),
        visibility=Visibility.coerce(row.visibility),
        is_active=row.is_active,
        last_generated_at=row.last_generated_at,
    )


def _to_row(draft: EventDraft) -> models.Event:
    return models.Event(
        series_id=draft.series_id.value,
        venue_id=draft.venue_id,
        organizer_id=draft.organizer_id,
        created_by_user_id=draft.created_by_user_id,
        title=draft.title,
        description=draft.description,
        cover_image_url=draft.cover_image_url,
        event_url=draft.event_url,
        source=draft.source,
        external_id=draft.external_id,
        start_at=draft.start_at,
        end_at=draft.end_at,
        address=draft.address,
        city=draft.city,
        state=draft.state,
        visibility=draft.visibility.value,
    )


class DjangoEventSeriesStore(EventSeriesStore):
    """Relational event series store using Django ORM."""

    def list_active_series(self, series_ids: list[SeriesId] | None = None) -> list[EventSeries]:
        queryset = models.EventSeries.objects.filter(is_active=True)
        if series_ids:
            queryset = queryset.filter(id__in=[series_id.value for series_id in series_ids])

        try:
            rows = list(queryset)
        except DatabaseError as exc:
            logger.exception("Could not load active event series")
            raise StoreUnavailableError() from exc
        return [_to_domain(row) for row in rows]

    def insert_events_ignoring_conflicts(self, drafts: list[EventDraft]) -> list[EventId]:
        if not drafts:
            return []

        # Ids are generated client-side, so a candidate id that exists after the
        # insert belongs to a row this call wrote; ignored rows never land.
        rows = [_to_row(draft) for draft in drafts]
        candidate_ids = [row.id for row in rows]
        with transaction.atomic():
            models.Event.objects.bulk_create(rows, ignore_conflicts=True)
            inserted = set(
                models.Event.objects.filter(id__in=candidate_ids).values_list("id", flat=True)
            )
        return [EventId(value=row_id) for row_id in candidate_ids if row_id in inserted]

    def mark_series_generated(self, series_id: SeriesId, generated_at: datetime) -> None:
        models.EventSeries.objects.filter(id=series_id.value).update(
            last_generated_at=generated_at
        )

    def set_event_categories(self, event_id: EventId, category_keys: list[str]) -> list[str]:
        keys = normalize_category_keys(category_keys)
        categories = {}
        if keys:
            categories = {
                category.key: category
                for category in models.Category.objects.filter(key__in=keys, is_active=True)
            }
        applied = [key for key in keys if key in categories]

        with transaction.atomic():
            models.EventCategory.objects.filter(event_id=event_id.value).delete()
            models.EventCategory.objects.bulk_create(
                [
                    models.EventCategory(event_id=event_id.value, category=categories[key])
                    for key in applied
                ],
                ignore_conflicts=True,
            )
        return applied
