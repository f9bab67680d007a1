from event_series.domain.models import EventDraft, EventSeries, MaterializeResult
from event_series.domain.recurrence import expand, normalize_days_of_week
from event_series.domain.value_objects import (
    DurationMinutes,
    EventId,
    Frequency,
    SeriesId,
    Visibility,
    coerce_interval,
    normalize_category_keys,
)

__all__ = [
    "EventSeries",
    "EventDraft",
    "MaterializeResult",
    "EventId",
    "SeriesId",
    "Frequency",
    "Visibility",
    "DurationMinutes",
    "coerce_interval",
    "normalize_category_keys",
    "expand",
    "normalize_days_of_week",
]
