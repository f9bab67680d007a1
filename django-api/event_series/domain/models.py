"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in event_series/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from event_series.domain.value_objects import EventId, Frequency, SeriesId, Visibility


@dataclass(frozen=True)
class EventSeries:
    """Domain representation of a recurring event definition.

    ``start_at`` is the anchor: it fixes the first valid occurrence date
    and the time of day of every occurrence.
    """

    id: SeriesId
    created_by_user_id: str
    title: str
    city: str
    state: str
    start_at: datetime
    frequency: Frequency | str
    venue_id: str | None = None
    organizer_id: str | None = None
    description: str | None = None
    cover_image_url: str | None = None
    event_url: str | None = None
    source: str | None = None
    address: str | None = None
    interval: int = 1
    days_of_week: tuple[int, ...] | None = None
    duration_minutes: int | None = None
    until_date: datetime | None = None
    categories: tuple[object, ...] = ()
    visibility: Visibility | str = Visibility.PUBLIC
    is_active: bool = True
    last_generated_at: datetime | None = None

    def category_keys(self) -> list[str]:
        """Category values that are usable as keys (strings only)."""
        return [value for value in self.categories if isinstance(value, str)]


@dataclass(frozen=True)
class EventDraft:
    """Insert payload for one materialized occurrence.

    Descriptive and location fields are copied by value from the series.
    """

    series_id: SeriesId
    created_by_user_id: str
    title: str
    city: str
    state: str
    start_at: datetime
    end_at: datetime | None
    venue_id: str | None
    organizer_id: str | None
    description: str | None
    cover_image_url: str | None
    event_url: str | None
    source: str | None
    address: str | None
    visibility: Visibility
    external_id: str | None = None


@dataclass(frozen=True)
class MaterializeResult:
    """Outcome of one materializer run."""

    processed_series: int
    created_events: int
    first_created_event_id: EventId | None
    skipped_series: tuple[SeriesId, ...] = ()
    untagged_series: tuple[SeriesId, ...] = ()
