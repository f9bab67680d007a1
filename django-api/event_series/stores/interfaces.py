"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from event_series.domain import EventDraft, EventId, EventSeries, SeriesId


class EventSeriesStore(ABC):
    """Interface for the persistence operations the materializer needs."""

    @abstractmethod
    def list_active_series(self, series_ids: list[SeriesId] | None = None) -> list[EventSeries]:
        """Return active series, optionally restricted to ``series_ids``."""
        ...

    @abstractmethod
    def insert_events_ignoring_conflicts(self, drafts: list[EventDraft]) -> list[EventId]:
        """Insert drafts atomically, skipping existing (series_id, start_at) pairs.

        Returns the ids of rows actually inserted, in draft order.
        """
        ...

    @abstractmethod
    def mark_series_generated(self, series_id: SeriesId, generated_at: datetime) -> None:
        """Set the series' last_generated_at."""
        ...

    @abstractmethod
    def set_event_categories(self, event_id: EventId, category_keys: list[str]) -> list[str]:
        """Replace an event's categories, dropping keys with no active category.

        Returns the keys that were applied.
        """
        ...
