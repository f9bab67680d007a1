"""Pytest configuration and shared fixtures."""

from datetime import datetime
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from event_series.domain import (
    EventDraft,
    EventId,
    EventSeries,
    Frequency,
    SeriesId,
    normalize_category_keys,
)
from event_series.domain.errors import StoreUnavailableError
from event_series.stores.interfaces import EventSeriesStore


class InMemoryEventSeriesStore(EventSeriesStore):
    """Dict-backed store with the same uniqueness rule as the database."""

    def __init__(self, series=(), active_categories=()) -> None:
        self.series = {item.id: item for item in series}
        self.active_categories = set(active_categories)
        self.events: dict[EventId, EventDraft] = {}
        self.event_categories: dict[EventId, list[str]] = {}
        self.generated_at: dict[SeriesId, datetime] = {}
        self.failing_inserts: set[SeriesId] = set()
        self.failing_tags: set[SeriesId] = set()
        self.unavailable = False

    def list_active_series(self, series_ids=None):
        if self.unavailable:
            raise StoreUnavailableError()
        return [
            item
            for item in self.series.values()
            if item.is_active and (not series_ids or item.id in series_ids)
        ]

    def insert_events_ignoring_conflicts(self, drafts):
        if any(draft.series_id in self.failing_inserts for draft in drafts):
            raise RuntimeError("insert failed")
        existing = {(draft.series_id, draft.start_at) for draft in self.events.values()}
        inserted = []
        for draft in drafts:
            key = (draft.series_id, draft.start_at)
            if key in existing:
                continue
            event_id = EventId(value=uuid4())
            self.events[event_id] = draft
            existing.add(key)
            inserted.append(event_id)
        return inserted

    def mark_series_generated(self, series_id, generated_at):
        self.generated_at[series_id] = generated_at

    def set_event_categories(self, event_id, category_keys):
        if self.events[event_id].series_id in self.failing_tags:
            raise RuntimeError("tagging failed")
        applied = [
            key for key in normalize_category_keys(category_keys) if key in self.active_categories
        ]
        self.event_categories[event_id] = applied
        return applied

    def starts_for(self, series_id):
        return sorted(
            draft.start_at for draft in self.events.values() if draft.series_id == series_id
        )


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def make_series():
    """Build a domain EventSeries; defaults to a weekly Monday 19:00 series."""

    def _make(**overrides) -> EventSeries:
        values = {
            "id": SeriesId(value=uuid4()),
            "venue_id": str(uuid4()),
            "created_by_user_id": "user_1",
            "title": "Trivia Night",
            "city": "Austin",
            "state": "TX",
            "start_at": datetime(2024, 1, 1, 19, 0),
            "frequency": Frequency.WEEKLY,
        }
        values.update(overrides)
        return EventSeries(**values)

    return _make


@pytest.fixture
def memory_store():
    def _make(*series, active_categories=()) -> InMemoryEventSeriesStore:
        return InMemoryEventSeriesStore(series, active_categories)

    return _make


@pytest.fixture
def create_series_row(db):
    """Persist an EventSeries row; defaults to a daily series at 19:00 on Jan 1 2024."""
    from event_series.models import EventSeries as EventSeriesRow

    def _create(**overrides) -> EventSeriesRow:
        values = {
            "venue_id": uuid4(),
            "created_by_user_id": "user_1",
            "title": "Trivia Night",
            "city": "Austin",
            "state": "TX",
            "start_at": datetime(2024, 1, 1, 19, 0),
            "frequency": "daily",
        }
        values.update(overrides)
        return EventSeriesRow.objects.create(**values)

    return _create
