"""Event series materializer - turns recurring series into event rows.

Services:
- Depend only on interfaces (stores)
- Take the current time as an argument, never read the clock
- Compose insert, tag and bookkeeping as separate stages per series
- Return domain models or domain errors

Duplicate prevention is left entirely to the store's (series_id, start_at)
uniqueness, so a run can always be repeated after a failure.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from event_series.domain import (
    DurationMinutes,
    EventDraft,
    EventId,
    EventSeries,
    MaterializeResult,
    SeriesId,
    Visibility,
    expand,
)
from event_series.domain.errors import (
    InvalidSeriesIdError,
    InvalidWindowError,
    MaterializationError,
    UnsupportedFrequencyError,
)
from event_series.stores.interfaces import EventSeriesStore

logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD_DAYS = 30


@dataclass
class _RunTally:
    processed_series: int = 0
    created_events: int = 0
    first_created_event_id: EventId | None = None
    skipped_series: list[SeriesId] = field(default_factory=list)
    untagged_series: list[SeriesId] = field(default_factory=list)

    def record_inserted(self, event_ids: list[EventId]) -> None:
        self.created_events += len(event_ids)
        if self.first_created_event_id is None and event_ids:
            self.first_created_event_id = event_ids[0]

    def result(self) -> MaterializeResult:
        return MaterializeResult(
            processed_series=self.processed_series,
            created_events=self.created_events,
            first_created_event_id=self.first_created_event_id,
            skipped_series=tuple(self.skipped_series),
            untagged_series=tuple(self.untagged_series),
        )


def build_event_drafts(series: EventSeries, occurrences: list[datetime]) -> list[EventDraft]:
    """One insert payload per occurrence, copying the series fields by value."""
    duration = DurationMinutes.from_raw(series.duration_minutes)
    drafts = []
    for start_at in occurrences:
        end_at = None
        if duration is not None:
            end_at = start_at + timedelta(minutes=duration.value)
        drafts.append(
            EventDraft(
                series_id=series.id,
                venue_id=series.venue_id,
                organizer_id=series.organizer_id,
                created_by_user_id=series.created_by_user_id,
                title=series.title,
                description=series.description,
                cover_image_url=series.cover_image_url,
                event_url=series.event_url,
                source=series.source,
                start_at=start_at,
                end_at=end_at,
                address=series.address,
                city=series.city,
                state=series.state,
                visibility=series.visibility,
            )
        )
    return drafts


def parse_series_ids(values: list[str]) -> list[SeriesId]:
    """Parse raw series ids.

    Raises:
        InvalidSeriesIdError: If any value is not a valid UUID.
    """
    series_ids = []
    for value in values:
        try:
            series_ids.append(SeriesId.from_string(value))
        except ValueError as exc:
            raise InvalidSeriesIdError(value) from exc
    return series_ids


class EventSeriesMaterializer:
    """Service that materializes active event series over a lookahead window."""

    def __init__(self, store: EventSeriesStore) -> None:
        self._store = store

    def materialize(
        self,
        now: datetime,
        lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
        series_ids: list[SeriesId] | None = None,
        window_start: datetime | None = None,
        window_end: datetime | None = None,
    ) -> MaterializeResult:
        """Materialize occurrences of every active series inside the window.

        The window defaults to ``[now, now + lookahead_days]``.

        Raises:
            InvalidWindowError: If the window is inverted or lookahead is negative.
            StoreUnavailableError: If active series cannot be loaded.
            MaterializationError: If an insert or bookkeeping write fails. The
                error carries the counts accumulated so far.
        """
        window_start, window_end = self._build_window(
            now, lookahead_days, window_start, window_end
        )
        active_series = self._store.list_active_series(series_ids)
        logger.info(
            "Materializing %d event series between %s and %s",
            len(active_series),
            window_start.isoformat(),
            window_end.isoformat(),
        )

        tally = _RunTally()
        for series in active_series:
            if not isinstance(series.visibility, Visibility):
                logger.warning(
                    "Skipping event series %s with unknown visibility %r",
                    series.id,
                    series.visibility,
                )
                tally.skipped_series.append(series.id)
                continue

            try:
                occurrences = expand(series, window_start, window_end)
            except UnsupportedFrequencyError:
                logger.warning(
                    "Skipping event series %s with unsupported frequency %r",
                    series.id,
                    series.frequency,
                )
                tally.skipped_series.append(series.id)
                continue

            try:
                inserted = self._insert_occurrences(series, occurrences)
                tally.record_inserted(inserted)
                if not self._tag_categories(series, inserted):
                    tally.untagged_series.append(series.id)
                self._mark_generated(series, now)
            except Exception as exc:
                logger.exception("Materialization failed for event series %s", series.id)
                raise MaterializationError(series.id, tally.result()) from exc
            tally.processed_series += 1

        result = tally.result()
        logger.info(
            "Materialized event series: processed=%d created=%d skipped=%d untagged=%d",
            result.processed_series,
            result.created_events,
            len(result.skipped_series),
            len(result.untagged_series),
        )
        return result

    @staticmethod
    def _build_window(
        now: datetime,
        lookahead_days: int,
        window_start: datetime | None,
        window_end: datetime | None,
    ) -> tuple[datetime, datetime]:
        if lookahead_days < 0:
            raise InvalidWindowError("Lookahead days cannot be negative")
        start = window_start if window_start is not None else now
        end = window_end if window_end is not None else start + timedelta(days=lookahead_days)
        if end < start:
            raise InvalidWindowError("Window end must not precede window start")
        return start, end

    def _insert_occurrences(self, series: EventSeries, occurrences: list[datetime]) -> list[EventId]:
        if not occurrences:
            logger.debug("Event series %s has no occurrences in window", series.id)
            return []
        inserted = self._store.insert_events_ignoring_conflicts(
            build_event_drafts(series, occurrences)
        )
        logger.debug(
            "Event series %s: %d occurrences, %d newly inserted",
            series.id,
            len(occurrences),
            len(inserted),
        )
        return inserted

    def _tag_categories(self, series: EventSeries, inserted: list[EventId]) -> bool:
        """Attach series categories to newly inserted events only.

        Returns False when tagging failed; inserted events are kept either way.
        """
        category_keys = series.category_keys()
        if not inserted or not category_keys:
            return True
        try:
            for event_id in inserted:
                self._store.set_event_categories(event_id, category_keys)
        except Exception:
            logger.exception("Category tagging failed for event series %s", series.id)
            return False
        return True

    def _mark_generated(self, series: EventSeries, now: datetime) -> None:
        self._store.mark_series_generated(series.id, now)
