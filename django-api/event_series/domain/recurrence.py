"""Recurrence expansion for event series.

Turns a series definition and a time window into the ordered occurrence
instants that fall inside the window. Pure: callers supply every bound,
nothing here reads the clock or touches storage.

Only daily and weekly series are supported. Weekdays are numbered from
Sunday (0) to Saturday (6) and weekly intervals are counted from the
Sunday-aligned week containing the anchor.
"""

from datetime import date, datetime, time, timedelta

from event_series.domain.errors import UnsupportedFrequencyError
from event_series.domain.models import EventSeries
from event_series.domain.value_objects import SATURDAY, SUNDAY, Frequency, coerce_interval


def sunday_weekday(day: date) -> int:
    """Weekday of ``day`` with 0=Sunday ... 6=Saturday."""
    return (day.weekday() + 1) % 7


def start_of_week(day: date) -> date:
    return day - timedelta(days=sunday_weekday(day))


def normalize_days_of_week(
    frequency: Frequency | str,
    days_of_week: list[int] | tuple[int, ...] | None,
    start_at: datetime,
) -> list[int] | None:
    """Return the effective weekday set for a series.

    Daily series have no day set. Weekly series drop duplicate and
    out-of-range values and fall back to the anchor's weekday when
    nothing usable is left.
    """
    if frequency in (Frequency.DAILY, Frequency.DAILY.value):
        return None

    days = sorted(
        {day for day in (days_of_week or ()) if type(day) is int and SUNDAY <= day <= SATURDAY}
    )
    if days:
        return days
    return [sunday_weekday(start_at.date())]


def _window_start(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _window_end(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max)


def clamp_window(
    series: EventSeries, window_start: datetime, window_end: datetime
) -> tuple[datetime, datetime] | None:
    """Intersect the window with the series' own [start_at, until_date] span."""
    effective_start = max(window_start, series.start_at)
    effective_end = window_end
    if series.until_date is not None and series.until_date < window_end:
        effective_end = series.until_date

    if effective_end < effective_start:
        return None
    return effective_start, effective_end


def _daily_occurrences(
    series: EventSeries, effective_start: datetime, effective_end: datetime
) -> list[datetime]:
    interval = coerce_interval(series.interval)
    step = timedelta(days=interval)
    current = series.start_at

    if current < effective_start:
        diff_days = (effective_start.date() - current.date()).days
        current += step * max(0, diff_days // interval)

    while current < effective_start:
        current += step

    occurrences = []
    while current <= effective_end:
        occurrences.append(current)
        current += step
    return occurrences


def _weekly_occurrences(
    series: EventSeries, effective_start: datetime, effective_end: datetime
) -> list[datetime]:
    interval = coerce_interval(series.interval)
    weekdays = set(normalize_days_of_week(Frequency.WEEKLY, series.days_of_week, series.start_at))
    anchor_day = series.start_at.date()
    anchor_week = start_of_week(anchor_day)
    time_of_day = series.start_at.timetz()

    occurrences = []
    cursor = effective_start.date()
    last_day = effective_end.date()
    while cursor <= last_day:
        if cursor >= anchor_day and sunday_weekday(cursor) in weekdays:
            weeks_since_anchor = (start_of_week(cursor) - anchor_week).days // 7
            if weeks_since_anchor % interval == 0:
                occurrence = datetime.combine(cursor, time_of_day)
                if effective_start <= occurrence <= effective_end:
                    occurrences.append(occurrence)
        cursor += timedelta(days=1)
    return occurrences


def expand(series: EventSeries, window_start: date, window_end: date) -> list[datetime]:
    """Return the ascending occurrence instants of ``series`` inside the window.

    Both window bounds are inclusive. A plain ``date`` start means the
    beginning of that day; a plain ``date`` end means its last instant.

    Raises:
        UnsupportedFrequencyError: If the series frequency is not daily or weekly.
    """
    if series.frequency not in (Frequency.DAILY, Frequency.WEEKLY):
        raise UnsupportedFrequencyError(series.frequency)

    clamped = clamp_window(series, _window_start(window_start), _window_end(window_end))
    if clamped is None:
        return []
    effective_start, effective_end = clamped

    match series.frequency:
        case Frequency.DAILY:
            return _daily_occurrences(series, effective_start, effective_end)
        case Frequency.WEEKLY:
            return _weekly_occurrences(series, effective_start, effective_end)
