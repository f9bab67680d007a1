"""Unit tests for recurrence expansion.

Run with: pytest tests/test_recurrence.py -v
"""

from datetime import date, datetime, timedelta

import pytest

from event_series.domain import Frequency, expand
from event_series.domain.errors import UnsupportedFrequencyError
from event_series.domain.recurrence import start_of_week, sunday_weekday

MONDAY, WEDNESDAY, FRIDAY = 1, 3, 5


class TestDailyExpansion:
    """Tests for daily series."""

    def test_every_third_day_inside_window(self, make_series):
        """Given interval 3 from Jan 1, the Jan 5-10 window holds Jan 7 and Jan 10."""
        series = make_series(
            frequency=Frequency.DAILY, interval=3, start_at=datetime(2024, 1, 1, 8, 0)
        )

        assert expand(series, date(2024, 1, 5), date(2024, 1, 10)) == [
            datetime(2024, 1, 7, 8, 0),
            datetime(2024, 1, 10, 8, 0),
        ]

    @pytest.mark.parametrize("interval", [1, 2, 3, 7, 10])
    def test_steps_from_anchor_clipped_to_window(self, make_series, interval):
        """Window [S, S+30 days] yields S, S+k, S+2k ... in ascending order."""
        anchor = datetime(2024, 3, 10, 6, 30)
        series = make_series(frequency=Frequency.DAILY, interval=interval, start_at=anchor)

        occurrences = expand(series, anchor, anchor + timedelta(days=30))

        assert occurrences == [anchor + timedelta(days=n) for n in range(0, 31, interval)]

    def test_window_start_between_occurrence_times(self, make_series):
        """An occurrence earlier on the window's first day is not produced."""
        series = make_series(frequency=Frequency.DAILY, start_at=datetime(2024, 1, 1, 8, 0))

        occurrences = expand(series, datetime(2024, 1, 5, 9, 0), datetime(2024, 1, 7, 0, 0))

        assert occurrences == [datetime(2024, 1, 6, 8, 0)]

    def test_window_bounds_are_inclusive(self, make_series):
        series = make_series(frequency=Frequency.DAILY, start_at=datetime(2024, 1, 1, 8, 0))

        occurrences = expand(series, datetime(2024, 1, 5, 8, 0), datetime(2024, 1, 6, 8, 0))

        assert occurrences == [datetime(2024, 1, 5, 8, 0), datetime(2024, 1, 6, 8, 0)]

    @pytest.mark.parametrize("interval", [0, -2])
    def test_non_positive_interval_behaves_as_one(self, make_series, interval):
        start = datetime(2024, 1, 1, 8, 0)
        series = make_series(frequency=Frequency.DAILY, interval=interval, start_at=start)

        assert expand(series, date(2024, 1, 1), date(2024, 1, 3)) == [
            start,
            start + timedelta(days=1),
            start + timedelta(days=2),
        ]


class TestWeeklyExpansion:
    """Tests for weekly series."""

    def test_monday_wednesday_friday_for_two_weeks(self, make_series):
        """Given Mon/Wed/Fri from Monday Jan 1 19:00, Jan 1-15 holds seven evenings."""
        series = make_series(
            days_of_week=(MONDAY, WEDNESDAY, FRIDAY), start_at=datetime(2024, 1, 1, 19, 0)
        )

        occurrences = expand(series, date(2024, 1, 1), date(2024, 1, 15))

        assert occurrences == [
            datetime(2024, 1, day, 19, 0) for day in (1, 3, 5, 8, 10, 12, 15)
        ]

    def test_every_other_week_counts_from_anchor_week(self, make_series):
        series = make_series(days_of_week=(MONDAY,), interval=2)

        occurrences = expand(series, date(2024, 1, 1), date(2024, 1, 31))

        assert occurrences == [datetime(2024, 1, day, 19, 0) for day in (1, 15, 29)]

    def test_days_before_anchor_day_are_skipped(self, make_series):
        """A Monday slot in the anchor's own week is skipped when the anchor is Wednesday."""
        series = make_series(
            days_of_week=(MONDAY, WEDNESDAY), start_at=datetime(2024, 1, 3, 19, 0)
        )

        occurrences = expand(series, date(2024, 1, 1), date(2024, 1, 8))

        assert occurrences == [datetime(2024, 1, 3, 19, 0), datetime(2024, 1, 8, 19, 0)]

    def test_time_of_day_comes_from_anchor(self, make_series):
        """Occurrences keep 19:00 even when the window starts mid-evening."""
        series = make_series(days_of_week=(MONDAY, WEDNESDAY))

        occurrences = expand(series, datetime(2024, 1, 8, 20, 0), date(2024, 1, 10))

        assert occurrences == [datetime(2024, 1, 10, 19, 0)]

    def test_empty_day_set_matches_anchor_weekday(self, make_series):
        window = (date(2024, 1, 1), date(2024, 2, 29))
        implicit = make_series(days_of_week=(), interval=2)
        explicit = make_series(days_of_week=(MONDAY,), interval=2)

        assert expand(implicit, *window) == expand(explicit, *window)
        assert expand(implicit, *window)

    def test_invalid_and_duplicate_days_are_discarded(self, make_series):
        window = (date(2024, 1, 1), date(2024, 1, 31))
        messy = make_series(days_of_week=(MONDAY, MONDAY, 7, -1, WEDNESDAY))
        clean = make_series(days_of_week=(MONDAY, WEDNESDAY))

        assert expand(messy, *window) == expand(clean, *window)

    @pytest.mark.parametrize("interval", [1, 2, 3])
    def test_occurrences_respect_day_set_and_week_interval(self, make_series, interval):
        anchor = datetime(2024, 2, 14, 18, 15)
        days = {0, 2, 4, 6}
        series = make_series(days_of_week=tuple(days), interval=interval, start_at=anchor)

        occurrences = expand(series, date(2024, 1, 1), date(2024, 6, 30))

        assert occurrences == sorted(occurrences)
        assert occurrences
        for occurrence in occurrences:
            assert sunday_weekday(occurrence.date()) in days
            assert occurrence.date() >= anchor.date()
            assert occurrence.time() == anchor.time()
            weeks = (start_of_week(occurrence.date()) - start_of_week(anchor.date())).days // 7
            assert weeks % interval == 0


class TestWindowClamping:
    """Tests for window and until_date bounds."""

    def test_until_date_is_inclusive(self, make_series):
        series = make_series(
            frequency=Frequency.DAILY,
            start_at=datetime(2024, 1, 1, 8, 0),
            until_date=datetime(2024, 1, 3, 8, 0),
        )

        assert expand(series, date(2024, 1, 1), date(2024, 1, 10)) == [
            datetime(2024, 1, 1, 8, 0),
            datetime(2024, 1, 2, 8, 0),
            datetime(2024, 1, 3, 8, 0),
        ]

    def test_nothing_exceeds_until_date(self, make_series):
        until = datetime(2024, 1, 17, 12, 0)
        series = make_series(days_of_week=(MONDAY, WEDNESDAY, FRIDAY), until_date=until)

        occurrences = expand(series, date(2024, 1, 1), date(2024, 3, 1))

        assert occurrences[-1] == datetime(2024, 1, 15, 19, 0)
        assert all(occurrence <= until for occurrence in occurrences)

    def test_window_before_anchor_is_empty(self, make_series):
        series = make_series(start_at=datetime(2024, 6, 1, 19, 0))

        assert expand(series, date(2024, 1, 1), date(2024, 5, 31)) == []

    def test_until_date_before_window_is_empty(self, make_series):
        series = make_series(until_date=datetime(2024, 1, 10, 0, 0))

        assert expand(series, date(2024, 2, 1), date(2024, 2, 29)) == []

    def test_inverted_window_is_empty(self, make_series):
        series = make_series()

        assert expand(series, date(2024, 1, 15), date(2024, 1, 1)) == []


class TestUnsupportedFrequency:
    """Tests for frequencies outside daily/weekly."""

    def test_unknown_frequency_raises(self, make_series):
        series = make_series(frequency="monthly")

        with pytest.raises(UnsupportedFrequencyError) as excinfo:
            expand(series, date(2024, 1, 1), date(2024, 1, 31))

        assert excinfo.value.frequency == "monthly"
