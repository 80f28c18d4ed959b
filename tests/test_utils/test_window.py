"""Tests for target day and query window selection."""

from datetime import date, datetime, timedelta, timezone

import pytest

from s3report.utils.window import query_window, target_day


class TestTargetDay:

    @pytest.mark.parametrize("hour,minute", [(0, 0), (0, 1), (12, 30), (23, 59)])
    def test_today_independent_of_time_of_day(self, hour, minute):
        """Test the target day only depends on the UTC date."""
        now = datetime(2015, 5, 1, hour, minute, tzinfo=timezone.utc)

        assert target_day(now) == date(2015, 5, 1)

    def test_previous_day(self):
        now = datetime(2015, 5, 1, 8, 0, tzinfo=timezone.utc)

        assert target_day(now, previous_day=True) == date(2015, 4, 30)

    def test_previous_day_across_year_boundary(self):
        now = datetime(2016, 1, 1, 0, 0, 5, tzinfo=timezone.utc)

        assert target_day(now, previous_day=True) == date(2015, 12, 31)

    def test_converts_to_utc(self):
        """Test non-UTC times are converted before taking the date."""
        pacific = timezone(timedelta(hours=-7))
        now = datetime(2015, 4, 30, 20, 0, tzinfo=pacific)  # 2015-05-01 03:00 UTC

        assert target_day(now) == date(2015, 5, 1)

    def test_naive_time_taken_as_utc(self):
        assert target_day(datetime(2015, 5, 1, 23, 0)) == date(2015, 5, 1)

    def test_defaults_to_current_utc_date(self):
        assert target_day() == datetime.now(timezone.utc).date()


class TestQueryWindow:

    def test_one_minute_at_midnight_utc(self):
        start, end = query_window(date(2015, 5, 1))

        assert start == datetime(2015, 5, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert end == datetime(2015, 5, 1, 0, 1, 0, tzinfo=timezone.utc)

    def test_window_is_timezone_aware(self):
        start, end = query_window(date(2015, 5, 1))

        assert start.tzinfo is timezone.utc
        assert end - start == timedelta(minutes=1)
