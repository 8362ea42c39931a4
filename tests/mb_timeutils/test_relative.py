"""Tests for relative module."""

import time
from datetime import UTC, datetime

import pytest

from mb_timeutils.errors import BufferTooSmallError
from mb_timeutils.relative import ShortFlags, TimeVal, format_short, is_this_year, is_today
from mb_timeutils.units import SEC_PER_DAY, SEC_PER_YEAR

# Mid-afternoon UTC, 100 days into the 55th 365-day period since the epoch
NOW_SEC = 54 * SEC_PER_YEAR + 100 * SEC_PER_DAY + 15 * 3600


def _local(ts: int) -> datetime:
    return datetime.fromtimestamp(ts, tz=UTC).astimezone()


class TestIsToday:
    """Tests for is_today function."""

    def test_same_instant(self):
        """A timestamp equal to now is today."""
        assert is_today(NOW_SEC, TimeVal(sec=NOW_SEC))

    def test_utc_day_boundaries(self):
        """Days are counted in whole UTC days since the epoch."""
        day_start = NOW_SEC // SEC_PER_DAY * SEC_PER_DAY
        now = TimeVal(sec=NOW_SEC)
        assert is_today(day_start, now)
        assert is_today(day_start + SEC_PER_DAY - 1, now)
        assert not is_today(day_start - 1, now)
        assert not is_today(day_start + SEC_PER_DAY, now)

    def test_unset_reference_is_filled(self):
        """A zero reference is populated from the clock as a side effect."""
        now = TimeVal()
        before = int(time.time())
        assert is_today(before, now)
        assert before <= now.sec <= int(time.time())

    def test_set_reference_is_kept(self):
        """A non-zero reference is not overwritten."""
        now = TimeVal(sec=NOW_SEC, usec=5)
        is_today(0, now)
        assert now == TimeVal(sec=NOW_SEC, usec=5)

    def test_before_epoch_truncates_toward_zero(self):
        """The first day before the epoch shares day 0 with the first day after it."""
        assert is_today(-1, TimeVal(sec=1))
        assert is_today(-(SEC_PER_DAY - 1), TimeVal(sec=SEC_PER_DAY - 1))
        assert not is_today(-SEC_PER_DAY, TimeVal(sec=1))
        assert is_today(-SEC_PER_DAY - 1, TimeVal(sec=-SEC_PER_DAY))


class TestIsThisYear:
    """Tests for is_this_year function."""

    def test_within_period(self):
        """Timestamps in the same 365-day period are this year."""
        now = TimeVal(sec=NOW_SEC)
        assert is_this_year(NOW_SEC - 90 * SEC_PER_DAY, now)
        assert not is_this_year(NOW_SEC - 101 * SEC_PER_DAY, now)

    def test_approximation_ignores_leap_days(self):
        """Period boundaries drift away from January 1st: two December 2024 days land in different 'years'."""
        boundary = 55 * SEC_PER_YEAR
        assert datetime.fromtimestamp(boundary - 1, tz=UTC).strftime("%Y-%m") == "2024-12"
        assert datetime.fromtimestamp(boundary, tz=UTC).strftime("%Y-%m") == "2024-12"
        assert not is_this_year(boundary - 1, TimeVal(sec=boundary))

    def test_before_epoch_truncates_toward_zero(self):
        """A time shortly before the epoch is in the same period as the epoch's first year."""
        assert is_this_year(-SEC_PER_DAY, TimeVal(sec=100 * SEC_PER_DAY))
        assert not is_this_year(-SEC_PER_YEAR, TimeVal(sec=100 * SEC_PER_DAY))

    def test_unset_reference_is_filled(self):
        """A zero reference is populated from the clock as a side effect."""
        now = TimeVal()
        assert is_this_year(int(time.time()), now)
        assert now.sec > 0


class TestFormatShort:
    """Tests for format_short function."""

    def test_today(self):
        """A timestamp equal to now renders as HH:MM."""
        assert format_short(NOW_SEC, TimeVal(sec=NOW_SEC)) == _local(NOW_SEC).strftime("%H:%M")

    def test_this_year(self):
        """Earlier in the same period renders as MonDD."""
        ts = NOW_SEC - 30 * SEC_PER_DAY
        assert format_short(ts, TimeVal(sec=NOW_SEC)) == _local(ts).strftime("%b%d")

    def test_this_year_with_time(self):
        """THISYEAR_HHMM appends /HH:MM."""
        ts = NOW_SEC - 30 * SEC_PER_DAY
        result = format_short(ts, TimeVal(sec=NOW_SEC), ShortFlags.THISYEAR_HHMM)
        assert result == _local(ts).strftime("%b%d/%H:%M")

    def test_older(self):
        """A year plus a day before now renders as YYYY-MonDD."""
        ts = NOW_SEC - (365 + 1) * SEC_PER_DAY
        assert format_short(ts, TimeVal(sec=NOW_SEC)) == _local(ts).strftime("%Y-%b%d")

    def test_older_ignores_hhmm_flag(self):
        """THISYEAR_HHMM only affects dates within the period."""
        ts = NOW_SEC - (365 + 1) * SEC_PER_DAY
        assert format_short(ts, TimeVal(sec=NOW_SEC), ShortFlags.THISYEAR_HHMM) == _local(ts).strftime("%Y-%b%d")

    def test_buffer_boundary(self):
        """HH:MM needs five characters."""
        now = TimeVal(sec=NOW_SEC)
        assert len(format_short(NOW_SEC, now, bufsize=5)) == 5
        with pytest.raises(BufferTooSmallError):
            format_short(NOW_SEC, now, bufsize=4)
