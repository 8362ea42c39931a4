"""Tests for duration module."""

import pytest

from mb_timeutils.duration import parse_duration
from mb_timeutils.errors import InvalidFormatError, OutOfRangeError
from mb_timeutils.units import (
    DURATION_UNITS,
    USEC_PER_DAY,
    USEC_PER_HOUR,
    USEC_PER_MINUTE,
    USEC_PER_MONTH,
    USEC_PER_SEC,
    USEC_PER_WEEK,
    USEC_PER_YEAR,
)


class TestParseDuration:
    """Tests for parse_duration function."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("5s", 5_000_000),
            ("1.5h", 5_400_000_000),
            ("90", 90 * USEC_PER_SEC),
            ("5 s", 5 * USEC_PER_SEC),
            ("5min 30s", 330 * USEC_PER_SEC),
            ("5min30s", 330 * USEC_PER_SEC),
            ("1h30m", 90 * USEC_PER_MINUTE),
            ("  1h \t 30min\n", 90 * USEC_PER_MINUTE),
            ("2 days", 2 * USEC_PER_DAY),
            ("1w", USEC_PER_WEEK),
            ("3weeks", 3 * USEC_PER_WEEK),
            ("1y", USEC_PER_YEAR),
            ("2 years", 2 * USEC_PER_YEAR),
            ("250ms", 250_000),
            ("3msec", 3_000),
            ("10us", 10),
            ("10usec", 10),
            ("2hr", 2 * USEC_PER_HOUR),
            (".5s", 500_000),
            ("+5s", 5 * USEC_PER_SEC),
            ("1.25ms", 1_250),
            ("0.333s", 333_000),
            ("1.0000001s", USEC_PER_SEC),
            ("0", 0),
            ("0s 0min", 0),
        ],
    )
    def test_valid(self, raw: str, expected: int):
        """Valid duration strings are parsed to microseconds."""
        assert parse_duration(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("5m", 5 * USEC_PER_MINUTE),
            ("5min", 5 * USEC_PER_MINUTE),
            ("5minutes", 5 * USEC_PER_MINUTE),
            ("5month", 5 * USEC_PER_MONTH),
            ("5months", 5 * USEC_PER_MONTH),
            ("5ms", 5_000),
            ("5msec", 5_000),
        ],
    )
    def test_m_suffix_resolution(self, raw: str, expected: int):
        """A lone 'm' means minutes; longer m-suffixes keep their own unit."""
        assert parse_duration(raw) == expected

    @pytest.mark.parametrize(("suffix", "usec"), DURATION_UNITS)
    @pytest.mark.parametrize(("whole", "frac"), [("0", "5"), ("3", "25"), ("12", "0001"), ("7", "999999999")])
    def test_fraction_formula(self, suffix: str, usec: int, whole: str, frac: str):
        """'{w}.{f}{s}' yields w*unit + floor(f*unit / 10**len(f)) for every table suffix."""
        expected = int(whole) * usec + int(frac) * usec // 10 ** len(frac)
        assert parse_duration(f"{whole}.{frac}{suffix}") == expected

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "s", "5x", "5mo", "1.", "1.s", ".s", "5s x", "1.-5s", "5s,3s"])
    def test_invalid_format(self, raw: str):
        """Malformed input raises InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            parse_duration(raw)

    @pytest.mark.parametrize("raw", ["５s", "1.５s", "٣h", "1٠s"])  # noqa: RUF001
    def test_non_ascii_digits(self, raw: str):
        """Only ASCII digits count as numbers."""
        with pytest.raises(InvalidFormatError):
            parse_duration(raw)

    @pytest.mark.parametrize("raw", ["-1s", "1s -2s", "-5", "9223372036854775808s", "1.9223372036854775808s"])
    def test_out_of_range(self, raw: str):
        """Negative or overflowing numbers raise OutOfRangeError."""
        with pytest.raises(OutOfRangeError):
            parse_duration(raw)

    def test_total_beyond_unsigned_range(self):
        """A sum that does not fit an unsigned 64-bit count is rejected."""
        with pytest.raises(OutOfRangeError):
            parse_duration("9223372036854775807y")

    def test_errors_are_value_errors(self):
        """Parse failures can be handled as plain ValueError by callers."""
        with pytest.raises(ValueError, match="Empty duration"):
            parse_duration("")
