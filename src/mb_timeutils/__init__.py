"""Parse human-readable timestamps and durations, format ISO-8601-like strings."""

from mb_timeutils.duration import parse_duration
from mb_timeutils.errors import BufferTooSmallError, InvalidFormatError, OutOfRangeError, TimeutilsError
from mb_timeutils.iso import ISO_BUFSIZE, IsoFlags, format_iso, format_iso_time, format_iso_timeval, format_iso_tm
from mb_timeutils.relative import ShortFlags, TimeVal, format_short, is_this_year, is_today
from mb_timeutils.timestamp import parse_timestamp

__all__ = [
    "ISO_BUFSIZE",
    "BufferTooSmallError",
    "InvalidFormatError",
    "IsoFlags",
    "OutOfRangeError",
    "ShortFlags",
    "TimeVal",
    "TimeutilsError",
    "format_iso",
    "format_iso_time",
    "format_iso_timeval",
    "format_iso_tm",
    "format_short",
    "is_this_year",
    "is_today",
    "parse_duration",
    "parse_timestamp",
]
