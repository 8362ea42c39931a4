"""Timestamp parsing: keywords, relative offsets, and absolute local dates.

Accepted syntaxes::

    2012-09-22 16:34:22
    2012-09-22 16:34      (seconds set to 0)
    2012-09-22            (time set to 00:00:00)
    16:34:22              (date set to today)
    16:34                 (date set to today, seconds set to 0)
    20120922163422        (seconds set to 0)
    Sat 2012-09-22        (fails unless the date is that weekday)
    2012-02-30            (day overflow rolls over: 2012-03-01)
    now
    today                 (time set to 00:00:00)
    yesterday             (time set to 00:00:00)
    tomorrow              (time set to 00:00:00)
    +5min
    -5days
    5 days ago
"""

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum
from functools import cache

from mb_timeutils.duration import parse_duration
from mb_timeutils.errors import InvalidFormatError, OutOfRangeError
from mb_timeutils.units import USEC_MAX, USEC_PER_SEC

logger = logging.getLogger(__name__)


class MatchKind(StrEnum):
    """Which rule classified the timestamp text."""

    KEYWORD = "keyword"
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class AbsolutePattern:
    """A strptime-style grammar tried against absolute timestamp text."""

    id: str
    fmt: str
    has_date: bool
    has_time: bool
    zero_seconds: bool


# Tried in order; the first one that consumes the whole text wins.
# Two-digit years come before four-digit years at each granularity.
ABSOLUTE_PATTERNS: tuple[AbsolutePattern, ...] = (
    AbsolutePattern("yy-datetime", "%y-%m-%d %H:%M:%S", True, True, False),
    AbsolutePattern("yyyy-datetime", "%Y-%m-%d %H:%M:%S", True, True, False),
    AbsolutePattern("yy-datetime-hhmm", "%y-%m-%d %H:%M", True, True, True),
    AbsolutePattern("yyyy-datetime-hhmm", "%Y-%m-%d %H:%M", True, True, True),
    AbsolutePattern("yy-date", "%y-%m-%d", True, False, False),
    AbsolutePattern("yyyy-date", "%Y-%m-%d", True, False, False),
    AbsolutePattern("time", "%H:%M:%S", False, True, False),
    AbsolutePattern("time-hhmm", "%H:%M", False, True, True),
    # Seconds are parsed, then dropped
    AbsolutePattern("compact", "%Y%m%d%H%M%S", True, True, True),
)

# Full names are checked before their abbreviations. 0 = Sunday.
WEEKDAY_NAMES: tuple[tuple[str, int], ...] = (
    ("Sunday", 0),
    ("Sun", 0),
    ("Monday", 1),
    ("Mon", 1),
    ("Tuesday", 2),
    ("Tue", 2),
    ("Wednesday", 3),
    ("Wed", 3),
    ("Thursday", 4),
    ("Thu", 4),
    ("Friday", 5),
    ("Fri", 5),
    ("Saturday", 6),
    ("Sat", 6),
)


@dataclass(frozen=True, slots=True)
class TimestampMatch:
    """Classified timestamp text, awaiting conversion to an epoch value."""

    kind: MatchKind
    text: str
    moment: datetime  # naive local time, whole seconds
    plus: int = 0
    minus: int = 0
    weekday: int | None = None
    pattern: str | None = None


def weekday_index(moment: datetime) -> int:
    """Return the weekday of moment with 0 = Sunday .. 6 = Saturday."""
    return moment.isoweekday() % 7


def local_now(now: int | None = None) -> datetime:
    """Return the reference time as naive local time truncated to whole seconds.

    Args:
        now: Reference in microseconds since the epoch; None reads the wall clock.

    """
    seconds = int(time.time()) if now is None else now // USEC_PER_SEC
    try:
        return datetime.fromtimestamp(seconds)  # noqa: DTZ006
    except (OverflowError, OSError, ValueError) as e:
        raise OutOfRangeError(f"Reference time out of range: {now}") from e


def _strip_weekday(text: str) -> tuple[int | None, str]:
    """Split a leading 'Name ' weekday prefix (case-insensitive) off text."""
    for name, index in WEEKDAY_NAMES:
        size = len(name)
        if text[:size].lower() != name.lower() or text[size : size + 1] != " ":
            continue
        return index, text[size + 1 :]
    return None, text


# Day of month accepts 1-31 for every month; the overflow rolls into the next month.
_DIRECTIVES = {
    "y": r"(?P<y>\d\d)",
    "Y": r"(?P<Y>\d\d\d\d)",
    "m": r"(?P<m>1[0-2]|0[1-9]|[1-9])",
    "d": r"(?P<d>3[01]|[12]\d|0[1-9]|[1-9])",
    "H": r"(?P<H>2[0-3]|[01]\d|\d)",
    "M": r"(?P<M>[0-5]\d|\d)",
    "S": r"(?P<S>60|[0-5]\d|\d)",
}

# Two-digit years at or above this are 19xx, below it 20xx
_CENTURY_PIVOT = 69


@cache
def _compile(fmt: str) -> re.Pattern[str]:
    """Translate a strptime-style format into an ASCII-only regex with named groups."""
    parts = []
    pos = 0
    while pos < len(fmt):
        if fmt[pos] == "%":
            parts.append(_DIRECTIVES[fmt[pos + 1]])
            pos += 2
            continue
        parts.append(r"\s+" if fmt[pos] == " " else re.escape(fmt[pos]))
        pos += 1
    return re.compile("".join(parts), re.ASCII)


def _year(fields: dict[str, str]) -> int:
    if "Y" in fields:
        return int(fields["Y"])
    year = int(fields["y"])
    return year + (1900 if year >= _CENTURY_PIVOT else 2000)


def _resolve(pattern: AbsolutePattern, fields: dict[str, str], now: datetime) -> datetime:
    """Build the local time from matched fields, normalizing day overflow like mktime."""
    if pattern.has_date:
        base = datetime(_year(fields), int(fields["m"]), 1)  # noqa: DTZ001
        day = int(fields["d"])
    else:
        base = now.replace(hour=0, minute=0, second=0, microsecond=0)
        day = 1
    hour = minute = second = 0
    if pattern.has_time:
        hour, minute = int(fields["H"]), int(fields["M"])
        if not pattern.zero_seconds:
            second = int(fields.get("S", "0"))
    return base + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)


def match_absolute(text: str, now: datetime) -> tuple[AbsolutePattern, datetime] | None:
    """Return the first pattern that parses text in full and the resolved local time, or None."""
    if not text.isascii():
        return None
    for pattern in ABSOLUTE_PATTERNS:
        found = _compile(pattern.fmt).fullmatch(text)
        if found is None:
            continue
        try:
            return pattern, _resolve(pattern, found.groupdict(), now)
        except (OverflowError, ValueError):
            continue
    return None


def match_timestamp(text: str, now: datetime) -> TimestampMatch:
    """Classify text against keywords, relative offsets, then absolute patterns.

    Duration errors in relative offsets propagate; anything else unrecognized is
    returned as a MatchKind.INVALID match for finalize_timestamp to reject.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if text == "now":
        return TimestampMatch(MatchKind.KEYWORD, text, now)
    if text == "today":
        return TimestampMatch(MatchKind.KEYWORD, text, midnight)
    if text == "yesterday":
        return TimestampMatch(MatchKind.KEYWORD, text, midnight - timedelta(days=1))
    if text == "tomorrow":
        return TimestampMatch(MatchKind.KEYWORD, text, midnight + timedelta(days=1))

    if text.startswith("+"):
        return TimestampMatch(MatchKind.RELATIVE, text, now, plus=parse_duration(text[1:]))
    if text.startswith("-"):
        return TimestampMatch(MatchKind.RELATIVE, text, now, minus=parse_duration(text[1:]))
    if text.endswith(" ago"):
        return TimestampMatch(MatchKind.RELATIVE, text, now, minus=parse_duration(text[:-4]))

    weekday, rest = _strip_weekday(text)
    found = match_absolute(rest, now)
    if found is None:
        return TimestampMatch(MatchKind.INVALID, text, now, weekday=weekday)
    pattern, moment = found
    return TimestampMatch(MatchKind.ABSOLUTE, text, moment, weekday=weekday, pattern=pattern.id)


def finalize_timestamp(match: TimestampMatch) -> int:
    """Convert a classified match into microseconds since the epoch.

    Raises:
        InvalidFormatError: Invalid match, unconvertible local time, or weekday mismatch.
        OutOfRangeError: The result falls before the epoch or beyond USEC_MAX.

    """
    if match.kind == MatchKind.INVALID:
        raise InvalidFormatError(f"Unrecognized timestamp: {match.text!r}")

    try:
        seconds = int(match.moment.timestamp())
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidFormatError(f"Cannot convert local time for {match.text!r}") from e

    if match.weekday is not None and weekday_index(match.moment) != match.weekday:
        logger.debug("Weekday mismatch for %r: expected %d, got %d", match.text, match.weekday, weekday_index(match.moment))
        raise InvalidFormatError(f"Weekday does not match date: {match.text!r}")

    if seconds < 0:
        raise OutOfRangeError(f"Timestamp before the epoch: {match.text!r}")

    usec = seconds * USEC_PER_SEC + match.plus
    usec = usec - match.minus if usec > match.minus else 0
    if usec > USEC_MAX:
        raise OutOfRangeError(f"Timestamp out of range: {match.text!r}")
    return usec


def parse_timestamp(text: str, now: int | None = None) -> int:
    """Parse a timestamp expression into microseconds since the epoch.

    Args:
        text: Keyword, relative offset, or absolute local date/time.
        now: Reference time in microseconds; defaults to the wall clock.

    Raises:
        InvalidFormatError: Unrecognized syntax, an out-of-range field, or weekday mismatch.
        OutOfRangeError: Negative or oversized durations, pre-epoch dates.

    """
    match = match_timestamp(text, local_now(now))
    logger.debug("Timestamp %r classified as %s (pattern=%s)", text, match.kind, match.pattern)
    return finalize_timestamp(match)
