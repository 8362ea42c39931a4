"""ISO-8601-like rendering of timestamps, driven by IsoFlags."""

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import IntFlag

from mb_timeutils.errors import BufferTooSmallError, InvalidFormatError, OutOfRangeError

# Fits the widest output, 'YYYY-MM-DD HH:MM:SS.NNNNNN+HHMM'
ISO_BUFSIZE = 32


class IsoFlags(IntFlag):
    """Fields and variants emitted by format_iso."""

    DATE = 1 << 0
    TIME = 1 << 1
    DOTUSEC = 1 << 2
    COMMAUSEC = 1 << 3
    TIMEZONE = 1 << 4
    SPACE = 1 << 5
    GMTIME = 1 << 6

    TIMESTAMP = DATE | TIME | SPACE
    TIMESTAMP_ZONE = DATE | TIME | DOTUSEC | TIMEZONE | SPACE


def parse_flags(names: Iterable[str]) -> IsoFlags:
    """Combine flag names such as 'date', 'time', 'dotusec' into IsoFlags.

    Raises:
        InvalidFormatError: A name is not an IsoFlags member.

    """
    flags = IsoFlags(0)
    for name in names:
        try:
            flags |= IsoFlags[name.strip().upper()]
        except KeyError:
            raise InvalidFormatError(f"Unknown format flag: {name!r}") from None
    return flags


class _Buffer:
    """Accumulates output fields against a fixed character capacity."""

    def __init__(self, capacity: int) -> None:
        self._parts: list[str] = []
        self._left = capacity

    def write(self, field: str) -> None:
        if len(field) > self._left:
            raise BufferTooSmallError(len(field), self._left)
        self._parts.append(field)
        self._left -= len(field)

    def getvalue(self) -> str:
        return "".join(self._parts)


def _zone_aware(tm: datetime) -> datetime:
    """Attach the host zone to naive local times so %z is defined."""
    if tm.tzinfo is not None:
        return tm
    try:
        return tm.astimezone()
    except (OverflowError, OSError, ValueError) as e:
        raise OutOfRangeError(f"Cannot determine UTC offset for {tm!r}") from e


def format_iso(tm: datetime, usec: int, flags: IsoFlags, bufsize: int = ISO_BUFSIZE) -> str:
    """Render a broken-down time as 'YYYY-MM-DDTHH:MM:SS.NNNNNN+HHMM' or a subset of it.

    Each field is written only when its flag is set, and only if it fits in what
    remains of bufsize. DOTUSEC wins over COMMAUSEC when both are set.

    Args:
        tm: Broken-down time; naive values are taken as host local time.
        usec: Sub-second microseconds, printed zero-padded to six digits.
        flags: Combination of IsoFlags.
        bufsize: Maximum number of characters in the result.

    Raises:
        BufferTooSmallError: A field does not fit in the remaining capacity.
        OutOfRangeError: The UTC offset of tm cannot be determined.

    """
    buf = _Buffer(bufsize)

    if flags & IsoFlags.DATE:
        buf.write(f"{tm.year:04d}-{tm.month:02d}-{tm.day:02d}")

    if flags & IsoFlags.DATE and flags & IsoFlags.TIME:
        buf.write(" " if flags & IsoFlags.SPACE else "T")

    if flags & IsoFlags.TIME:
        buf.write(f"{tm.hour:02d}:{tm.minute:02d}:{tm.second:02d}")

    if flags & IsoFlags.DOTUSEC:
        buf.write(f".{usec:06d}")
    elif flags & IsoFlags.COMMAUSEC:
        buf.write(f",{usec:06d}")

    if flags & IsoFlags.TIMEZONE:
        buf.write(_zone_aware(tm).strftime("%z"))

    return buf.getvalue()


def to_broken_down(seconds: int, flags: IsoFlags) -> datetime:
    """Convert epoch seconds to an aware datetime in UTC (GMTIME flag) or host local time.

    Raises:
        OutOfRangeError: The platform cannot represent seconds.

    """
    try:
        dt = datetime.fromtimestamp(seconds, tz=UTC)
        return dt if flags & IsoFlags.GMTIME else dt.astimezone()
    except (OverflowError, OSError, ValueError) as e:
        raise OutOfRangeError(f"Cannot convert timestamp {seconds}") from e


def format_iso_timeval(seconds: int, usec: int, flags: IsoFlags, bufsize: int = ISO_BUFSIZE) -> str:
    """Format a (seconds, microseconds) pair."""
    return format_iso(to_broken_down(seconds, flags), usec, flags, bufsize)


def format_iso_tm(tm: datetime, flags: IsoFlags, bufsize: int = ISO_BUFSIZE) -> str:
    """Format an already broken-down time with zero sub-seconds."""
    return format_iso(tm, 0, flags, bufsize)


def format_iso_time(seconds: int, flags: IsoFlags, bufsize: int = ISO_BUFSIZE) -> str:
    """Format epoch seconds with zero sub-seconds."""
    return format_iso(to_broken_down(seconds, flags), 0, flags, bufsize)
