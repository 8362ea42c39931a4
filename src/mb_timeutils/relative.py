"""Compact display of timestamps relative to a reference 'now'."""

import time
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import IntFlag

from mb_timeutils.errors import BufferTooSmallError, OutOfRangeError
from mb_timeutils.iso import ISO_BUFSIZE
from mb_timeutils.units import SEC_PER_DAY, SEC_PER_YEAR, USEC_PER_SEC


def _period(t: int, size: int) -> int:
    """Integer division truncating toward zero, so pre-epoch times share period 0 with the first one."""
    return -(-t // size) if t < 0 else t // size


class ShortFlags(IntFlag):
    """Variants for format_short."""

    THISYEAR_HHMM = 1 << 1


@dataclass(slots=True)
class TimeVal:
    """Caller-owned reference time; sec == 0 means 'read the clock on first use'."""

    sec: int = 0
    usec: int = 0

    def fill(self) -> None:
        """Populate from the wall clock if still unset."""
        if self.sec == 0:
            now_usec = time.time_ns() // 1000
            self.sec, self.usec = divmod(now_usec, USEC_PER_SEC)


def is_today(t: int, now: TimeVal) -> bool:
    """Return True if t and now fall in the same UTC day."""
    now.fill()
    return _period(t, SEC_PER_DAY) == _period(now.sec, SEC_PER_DAY)


def is_this_year(t: int, now: TimeVal) -> bool:
    """Return True if t and now fall in the same 365-day period since the epoch.

    Leap years are not accounted for, so the boundary drifts from January 1st.
    """
    now.fill()
    return _period(t, SEC_PER_YEAR) == _period(now.sec, SEC_PER_YEAR)


def format_short(t: int, now: TimeVal, flags: ShortFlags = ShortFlags(0), bufsize: int = ISO_BUFSIZE) -> str:
    """Format t as 'HH:MM' today, 'MonDD' (or 'MonDD/HH:MM') this year, else 'YYYY-MonDD'.

    Month names come from the host locale.

    Raises:
        BufferTooSmallError: The result is longer than bufsize.
        OutOfRangeError: t cannot be converted to local time.

    """
    try:
        tm = datetime.fromtimestamp(t, tz=UTC).astimezone()
    except (OverflowError, OSError, ValueError) as e:
        raise OutOfRangeError(f"Cannot convert timestamp {t}") from e

    if is_today(t, now):
        text = f"{tm.hour:02d}:{tm.minute:02d}"
    elif is_this_year(t, now):
        text = tm.strftime("%b%d/%H:%M" if flags & ShortFlags.THISYEAR_HHMM else "%b%d")
    else:
        text = tm.strftime("%Y-%b%d")

    if len(text) > bufsize:
        raise BufferTooSmallError(len(text), bufsize)
    return text
