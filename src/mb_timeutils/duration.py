"""Relative duration parsing: '5min 30s', '1.5h', '90'."""

import logging
import re

from mb_timeutils.errors import InvalidFormatError, OutOfRangeError
from mb_timeutils.units import DURATION_UNITS, USEC_MAX

logger = logging.getLogger(__name__)

WHITESPACE = " \t\n\r"

_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)
_DIGITS_RE = re.compile(r"\d+", re.ASCII)
_INTEGER_MAX = 2**63 - 1


def _skip_whitespace(text: str, pos: int) -> int:
    """Return the first position at or after pos that is not whitespace."""
    while pos < len(text) and text[pos] in WHITESPACE:
        pos += 1
    return pos


def _to_integer(digits: str, text: str) -> int:
    value = int(digits)
    if value > _INTEGER_MAX:
        raise OutOfRangeError(f"Duration value out of range: {text!r}")
    return value


def _read_number(text: str, pos: int) -> tuple[int, int, int, int]:
    """Read 'whole[.frac]' starting at pos.

    The whole part may be omitted when a fraction follows ('.5s').

    Returns:
        (whole, frac, frac_digits, end) where end is the position after the number.

    Raises:
        InvalidFormatError: No digits at pos, or no digits after the dot.
        OutOfRangeError: Negative value or a part exceeding a signed 64-bit integer.

    """
    whole = 0
    end = pos
    match = _INTEGER_RE.match(text, pos)
    if match is not None:
        if match.group().startswith("-"):
            raise OutOfRangeError(f"Negative duration: {text!r}")
        whole = _to_integer(match.group(), text)
        end = match.end()

    if end < len(text) and text[end] == ".":
        frac_match = _DIGITS_RE.match(text, end + 1)
        if frac_match is None:
            raise InvalidFormatError(f"Missing digits after decimal point: {text!r}")
        frac = _to_integer(frac_match.group(), text)
        return whole, frac, len(frac_match.group()), frac_match.end()

    if match is None:
        raise InvalidFormatError(f"Expected a number at offset {pos}: {text!r}")
    return whole, 0, 0, end


def _match_unit(text: str, pos: int) -> tuple[int, int]:
    """Return (usec_per_unit, end) for the first table suffix that prefixes text[pos:]."""
    for suffix, usec in DURATION_UNITS:
        if text.startswith(suffix, pos):
            return usec, pos + len(suffix)
    raise InvalidFormatError(f"Unknown unit at offset {pos}: {text!r}")


def parse_duration(text: str) -> int:
    """Parse a duration string into microseconds.

    Terms are summed: '1h 30min', '5min30s', '1.5h', '90' (seconds). Suffixes are
    matched against DURATION_UNITS in table order, so '5m' is five minutes.

    Raises:
        InvalidFormatError: Empty input or unparseable syntax.
        OutOfRangeError: Negative values or a total beyond USEC_MAX.

    """
    total = 0
    consumed = False
    pos = 0
    while True:
        pos = _skip_whitespace(text, pos)
        if pos >= len(text):
            if not consumed:
                raise InvalidFormatError(f"Empty duration: {text!r}")
            break

        whole, frac, frac_digits, pos = _read_number(text, pos)
        pos = _skip_whitespace(text, pos)
        usec, pos = _match_unit(text, pos)

        total += whole * usec + frac * usec // 10**frac_digits
        consumed = True

    if total > USEC_MAX:
        raise OutOfRangeError(f"Duration exceeds {USEC_MAX} microseconds: {text!r}")
    logger.debug("Parsed duration %r as %d usec", text, total)
    return total
