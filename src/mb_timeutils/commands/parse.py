"""Parse a timestamp expression."""

import logging
from typing import Annotated

import typer

from mb_timeutils.app_context import use_context
from mb_timeutils.errors import TimeutilsError
from mb_timeutils.iso import format_iso_timeval
from mb_timeutils.output import ParseResult
from mb_timeutils.timestamp import parse_timestamp
from mb_timeutils.units import USEC_PER_SEC

logger = logging.getLogger(__name__)


def parse(
    ctx: typer.Context,
    when: Annotated[
        str,
        typer.Argument(help="now, today, yesterday, tomorrow, +5min, 5 days ago, 2012-09-22 16:34:22. Use -- before -5min."),
    ],
    now: Annotated[int | None, typer.Option("--now", help="Reference time in microseconds since the epoch.")] = None,
) -> None:
    """Parse a timestamp expression into microseconds since the epoch."""
    app = use_context(ctx)

    try:
        usec = parse_timestamp(when, now)
        seconds, frac = divmod(usec, USEC_PER_SEC)
        formatted = format_iso_timeval(seconds, frac, app.cfg.iso_flags)
    except TimeutilsError as e:
        logger.warning("Invalid timestamp input: %s", when)
        app.out.print_failure_and_exit(e)

    app.out.print_parsed(ParseResult(text=when, usec=usec, formatted=formatted))
