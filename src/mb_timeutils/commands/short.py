"""Compact rendering of a timestamp relative to now."""

from typing import Annotated

import typer

from mb_timeutils.app_context import use_context
from mb_timeutils.errors import TimeutilsError
from mb_timeutils.output import ShortResult
from mb_timeutils.relative import ShortFlags, TimeVal, format_short


def short(
    ctx: typer.Context,
    seconds: Annotated[int, typer.Argument(help="Seconds since the epoch.")],
    hhmm: Annotated[bool | None, typer.Option("--hhmm/--no-hhmm", help="Append /HH:MM for dates this year.")] = None,
    now: Annotated[int | None, typer.Option("--now", help="Reference time in seconds since the epoch.")] = None,
) -> None:
    """Show HH:MM for today, MonDD this year, YYYY-MonDD otherwise."""
    app = use_context(ctx)

    if hhmm is None:
        flags = app.cfg.short_flags
    else:
        flags = ShortFlags.THISYEAR_HHMM if hhmm else ShortFlags(0)

    try:
        formatted = format_short(seconds, TimeVal(sec=now or 0), flags)
    except TimeutilsError as e:
        app.out.print_failure_and_exit(e)

    app.out.print_short(ShortResult(seconds=seconds, formatted=formatted))
