"""Format an epoch timestamp as an ISO-8601-like string."""

from typing import Annotated

import typer

from mb_timeutils.app_context import use_context
from mb_timeutils.errors import TimeutilsError
from mb_timeutils.iso import ISO_BUFSIZE, IsoFlags, format_iso_timeval, parse_flags
from mb_timeutils.output import FormatResult


def format_(
    ctx: typer.Context,
    seconds: Annotated[int, typer.Argument(help="Seconds since the epoch.")],
    usec: Annotated[int, typer.Argument(min=0, max=999_999, help="Sub-second microseconds.")] = 0,
    flag: Annotated[
        list[str] | None,
        typer.Option(
            "--flag", "-f", help="date, time, dotusec, commausec, timezone, space, gmtime. Repeatable. Default from config."
        ),
    ] = None,
    bufsize: Annotated[int, typer.Option("--bufsize", min=0, help="Maximum output length.")] = ISO_BUFSIZE,
) -> None:
    """Format an epoch timestamp as an ISO-8601-like string."""
    app = use_context(ctx)

    try:
        flags = parse_flags(flag) if flag else app.cfg.iso_flags
        formatted = format_iso_timeval(seconds, usec, flags, bufsize)
    except TimeutilsError as e:
        app.out.print_failure_and_exit(e)

    names = [str(member.name).lower() for member in IsoFlags if member in flags]
    app.out.print_formatted(FormatResult(seconds=seconds, usec=usec, flags=names, formatted=formatted))
