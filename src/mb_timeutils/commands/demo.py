"""Print sample renderings of one timestamp."""

from typing import Annotated

import typer

from mb_timeutils.app_context import use_context
from mb_timeutils.errors import TimeutilsError
from mb_timeutils.iso import IsoFlags, format_iso_timeval
from mb_timeutils.output import DemoResult


def demo(
    ctx: typer.Context,
    seconds: Annotated[int, typer.Argument(help="Seconds since the epoch.")],
    usec: Annotated[int, typer.Argument(min=0, max=999_999, help="Sub-second microseconds.")] = 0,
) -> None:
    """Render a timestamp as date, time, full, and zoned forms."""
    app = use_context(ctx)

    try:
        result = DemoResult(
            date=format_iso_timeval(seconds, usec, IsoFlags.DATE),
            time=format_iso_timeval(seconds, usec, IsoFlags.TIME),
            full=format_iso_timeval(seconds, usec, IsoFlags.DATE | IsoFlags.TIME | IsoFlags.COMMAUSEC),
            zone=format_iso_timeval(seconds, usec, IsoFlags.TIMESTAMP_ZONE),
        )
    except TimeutilsError as e:
        app.out.print_failure_and_exit(e)

    app.out.print_demo(result)
