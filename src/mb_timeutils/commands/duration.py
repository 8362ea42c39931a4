"""Parse a duration expression."""

import logging
from typing import Annotated

import typer

from mb_timeutils.app_context import use_context
from mb_timeutils.duration import parse_duration
from mb_timeutils.errors import TimeutilsError
from mb_timeutils.output import DurationResult

logger = logging.getLogger(__name__)


def duration(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Duration: 90, 5min 30s, 1.5h, 2weeks, 250ms.")],
) -> None:
    """Parse a duration into microseconds."""
    app = use_context(ctx)

    try:
        usec = parse_duration(text)
    except TimeutilsError as e:
        logger.warning("Invalid duration input: %s", text)
        app.out.print_failure_and_exit(e)

    app.out.print_duration(DurationResult(text=text, usec=usec))
