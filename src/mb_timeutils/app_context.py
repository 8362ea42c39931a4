"""Per-invocation state shared by CLI commands."""

from dataclasses import dataclass

import typer

from mb_timeutils.config import Config
from mb_timeutils.output import Output


@dataclass(frozen=True, slots=True)
class AppContext:
    """Output handler and configuration for the running command."""

    out: Output
    cfg: Config


def use_context(ctx: typer.Context) -> AppContext:
    """Return the AppContext installed by the main callback."""
    app = ctx.find_object(AppContext)
    if app is None:
        raise RuntimeError("AppContext is not initialized")
    return app
