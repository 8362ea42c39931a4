"""CLI entry point for mb-timeutils."""

import os
from importlib.metadata import version
from pathlib import Path
from typing import Annotated

import typer

from mb_timeutils.app_context import AppContext
from mb_timeutils.commands.demo import demo
from mb_timeutils.commands.duration import duration
from mb_timeutils.commands.format import format_
from mb_timeutils.commands.parse import parse
from mb_timeutils.commands.short import short
from mb_timeutils.config import DEFAULT_CONFIG_DIR, build_config
from mb_timeutils.log import setup_logging
from mb_timeutils.output import Output

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(version("mb-timeutils"))
        raise typer.Exit


@app.callback()
def main(
    ctx: typer.Context,
    *,
    version: Annotated[
        bool | None, typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Directory with config.toml and the optional log file."),
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Log parser decisions at DEBUG level.")] = False,
) -> None:
    """Parse and format human-readable timestamps."""
    _ = version
    if config_dir is not None:
        resolved_dir = config_dir
    elif env_dir := os.environ.get("MB_TIMEUTILS_CONFIG_DIR"):
        resolved_dir = Path(env_dir)
    else:
        resolved_dir = DEFAULT_CONFIG_DIR
    cfg = build_config(resolved_dir.resolve())
    setup_logging(cfg.log_path if cfg.log_to_file else None, debug=debug)
    ctx.obj = AppContext(out=Output(json_mode=json_output), cfg=cfg)


app.command()(parse)
app.command()(duration)
app.command("format")(format_)
app.command()(short)
app.command()(demo)
