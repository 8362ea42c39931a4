"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201  # this module is the output layer; print() is its sole mechanism for producing CLI output.

import json
import logging
import sys
from dataclasses import asdict, dataclass
from typing import NoReturn

import typer

from mb_timeutils.errors import TimeutilsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Result of parsing a timestamp expression."""

    text: str
    usec: int
    formatted: str


@dataclass(frozen=True, slots=True)
class DurationResult:
    """Result of parsing a duration expression."""

    text: str
    usec: int


@dataclass(frozen=True, slots=True)
class FormatResult:
    """Result of formatting an epoch timestamp."""

    seconds: int
    usec: int
    flags: list[str]
    formatted: str


@dataclass(frozen=True, slots=True)
class ShortResult:
    """Result of a compact relative rendering."""

    seconds: int
    formatted: str


@dataclass(frozen=True, slots=True)
class DemoResult:
    """The four sample renderings printed by the demo command."""

    date: str
    time: str
    full: str
    zone: str


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def _success(self, data: dict[str, object], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            print(message)

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1."""
        logger.error("Command error: [%s] %s", code, message)
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=1)

    def print_failure_and_exit(self, error: TimeutilsError) -> NoReturn:
        """Print a parser or formatter failure using its error code and exit."""
        self.print_error_and_exit(error.code, str(error))

    def print_parsed(self, result: ParseResult) -> None:
        """Print a parsed timestamp."""
        self._success(asdict(result), f"{result.formatted} ({result.usec} usec)")

    def print_duration(self, result: DurationResult) -> None:
        """Print a parsed duration."""
        self._success(asdict(result), str(result.usec))

    def print_formatted(self, result: FormatResult) -> None:
        """Print a formatted timestamp."""
        self._success(asdict(result), result.formatted)

    def print_short(self, result: ShortResult) -> None:
        """Print a compact relative timestamp."""
        self._success(asdict(result), result.formatted)

    def print_demo(self, result: DemoResult) -> None:
        """Print the demo renderings, one labelled line each."""
        self._success(
            asdict(result),
            f"Date: '{result.date}'\nTime: '{result.time}'\nFull: '{result.full}'\nZone: '{result.zone}'",
        )
