"""Centralized application configuration."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from mb_timeutils.errors import InvalidFormatError
from mb_timeutils.iso import IsoFlags, parse_flags
from mb_timeutils.relative import ShortFlags

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "mb-timeutils"
DEFAULT_FORMAT_FLAGS = ("date", "time", "space")


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    config_dir: Path = Field(description="Directory holding config.toml and the optional log file")
    format_flags: tuple[str, ...] = Field(
        default=DEFAULT_FORMAT_FLAGS, description="Default ISO flag names (e.g. 'date', 'time', 'space', 'timezone')"
    )
    short_hhmm: bool = Field(default=False, description="Append /HH:MM to short dates within the current year")
    log_to_file: bool = Field(default=False, description="Write a rotating log file instead of logging to stderr")

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.config_dir / "config.toml"

    @computed_field(description="Rotating log file")
    @property
    def log_path(self) -> Path:
        """Rotating log file."""
        return self.config_dir / "timeutils.log"

    @property
    def iso_flags(self) -> IsoFlags:
        """Default IsoFlags for parse and format output."""
        return parse_flags(self.format_flags)

    @property
    def short_flags(self) -> ShortFlags:
        """Default ShortFlags for short output."""
        return ShortFlags.THISYEAR_HHMM if self.short_hhmm else ShortFlags(0)


def _valid_flag_names(value: object) -> tuple[str, ...] | None:
    """Return value as a tuple of known IsoFlags names, or None if it is not one."""
    if not isinstance(value, list) or not all(isinstance(name, str) for name in value):
        return None
    try:
        parse_flags(value)
    except InvalidFormatError:
        return None
    return tuple(value)


def build_config(config_dir: Path | None = None) -> Config:
    """Build a Config instance from defaults and optional config.toml."""
    resolved_dir = config_dir if config_dir is not None else DEFAULT_CONFIG_DIR
    config_path = resolved_dir / "config.toml"

    kwargs: dict[str, Any] = {"config_dir": resolved_dir}
    if config_path.is_file():
        with config_path.open("rb") as f:
            toml_data = tomllib.load(f)

        fmt = toml_data.get("format", {})
        if isinstance(fmt, dict):
            if "flags" in fmt:
                names = _valid_flag_names(fmt["flags"])
                if names is None:
                    logger.warning("Ignoring invalid format.flags in %s: %r", config_path, fmt["flags"])
                else:
                    kwargs["format_flags"] = names
            val = fmt.get("short_hhmm")
            if isinstance(val, bool):
                kwargs["short_hhmm"] = val

        log = toml_data.get("log", {})
        if isinstance(log, dict) and isinstance(log.get("file"), bool):
            kwargs["log_to_file"] = log["file"]

    return Config(**kwargs)
