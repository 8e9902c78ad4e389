"""Configuration management for depmirror."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from depmirror.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from depmirror.home import get_config_path
from depmirror.mirrors.document import KNOWN_VCS
from depmirror.utils.fileops import atomic_write

DEFAULT_VCS = "git"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        default_vcs: VCS recorded for new mirrors when ``-s`` is not given.
        strict_writes: Treat a failed mirrors file write as a command failure.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    default_vcs: str = DEFAULT_VCS
    strict_writes: bool = False
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        if self.default_vcs and self.default_vcs not in KNOWN_VCS:
            warnings.append(
                f"mirrors.default_vcs={self.default_vcs!r} is not one of "
                f"{', '.join(KNOWN_VCS)}"
            )

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses ``<home>/config.toml``.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path = config_path.expanduser()

    if not config_path.exists():
        # A missing config file is the normal case
        config = Config()
        return config, config.validate()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e
    except OSError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    return config, config.validate()


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [mirrors] section
    mirrors = data.get("mirrors", {})
    if not isinstance(mirrors, dict):
        raise ConfigValidationError("mirrors", mirrors, "must be a table")

    if "default_vcs" in mirrors:
        value = mirrors["default_vcs"]
        if not isinstance(value, str):
            raise ConfigValidationError("mirrors.default_vcs", value, "must be a string")
        config.default_vcs = value

    if "strict_writes" in mirrors:
        value = mirrors["strict_writes"]
        if not isinstance(value, bool):
            raise ConfigValidationError("mirrors.strict_writes", value, "must be a boolean")
        config.strict_writes = value

    # Parse [display] section
    display = data.get("display", {})
    if not isinstance(display, dict):
        raise ConfigValidationError("display", display, "must be a table")

    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or the default.
    """
    if config_path is None:
        config_path = config.config_path or get_config_path()

    config_path = config_path.expanduser()

    data: dict[str, Any] = {
        "mirrors": {
            "default_vcs": config.default_vcs,
            "strict_writes": config.strict_writes,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    atomic_write(config_path, tomli_w.dumps(data))
