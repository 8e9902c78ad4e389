"""Initialize configuration file for depmirror."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from depmirror.cli import Context, pass_context
from depmirror.home import get_config_path
from depmirror.utils.fileops import atomic_write
from depmirror.utils.output import error, info, success


def _load_example_config() -> str:
    """Load the example configuration from package data."""
    return resources.files("depmirror").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: <home>/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Create a new configuration file with default settings.

    Creates config.toml in the depmirror home directory (~/.dep by
    default) or at a custom path specified with --output.

    Examples:

    \b
      # Create config at default location
      depmirror init-config

    \b
      # Overwrite existing config
      depmirror init-config --force
    """
    config_path = output if output is not None else get_config_path()
    config_path = config_path.expanduser()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    try:
        atomic_write(config_path, _load_example_config())
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    success(f"Created config file: {config_path}")
    info("Edit this file to customize your settings.")
