"""Command-line interface for depmirror."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from depmirror import __version__
from depmirror.config import Config, load_config
from depmirror.exceptions import ConfigError
from depmirror.home import get_config_path, get_home, set_home
from depmirror.utils.output import (
    debug as debug_message,
    error,
    set_color,
    set_verbosity,
    warning,
)


class Context:
    """Shared context for all commands.

    The configuration is loaded on first access so that commands which
    never need it (usage errors, ``-examples``) do not touch the file.
    """

    def __init__(self) -> None:
        self._config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False
        self.no_color: bool = False

    @property
    def home(self) -> Path:
        return get_home()

    @property
    def config(self) -> Config:
        """Configuration from ``<home>/config.toml``, loaded once.

        Raises:
            ConfigError: If the config file is invalid.
        """
        if self._config is None:
            loaded_config, warnings = load_config(get_config_path())

            if not self.no_color and not loaded_config.colored_output:
                set_color(False)

            if not self.quiet:
                for warn in warnings:
                    warning(warn)

            self._config = loaded_config
        return self._config

    @config.setter
    def config(self, value: Config) -> None:
        self._config = value


def require_config(ctx: Context) -> Config:
    """Return the loaded config, exiting with status 1 if it is invalid."""
    try:
        return ctx.config
    except ConfigError as e:
        error(str(e), hint="Fix the file or recreate it with: depmirror init-config --force")
        raise SystemExit(1)


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--home",
    "-H",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    envvar="DEPMIRROR_HOME",
    help="depmirror home directory holding mirrors.yaml (default: ~/.dep)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="depmirror")
@click.pass_context
def cli(
    ctx: click.Context,
    home: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """depmirror: Redirect dependency fetches to mirror repositories.

    Keeps a per-user list of mirrors in ~/.dep/mirrors.yaml. Each mirror
    maps a package path prefix to a replacement repository that the
    dependency tool fetches from instead of the canonical source.

    Examples:

        # Mirror a package through GitHub
        depmirror mirror -add -p golang.org/x/sys -r https://github.com/golang/sys.git

        # Show configured mirrors
        depmirror mirror -list
    """
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    set_verbosity(verbose=verbose, debug=debug, quiet=quiet)

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    app_ctx.no_color = no_color or os.environ.get("NO_COLOR") is not None
    if app_ctx.no_color:
        set_color(False)

    if home is not None:
        set_home(home)
    debug_message(f"Using home directory {get_home()}")


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Attach the mirror, resolve and init-config commands to the group."""
    # Imported here: the command modules import Context from this module
    from depmirror.commands import init_config, mirror, resolve

    for module in (mirror, resolve, init_config):
        cli.add_command(module.cli)


register_commands()
