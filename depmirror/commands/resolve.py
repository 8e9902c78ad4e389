"""Show which mirror the dependency tool would use for a package."""

from __future__ import annotations

import click

from depmirror.cli import Context, pass_context
from depmirror.exceptions import MirrorReadError
from depmirror.mirrors import load_registry
from depmirror.utils.output import error, info, print_mirror, verbose

EXIT_MIRROR_ERROR = 1


@click.command("resolve")
@click.argument("import_path")
@click.option(
    "--exact",
    is_flag=True,
    default=False,
    help="Only match a mirror configured for exactly this path",
)
@pass_context
def cli(ctx: Context, import_path: str, exact: bool) -> None:
    """Show the mirror that applies to IMPORT_PATH.

    By default the longest configured prefix covering IMPORT_PATH wins,
    so a mirror for golang.org/x also applies to golang.org/x/sys.

    Examples:

    \b
      depmirror resolve golang.org/x/sys/unix
      depmirror resolve --exact k8s.io/apimachinery
    """
    try:
        registry = load_registry(ctx.home)
    except MirrorReadError as e:
        error(str(e))
        raise SystemExit(EXIT_MIRROR_ERROR)

    verbose(f"{len(registry)} mirrors loaded")

    if exact:
        found, repo, vcs = registry.get(import_path)
        if not found:
            info(f"No mirror configured for {import_path}")
            return
        print_mirror(import_path, repo, vcs)
        return

    match = registry.match(import_path)
    if match is None:
        info(f"No mirror configured for {import_path}")
        return

    prefix, mirror = match
    print_mirror(import_path, mirror.repo, mirror.vcs)
    if prefix != import_path:
        info(f"matched prefix {prefix}")
