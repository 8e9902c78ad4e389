"""Manage package mirrors in mirrors.yaml."""

from __future__ import annotations

from pathlib import Path

import click

from depmirror.cli import Context, pass_context, require_config
from depmirror.exceptions import MirrorReadError, MirrorUsageError
from depmirror.home import MIRRORS_FILE_NAME, get_mirrors_path
from depmirror.mirrors import (
    KNOWN_VCS,
    ChangeAction,
    MirrorChange,
    add_mirror,
    list_mirrors,
    remove_mirror,
)
from depmirror.utils.output import (
    console,
    error,
    info,
    print_mirror,
    success,
    verbose,
    warning,
)

# Exit codes per CLI contract
EXIT_SUCCESS = 0
EXIT_MIRROR_ERROR = 1

MIRROR_EXAMPLES = """
depmirror mirror -list

    Show every configured mirror.

depmirror mirror -add -p k8s.io/apimachinery -r https://github.com/kubernetes/apimachinery.git -s git

    Fetch k8s.io/apimachinery from its GitHub repository. Adding a prefix
    that is already mirrored replaces its repository and VCS.

depmirror mirror -remove -p k8s.io/apimachinery

    Stop mirroring k8s.io/apimachinery.

The mirrors live in ~/.dep/mirrors.yaml:

    repos:
    - prefix: golang.org/x/sys
      repo: https://github.com/golang/sys.git
      vcs: git
"""


def validate_flags(
    add: bool,
    remove: bool,
    list_: bool,
    prefix: str | None,
    repo: str | None,
) -> None:
    """Check that exactly one operation is requested with its arguments.

    Raises:
        MirrorUsageError: On conflicting, missing or incomplete flags.
    """
    flags = (("-add", add), ("-remove", remove), ("-list", list_))
    requested = [name for name, flag in flags if flag]
    if len(requested) > 1:
        raise MirrorUsageError(f"cannot pass {' and '.join(requested)} together")
    if not requested:
        raise MirrorUsageError("one of -add, -remove or -list is required")

    if (add or remove) and not prefix:
        raise MirrorUsageError(f"{requested[0]} requires a prefix (-p)")
    if add and not repo:
        raise MirrorUsageError("-add requires a mirror repository (-r)")


def _report_write(change: MirrorChange, strict: bool) -> None:
    """Report the outcome of writing a changed document back."""
    if change.write_error is None:
        success(f"{MIRRORS_FILE_NAME} written with changes")
        return

    error(str(change.write_error))
    if strict:
        raise SystemExit(EXIT_MIRROR_ERROR)


@click.command("mirror")
@click.option(
    "-add",
    "--add",
    "add",
    is_flag=True,
    default=False,
    help="Add mirror to mirrors.yaml (needs -p and -r)",
)
@click.option(
    "-remove",
    "--remove",
    "remove",
    is_flag=True,
    default=False,
    help="Remove mirror from mirrors.yaml (needs -p)",
)
@click.option("-list", "--list", "list_", is_flag=True, default=False, help="List all mirrors")
@click.option("-p", "--prefix", "prefix", default=None, help="Package path prefix to mirror")
@click.option("-r", "--repo", "repo", default=None, help="Mirror repository for the prefix")
@click.option(
    "-s",
    "--vcs",
    "vcs",
    default=None,
    help="VCS of the mirror repository (default: git, or mirrors.default_vcs)",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with an error when mirrors.yaml cannot be written",
)
@click.option(
    "-examples",
    "--examples",
    "examples",
    is_flag=True,
    default=False,
    help="Print detailed usage examples",
)
@pass_context
def cli(
    ctx: Context,
    add: bool,
    remove: bool,
    list_: bool,
    prefix: str | None,
    repo: str | None,
    vcs: str | None,
    strict: bool,
    examples: bool,
) -> None:
    """Manage mirrors for vendored packages.

    Mirrors redirect fetches of a package path prefix to another
    repository. They are stored in mirrors.yaml inside the depmirror
    home directory and used by the dependency tool when it fetches
    packages. Run with -examples for detailed usage.

    Examples:

    \b
      depmirror mirror -add -p k8s.io/apimachinery -r https://github.com/kubernetes/apimachinery.git
      depmirror mirror -remove -p k8s.io/apimachinery
      depmirror mirror -list
    """
    if examples:
        console.print(MIRROR_EXAMPLES.strip(), soft_wrap=True, highlight=False, markup=False)
        return

    try:
        validate_flags(add, remove, list_, prefix, repo)
    except MirrorUsageError as e:
        raise click.UsageError(str(e)) from e

    config = require_config(ctx)
    strict = strict or config.strict_writes
    path = get_mirrors_path()
    verbose(f"Using mirrors file {path}")

    try:
        if add:
            _add(path, prefix, repo, vcs if vcs is not None else config.default_vcs, strict)
        elif remove:
            _remove(path, prefix, strict)
        else:
            _list(path)
    except MirrorReadError as e:
        error(str(e))
        raise SystemExit(EXIT_MIRROR_ERROR)


def _add(path: Path, prefix: str, repo: str, vcs: str, strict: bool) -> None:
    if vcs and vcs not in KNOWN_VCS:
        warning(f"Unknown VCS '{vcs}' for {prefix} (expected one of {', '.join(KNOWN_VCS)})")

    change = add_mirror(path, prefix, repo, vcs)

    if change.created_file:
        info(f"No {MIRRORS_FILE_NAME} file exists. Creating new one")
    if change.action is ChangeAction.REPLACED:
        info(f"{prefix} found in mirrors. Replacing with new settings")
    info(f"{prefix} being set to {repo}")

    _report_write(change, strict)


def _remove(path: Path, prefix: str, strict: bool) -> None:
    change = remove_mirror(path, prefix)

    if change.file_missing:
        info(f"{MIRRORS_FILE_NAME} file not found")
        return
    if change.action is ChangeAction.NOT_FOUND:
        info(f"{prefix} was not found in mirrors")
        return

    info(f"{prefix} was removed from mirrors")
    _report_write(change, strict)


def _list(path: Path) -> None:
    document = list_mirrors(path)

    if not len(document):
        info("No mirrors found")
        return

    info("Mirrors...")
    for entry in document:
        print_mirror(entry.prefix, entry.repo, entry.vcs)
