"""Rich console output helpers for depmirror."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Module-level verbosity flags (set by cli.py after argument parsing)
_verbose_enabled: bool = False
_debug_enabled: bool = False
_quiet_enabled: bool = False

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "path": "blue underline",
        "mirror.prefix": "bold",
        "mirror.repo": "green",
        "mirror.vcs": "dim",
    }
)

# Global console instances
console = Console(theme=THEME, stderr=False)
error_console = Console(theme=THEME, stderr=True)


def set_verbosity(*, verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Configure module-level verbosity flags.

    Called from the CLI entry point after argument parsing.
    """
    global _verbose_enabled, _debug_enabled, _quiet_enabled
    _verbose_enabled = verbose or debug  # debug implies verbose
    _debug_enabled = debug
    _quiet_enabled = quiet and not _verbose_enabled


def is_verbose() -> bool:
    """Return whether verbose mode is enabled."""
    return _verbose_enabled


def set_color(enabled: bool) -> None:
    """Enable or disable color on both console instances."""
    console.no_color = not enabled
    error_console.no_color = not enabled


def info(message: str) -> None:
    """Print an info message (suppressed by --quiet)."""
    if not _quiet_enabled:
        console.print(f"[info]{escape(message)}[/info]", soft_wrap=True)


def warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {escape(message)}", soft_wrap=True)


def error(message: str, hint: str | None = None) -> None:
    """Print an error message to stderr.

    Args:
        message: The error message.
        hint: Optional hint for resolution.
    """
    error_console.print(f"[error]Error:[/error] {escape(message)}", soft_wrap=True)
    if hint:
        error_console.print(f"  [info]Hint:[/info] {escape(hint)}", soft_wrap=True)


def success(message: str) -> None:
    """Print a success message (suppressed by --quiet)."""
    if not _quiet_enabled:
        console.print(f"[success]{escape(message)}[/success]", soft_wrap=True)


def verbose(message: str) -> None:
    """Print a message only when verbose mode is enabled."""
    if _verbose_enabled:
        console.print(f"[info]{escape(message)}[/info]", soft_wrap=True)


def debug(message: str) -> None:
    """Print a debug message only when debug mode is enabled."""
    if _debug_enabled:
        error_console.print(f"[warning]\\[DEBUG][/warning] {escape(message)}", soft_wrap=True)


def print_mirror(prefix: str, repo: str, vcs: str = "") -> None:
    """Print a mirror line as ``prefix -> repo (vcs)``.

    Args:
        prefix: Package prefix.
        repo: Mirror repository URL.
        vcs: VCS kind; omitted from the line when empty.
    """
    line = (
        f"[mirror.prefix]{escape(prefix)}[/mirror.prefix] -> "
        f"[mirror.repo]{escape(repo)}[/mirror.repo]"
    )
    if vcs:
        line += f" [mirror.vcs]({escape(vcs)})[/mirror.vcs]"
    console.print(line, soft_wrap=True, highlight=False)
