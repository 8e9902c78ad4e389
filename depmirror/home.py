"""Per-user home directory resolution."""

from __future__ import annotations

import logging
from pathlib import Path

HOME_DIR_NAME = ".dep"
MIRRORS_FILE_NAME = "mirrors.yaml"
CONFIG_FILE_NAME = "config.toml"

log = logging.getLogger(__name__)

# Resolved once per process
_home_dir: Path | None = None


def get_home() -> Path:
    """Return the depmirror home directory (``~/.dep`` typically).

    Falls back to ``<cwd>/.dep`` when the user's home cannot be
    determined, and to a relative ``.dep`` when the working directory
    is gone as well. The result is cached for the rest of the process.
    """
    global _home_dir
    if _home_dir is not None:
        return _home_dir

    try:
        _home_dir = Path.home() / HOME_DIR_NAME
    except (RuntimeError, KeyError, OSError) as exc:
        log.debug("Cannot determine user home (%s), trying working directory", exc)
        try:
            _home_dir = Path.cwd() / HOME_DIR_NAME
        except OSError as cwd_exc:
            log.debug("Cannot determine working directory (%s)", cwd_exc)
            _home_dir = Path(HOME_DIR_NAME)

    return _home_dir


def set_home(path: Path) -> None:
    """Pin the home directory, bypassing resolution."""
    global _home_dir
    _home_dir = path.expanduser()


def reset_home() -> None:
    """Forget the cached home directory."""
    global _home_dir
    _home_dir = None


def get_mirrors_path(home: Path | None = None) -> Path:
    """Path of the mirrors file inside *home* (default: resolved home)."""
    return (home if home is not None else get_home()) / MIRRORS_FILE_NAME


def get_config_path(home: Path | None = None) -> Path:
    """Path of the config file inside *home* (default: resolved home)."""
    return (home if home is not None else get_home()) / CONFIG_FILE_NAME
