"""File operations for the per-user home directory."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

# Mode for files depmirror creates
DEFAULT_FILE_MODE = 0o644


def ensure_dir(path: Path, mode: int = 0o755) -> None:
    """Create *path* and its parents if missing.

    Existing directories keep their permissions.
    """
    if not path.is_dir():
        path.mkdir(mode=mode, parents=True, exist_ok=True)


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return DEFAULT_FILE_MODE


def atomic_write(path: Path, content: str) -> None:
    """Replace the whole of *path* with *content*.

    A hand-edited mirrors.yaml or config.toml keeps its permissions
    (e.g. a user who made it 0o600); new files get ``DEFAULT_FILE_MODE``.
    The content goes to a sibling temp file that is renamed over *path*,
    so a crash mid-write leaves the previous file intact. There is no
    locking: concurrent writers still race and the last rename wins.

    Raises:
        OSError: If the directory or file cannot be written. The temp
            file is removed first.
    """
    ensure_dir(path.parent)
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        os.fchmod(fd, mode)
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
