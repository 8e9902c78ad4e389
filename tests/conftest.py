"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from depmirror.home import reset_home, set_home
from depmirror.utils.output import set_color, set_verbosity

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _reset_process_state() -> Generator[None, None, None]:
    """Clear the cached home and output flags between tests."""
    reset_home()
    set_verbosity()
    set_color(True)
    yield
    reset_home()
    set_verbosity()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def home_dir(temp_dir: Path) -> Path:
    """A depmirror home directory pinned for the test."""
    home = temp_dir / ".dep"
    set_home(home)
    return home


@pytest.fixture
def mirrors_file(home_dir: Path) -> Path:
    """A mirrors.yaml with three entries, one without a VCS."""
    home_dir.mkdir(parents=True, exist_ok=True)
    path = home_dir / "mirrors.yaml"
    path.write_text("""repos:
- prefix: golang.org/x/sys
  repo: https://github.com/golang/sys.git
  vcs: git
- prefix: cloud.google.com/go
  repo: https://github.com/googleapis/google-cloud-go.git
  vcs: git
- prefix: example.com/legacy
  repo: https://hg.example.com/legacy
  vcs: ''
""")
    return path
