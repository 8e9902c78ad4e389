"""End-to-end mirror management through the depmirror CLI."""

from __future__ import annotations

from pathlib import Path

import yaml
from click.testing import CliRunner

from depmirror.cli import cli
from depmirror.mirrors import load_registry

PREFIX = "k8s.io/apimachinery"
REPO = "https://github.com/kubernetes/apimachinery.git"


def _run(home: Path, *args: str):
    result = CliRunner().invoke(cli, ["--no-color", "--home", str(home), *args])
    assert result.exit_code == 0, result.output
    return result


def test_add_list_remove_list(temp_dir: Path) -> None:
    home = temp_dir / ".dep"
    mirrors_path = home / "mirrors.yaml"

    _run(home, "mirror", "-add", "-p", PREFIX, "-r", REPO, "-s", "git")
    assert yaml.safe_load(mirrors_path.read_text()) == {
        "repos": [{"prefix": PREFIX, "repo": REPO, "vcs": "git"}]
    }

    result = _run(home, "mirror", "-list")
    assert f"{PREFIX} -> {REPO} (git)" in result.output.splitlines()

    registry = load_registry(home)
    assert registry.get(PREFIX) == (True, REPO, "git")

    result = _run(home, "mirror", "-remove", "-p", PREFIX)
    assert f"{PREFIX} was removed from mirrors" in result.output
    assert yaml.safe_load(mirrors_path.read_text()) == {"repos": []}

    result = _run(home, "mirror", "-list")
    assert "No mirrors found" in result.output

    result = _run(home, "mirror", "-remove", "-p", PREFIX)
    assert f"{PREFIX} was not found in mirrors" in result.output


def test_registry_is_stale_until_reloaded(temp_dir: Path) -> None:
    home = temp_dir / ".dep"
    _run(home, "mirror", "-add", "-p", "golang.org/x/sys", "-r", "https://github.com/golang/sys.git")

    registry = load_registry(home)
    _run(home, "mirror", "-add", "-p", "golang.org/x/sys", "-r", "https://mirror.example.com/sys.git")
    assert registry.get("golang.org/x/sys")[1] == "https://github.com/golang/sys.git"

    registry.load(home / "mirrors.yaml")
    assert registry.get("golang.org/x/sys")[1] == "https://mirror.example.com/sys.git"


def test_resolve_after_add(temp_dir: Path) -> None:
    home = temp_dir / ".dep"
    _run(home, "mirror", "-add", "-p", "golang.org/x", "-r", "https://github.com/golang/x.git")

    result = _run(home, "resolve", "golang.org/x/net/http2")

    assert "golang.org/x/net/http2 -> https://github.com/golang/x.git (git)" in result.output
