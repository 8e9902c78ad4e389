"""Unit tests for the mirror command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from depmirror.cli import Context
from depmirror.commands.mirror import cli as mirror_cli
from depmirror.commands.mirror import validate_flags
from depmirror.config import Config
from depmirror.exceptions import MirrorUsageError
from depmirror.mirrors import read_document

APIMACHINERY = "https://github.com/kubernetes/apimachinery.git"


def _make_context(**config_overrides: object) -> Context:
    ctx = Context()
    ctx.config = Config(**config_overrides)  # type: ignore[arg-type]
    return ctx


def _invoke(args: list[str], ctx: Context | None = None):
    runner = CliRunner()
    return runner.invoke(mirror_cli, args, obj=ctx or _make_context())


class TestValidateFlags:
    def test_all_three_rejected(self) -> None:
        with pytest.raises(MirrorUsageError, match="-add and -remove and -list"):
            validate_flags(True, True, True, "p", "r")

    def test_two_rejected(self) -> None:
        with pytest.raises(MirrorUsageError):
            validate_flags(True, False, True, "p", "r")

    def test_none_rejected(self) -> None:
        with pytest.raises(MirrorUsageError, match="required"):
            validate_flags(False, False, False, None, None)

    def test_add_needs_prefix_and_repo(self) -> None:
        with pytest.raises(MirrorUsageError, match="-p"):
            validate_flags(True, False, False, None, "r")
        with pytest.raises(MirrorUsageError, match="-r"):
            validate_flags(True, False, False, "p", None)

    def test_remove_needs_prefix(self) -> None:
        with pytest.raises(MirrorUsageError, match="-p"):
            validate_flags(False, True, False, None, None)

    def test_list_alone_ok(self) -> None:
        validate_flags(False, False, True, None, None)


class TestMirrorCommand:
    def test_is_click_command(self) -> None:
        assert isinstance(mirror_cli, click.Command)
        assert mirror_cli.name == "mirror"

    def test_help(self) -> None:
        result = _invoke(["--help"])
        assert result.exit_code == 0
        assert "Manage mirrors" in result.output
        assert "-add" in result.output

    def test_examples_skip_processing(self, home_dir: Path) -> None:
        with patch("depmirror.commands.mirror.list_mirrors") as mock_list:
            result = _invoke(["-examples", "-list", "-add"])

        assert result.exit_code == 0
        assert "depmirror mirror -add -p k8s.io/apimachinery" in result.output
        mock_list.assert_not_called()
        assert not home_dir.exists()

    def test_conflicting_flags_are_usage_error(self, home_dir: Path) -> None:
        with (
            patch("depmirror.commands.mirror.add_mirror") as mock_add,
            patch("depmirror.commands.mirror.get_mirrors_path") as mock_path,
        ):
            result = _invoke(["-add", "-remove", "-list", "-p", "a", "-r", "b"])

        assert result.exit_code == 2
        assert "cannot pass -add and -remove and -list together" in result.output
        mock_add.assert_not_called()
        mock_path.assert_not_called()
        assert not home_dir.exists()

    def test_add_creates_file(self, home_dir: Path) -> None:
        result = _invoke(["-add", "-p", "k8s.io/apimachinery", "-r", APIMACHINERY])

        assert result.exit_code == 0, result.output
        assert "No mirrors.yaml file exists. Creating new one" in result.output
        assert f"k8s.io/apimachinery being set to {APIMACHINERY}" in result.output
        assert "mirrors.yaml written with changes" in result.output
        entry = read_document(home_dir / "mirrors.yaml").repos[0]
        assert (entry.prefix, entry.repo, entry.vcs) == ("k8s.io/apimachinery", APIMACHINERY, "git")

    def test_add_uses_configured_default_vcs(self, home_dir: Path) -> None:
        result = _invoke(
            ["-add", "-p", "example.com/a", "-r", "https://hg.example.com/a"],
            _make_context(default_vcs="hg"),
        )

        assert result.exit_code == 0, result.output
        assert read_document(home_dir / "mirrors.yaml").repos[0].vcs == "hg"

    def test_add_explicit_vcs_beats_config(self, home_dir: Path) -> None:
        _invoke(
            ["-add", "-p", "a", "-r", "b", "-s", "svn"],
            _make_context(default_vcs="hg"),
        )

        assert read_document(home_dir / "mirrors.yaml").repos[0].vcs == "svn"

    def test_add_replaces_existing(self, mirrors_file: Path) -> None:
        result = _invoke(["-add", "-p", "golang.org/x/sys", "-r", "https://mirror.example.com/sys.git"])

        assert result.exit_code == 0, result.output
        assert "golang.org/x/sys found in mirrors. Replacing with new settings" in result.output
        document = read_document(mirrors_file)
        assert document.repos[0].repo == "https://mirror.example.com/sys.git"
        assert len(document) == 3

    def test_add_unknown_vcs_warns(self, home_dir: Path) -> None:
        result = _invoke(["-add", "-p", "a", "-r", "b", "-s", "fossil"])

        assert result.exit_code == 0
        assert "Unknown VCS 'fossil'" in result.output
        assert read_document(home_dir / "mirrors.yaml").repos[0].vcs == "fossil"

    def test_add_missing_repo_is_usage_error(self, home_dir: Path) -> None:
        result = _invoke(["-add", "-p", "a"])

        assert result.exit_code == 2
        assert not home_dir.exists()

    def test_add_read_error_fails(self, mirrors_file: Path) -> None:
        mirrors_file.write_text("repos: [oops")

        result = _invoke(["-add", "-p", "a", "-r", "b"])

        assert result.exit_code == 1
        assert "Unable to read mirrors file" in result.output
        assert mirrors_file.read_text() == "repos: [oops"

    def test_write_error_reported_but_succeeds(self, home_dir: Path) -> None:
        with patch(
            "depmirror.mirrors.document.atomic_write",
            side_effect=PermissionError("Permission denied"),
        ):
            result = _invoke(["-add", "-p", "a", "-r", "b"])

        assert result.exit_code == 0
        assert "Error writing mirrors file" in result.output
        assert "written with changes" not in result.output

    @pytest.mark.parametrize(
        ("args", "overrides"),
        [
            (["-add", "-p", "a", "-r", "b", "--strict"], {}),
            (["-add", "-p", "a", "-r", "b"], {"strict_writes": True}),
        ],
    )
    def test_write_error_fails_when_strict(
        self, home_dir: Path, args: list[str], overrides: dict[str, object]
    ) -> None:
        with patch(
            "depmirror.mirrors.document.atomic_write",
            side_effect=PermissionError("Permission denied"),
        ):
            result = _invoke(args, _make_context(**overrides))

        assert result.exit_code == 1
        assert "Error writing mirrors file" in result.output

    def test_remove(self, mirrors_file: Path) -> None:
        result = _invoke(["-remove", "-p", "cloud.google.com/go"])

        assert result.exit_code == 0, result.output
        assert "cloud.google.com/go was removed from mirrors" in result.output
        assert [e.prefix for e in read_document(mirrors_file)] == [
            "golang.org/x/sys",
            "example.com/legacy",
        ]

    def test_remove_not_found(self, mirrors_file: Path) -> None:
        before = mirrors_file.read_bytes()

        result = _invoke(["-remove", "-p", "github.com/pkg/errors"])

        assert result.exit_code == 0
        assert "github.com/pkg/errors was not found in mirrors" in result.output
        assert mirrors_file.read_bytes() == before

    def test_remove_without_file(self, home_dir: Path) -> None:
        result = _invoke(["-remove", "-p", "a"])

        assert result.exit_code == 0
        assert "mirrors.yaml file not found" in result.output
        assert not (home_dir / "mirrors.yaml").exists()

    def test_list(self, mirrors_file: Path) -> None:
        result = _invoke(["-list"])

        assert result.exit_code == 0, result.output
        assert "golang.org/x/sys -> https://github.com/golang/sys.git (git)" in result.output
        assert "example.com/legacy -> https://hg.example.com/legacy\n" in result.output
        lines = result.output.splitlines()
        assert "golang.org/x/sys -> https://github.com/golang/sys.git (git)" in lines
        assert "example.com/legacy -> https://hg.example.com/legacy" in lines
        assert not any(line.startswith("-->") for line in lines)
        first = result.output.index("golang.org/x/sys")
        second = result.output.index("cloud.google.com/go")
        assert first < second

    def test_list_without_file(self, home_dir: Path) -> None:
        result = _invoke(["-list"])

        assert result.exit_code == 0
        assert "No mirrors found" in result.output
        assert not home_dir.exists()

    def test_list_empty_document(self, home_dir: Path) -> None:
        home_dir.mkdir(parents=True)
        (home_dir / "mirrors.yaml").write_text("repos: []\n")

        result = _invoke(["-list"])

        assert result.exit_code == 0
        assert "No mirrors found" in result.output

    def test_list_read_error(self, mirrors_file: Path) -> None:
        mirrors_file.write_text("- just\n- a list\n")

        result = _invoke(["-list"])

        assert result.exit_code == 1
        assert "top level must be a mapping" in result.output

    def test_double_dash_spellings(self, home_dir: Path) -> None:
        result = _invoke(["--add", "--prefix", "a", "--repo", "b", "--vcs", "hg"])

        assert result.exit_code == 0, result.output
        assert read_document(home_dir / "mirrors.yaml").repos[0].vcs == "hg"
