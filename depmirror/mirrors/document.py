"""On-disk representation of the mirror list (``mirrors.yaml``)."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from depmirror.exceptions import MirrorReadError, MirrorWriteError
from depmirror.utils.fileops import atomic_write

# Top-level key holding the entry sequence
REPOS_KEY = "repos"

# VCS kinds the dependency tool knows how to fetch
KNOWN_VCS = ("git", "hg", "bzr", "svn")

logger = logging.getLogger(__name__)


@dataclass
class MirrorEntry:
    """A single redirect rule.

    Attributes:
        prefix: Package path matched literally against lookups.
        repo: Replacement repository URL.
        vcs: Version control system of *repo*; empty means unspecified.
    """

    prefix: str
    repo: str
    vcs: str = ""

    def describe(self) -> str:
        """Render as ``prefix -> repo (vcs)``."""
        if self.vcs:
            return f"{self.prefix} -> {self.repo} ({self.vcs})"
        return f"{self.prefix} -> {self.repo}"


@dataclass
class MirrorDocument:
    """Ordered list of mirror entries as persisted on disk."""

    repos: list[MirrorEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.repos)

    def __iter__(self):
        return iter(self.repos)

    def find(self, prefix: str) -> MirrorEntry | None:
        """Return the entry for *prefix*, or None."""
        for entry in self.repos:
            if entry.prefix == prefix:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        return {REPOS_KEY: [asdict(entry) for entry in self.repos]}


def _parse_entry(raw: Any, index: int, path: Path) -> MirrorEntry:
    if not isinstance(raw, dict):
        raise MirrorReadError(path, f"{REPOS_KEY}[{index}] must be a mapping")

    values: dict[str, str] = {}
    for key in ("prefix", "repo", "vcs"):
        value = raw.get(key)
        if value is None:
            if key != "vcs":
                raise MirrorReadError(path, f"{REPOS_KEY}[{index}] is missing '{key}'")
            value = ""
        if not isinstance(value, str):
            raise MirrorReadError(path, f"{REPOS_KEY}[{index}].{key} must be a string")
        values[key] = value

    return MirrorEntry(**values)


def parse_document(data: Any, path: Path) -> MirrorDocument:
    """Build a document from already-decoded YAML data.

    Args:
        data: Result of ``yaml.safe_load`` (None for an empty file).
        path: Source path, used in error messages.

    Raises:
        MirrorReadError: If *data* does not match the mirrors schema.
    """
    if data is None:
        return MirrorDocument()
    if not isinstance(data, dict):
        raise MirrorReadError(path, "top level must be a mapping")

    repos = data.get(REPOS_KEY)
    if repos is None:
        return MirrorDocument()
    if not isinstance(repos, list):
        raise MirrorReadError(path, f"'{REPOS_KEY}' must be a list")

    return MirrorDocument(repos=[_parse_entry(raw, i, path) for i, raw in enumerate(repos)])


def read_document(path: Path) -> MirrorDocument:
    """Read the mirrors file at *path*.

    Callers check that the file exists; a missing file means
    "no mirrors configured" and is handled above this layer.

    Raises:
        MirrorReadError: If the file cannot be read or parsed.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise MirrorReadError(path, str(e)) from e
    except yaml.YAMLError as e:
        raise MirrorReadError(path, str(e)) from e

    document = parse_document(data, path)
    logger.debug("Read %d mirrors from %s", len(document), path)
    return document


def write_document(path: Path, document: MirrorDocument) -> None:
    """Overwrite *path* with *document*.

    Raises:
        MirrorWriteError: If the file or its directory cannot be written.
    """
    content = yaml.safe_dump(
        document.to_dict(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    try:
        atomic_write(path, content)
    except OSError as e:
        raise MirrorWriteError(path, str(e)) from e

    logger.debug("Wrote %d mirrors to %s", len(document), path)
