"""Add, remove and list mirrors in the mirrors file.

Every operation reads the file fresh rather than trusting a loaded
:class:`~depmirror.mirrors.registry.MirrorRegistry`, so concurrent edits
made since the registry was loaded are not overwritten with stale data.
Writes replace the whole file; two processes mutating at once can still
lose an update (last writer wins).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from depmirror.exceptions import MirrorWriteError
from depmirror.mirrors.document import (
    MirrorDocument,
    MirrorEntry,
    read_document,
    write_document,
)

logger = logging.getLogger(__name__)


class ChangeAction(Enum):
    """Outcome of a mutating operation."""

    ADDED = "added"
    REPLACED = "replaced"
    REMOVED = "removed"
    NOT_FOUND = "not_found"


@dataclass
class MirrorChange:
    """Result of :func:`add_mirror` or :func:`remove_mirror`.

    Attributes:
        action: What happened to the entry.
        prefix: Prefix the operation targeted.
        path: Mirrors file operated on.
        entry: The entry as stored (added/replaced) or dropped (removed).
        created_file: True if the mirrors file did not exist beforehand.
        file_missing: True if a removal found no mirrors file at all.
        write_error: Set when the document could not be written back.
    """

    action: ChangeAction
    prefix: str
    path: Path
    entry: MirrorEntry | None = None
    created_file: bool = False
    file_missing: bool = False
    write_error: MirrorWriteError | None = None

    @property
    def changed(self) -> bool:
        return self.action is not ChangeAction.NOT_FOUND

    @property
    def written(self) -> bool:
        """True if a modified document reached the disk."""
        return self.changed and self.write_error is None


def _save(path: Path, document: MirrorDocument, change: MirrorChange) -> MirrorChange:
    try:
        write_document(path, document)
    except MirrorWriteError as e:
        logger.debug("Write failed: %s", e)
        change.write_error = e
    return change


def add_mirror(path: Path, prefix: str, repo: str, vcs: str = "") -> MirrorChange:
    """Set the mirror for *prefix*, replacing any existing entry in place.

    Raises:
        MirrorReadError: If the existing file cannot be parsed. Nothing is written.
    """
    created = not path.exists()
    document = MirrorDocument() if created else read_document(path)

    existing = document.find(prefix)
    if existing is not None:
        existing.repo = repo
        existing.vcs = vcs
        entry = existing
        action = ChangeAction.REPLACED
    else:
        entry = MirrorEntry(prefix=prefix, repo=repo, vcs=vcs)
        document.repos.append(entry)
        action = ChangeAction.ADDED

    logger.debug("%s mirror %s -> %s", action.value, prefix, repo)
    change = MirrorChange(
        action=action,
        prefix=prefix,
        path=path,
        entry=entry,
        created_file=created,
    )
    return _save(path, document, change)


def remove_mirror(path: Path, prefix: str) -> MirrorChange:
    """Drop the entry for *prefix*, keeping the order of the rest.

    The file is left untouched when it is missing or has no such entry.

    Raises:
        MirrorReadError: If the existing file cannot be parsed.
    """
    if not path.exists():
        return MirrorChange(
            action=ChangeAction.NOT_FOUND,
            prefix=prefix,
            path=path,
            file_missing=True,
        )

    document = read_document(path)

    kept: list[MirrorEntry] = []
    removed: MirrorEntry | None = None
    for entry in document:
        if entry.prefix == prefix:
            removed = entry
        else:
            kept.append(entry)

    if removed is None:
        return MirrorChange(action=ChangeAction.NOT_FOUND, prefix=prefix, path=path)

    document.repos = kept
    change = MirrorChange(
        action=ChangeAction.REMOVED,
        prefix=prefix,
        path=path,
        entry=removed,
    )
    return _save(path, document, change)


def list_mirrors(path: Path) -> MirrorDocument:
    """Read the mirrors file; a missing file yields an empty document.

    Raises:
        MirrorReadError: If the file exists but cannot be parsed.
    """
    if not path.exists():
        return MirrorDocument()
    return read_document(path)
