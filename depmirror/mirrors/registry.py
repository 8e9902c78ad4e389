"""In-memory mirror lookup for dependency resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from depmirror.home import get_mirrors_path
from depmirror.mirrors.document import read_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mirror:
    """Replacement source for a prefix."""

    repo: str
    vcs: str = ""


class MirrorRegistry:
    """Mapping of package prefix to mirror, built from ``mirrors.yaml``.

    The registry is owned by whoever resolves dependencies: create it
    with :func:`load_registry` at startup and pass it to the code that
    needs lookups. Contents only change on :meth:`load`; edits made to
    the file afterwards are not picked up until the next load.
    """

    def __init__(self) -> None:
        self._mirrors: dict[str, Mirror] = {}

    def __len__(self) -> int:
        return len(self._mirrors)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._mirrors

    def __iter__(self) -> Iterator[str]:
        return iter(self._mirrors)

    def load(self, path: Path | None = None) -> None:
        """Populate the registry from the mirrors file.

        Args:
            path: Mirrors file to read (default: ``<home>/mirrors.yaml``).

        A missing file empties the registry. On a parse failure the
        current contents are kept.

        Raises:
            MirrorReadError: If the file exists but cannot be parsed.
        """
        if path is None:
            path = get_mirrors_path()

        if not path.exists():
            logger.debug("No mirrors file at %s", path)
            self._mirrors = {}
            return

        document = read_document(path)

        mirrors: dict[str, Mirror] = {}
        for entry in document:
            mirrors[entry.prefix] = Mirror(repo=entry.repo, vcs=entry.vcs)
        self._mirrors = mirrors
        logger.debug("Loaded %d mirrors from %s", len(mirrors), path)

    def get(self, prefix: str) -> tuple[bool, str, str]:
        """Look up *prefix* exactly.

        Returns:
            Tuple of (found, repo, vcs); ``(False, "", "")`` when absent.
        """
        mirror = self._mirrors.get(prefix)
        if mirror is None:
            return False, "", ""
        return True, mirror.repo, mirror.vcs

    def match(self, import_path: str) -> tuple[str, Mirror] | None:
        """Find the mirror for *import_path* by longest configured prefix.

        A prefix matches the path itself or any path below it on a ``/``
        boundary, so ``golang.org/x`` covers ``golang.org/x/sys`` but not
        ``golang.org/xerrors``.

        Returns:
            Tuple of (matched prefix, mirror), or None.
        """
        candidate = import_path.rstrip("/")
        while candidate:
            mirror = self._mirrors.get(candidate)
            if mirror is not None:
                return candidate, mirror
            if "/" not in candidate:
                break
            candidate = candidate.rsplit("/", 1)[0]
        return None


def load_registry(home: Path | None = None) -> MirrorRegistry:
    """Create a registry loaded from the mirrors file in *home*.

    Raises:
        MirrorReadError: If the mirrors file exists but cannot be parsed.
    """
    registry = MirrorRegistry()
    registry.load(get_mirrors_path(home))
    return registry
