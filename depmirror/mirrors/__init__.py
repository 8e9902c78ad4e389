"""Mirror registry: file format, lookup and mutation."""

from depmirror.mirrors.document import (
    KNOWN_VCS,
    MirrorDocument,
    MirrorEntry,
    read_document,
    write_document,
)
from depmirror.mirrors.operations import (
    ChangeAction,
    MirrorChange,
    add_mirror,
    list_mirrors,
    remove_mirror,
)
from depmirror.mirrors.registry import Mirror, MirrorRegistry, load_registry

__all__ = [
    "KNOWN_VCS",
    "ChangeAction",
    "Mirror",
    "MirrorChange",
    "MirrorDocument",
    "MirrorEntry",
    "MirrorRegistry",
    "add_mirror",
    "list_mirrors",
    "load_registry",
    "read_document",
    "remove_mirror",
    "write_document",
]
