# src/wishtree/core/builders.py
import os
from pathlib import Path, PurePosixPath
from typing import Any, Iterable, Mapping, Tuple, Union

from wishtree.core.fileset import FileSetBuilder
from wishtree.models import (
    MOUNT_SOURCE_TYPES,
    CopyFromPath,
    CustomDir,
    CustomDirEntry,
    FileSet,
    FileSetSource,
    MountSource,
    TextContent,
)

Entries = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def text(content: str) -> TextContent:
    """Generates a file with the given text content."""
    if not isinstance(content, str):
        raise TypeError(f"text() expects a str, got {type(content).__name__}")
    return TextContent(content)


def to_mount_source(value: Any) -> MountSource:
    """
    Converts a value into a mount source:
      - mount sources are returned unchanged
      - str / os.PathLike -> CopyFromPath
      - FileSet -> FileSetSource
      - FileSetBuilder -> FileSetSource (the builder is finalized)
      - Mapping -> CustomDir (nested dict literals)
    """
    if isinstance(value, MOUNT_SOURCE_TYPES):
        return value
    if isinstance(value, FileSet):
        return FileSetSource(value)
    if isinstance(value, FileSetBuilder):
        return FileSetSource(value.build())
    if isinstance(value, Mapping):
        return tree(value)
    if isinstance(value, (str, os.PathLike)):
        return CopyFromPath(Path(value))
    raise TypeError(f"Cannot mount a value of type {type(value).__name__}")


def _entry_name(name: Any) -> str:
    name = os.fspath(name)
    rel_path = PurePosixPath(name)
    if rel_path.is_absolute() or ".." in rel_path.parts:
        raise ValueError(f"Directory entry name must stay inside its parent: {name!r}")
    return name


def tree(entries: Entries = (), **named: Any) -> CustomDir:
    """
    Builds a custom directory listing.

    `entries` is a mapping (insertion order is kept) or an iterable of
    (name, value) pairs; pairs allow repeated names. Keyword arguments are
    appended after `entries`.
    """
    items = entries.items() if isinstance(entries, Mapping) else entries
    result = []
    for name, value in list(items) + list(named.items()):
        result.append(CustomDirEntry(name=_entry_name(name), source=to_mount_source(value)))
    return CustomDir(tuple(result))
