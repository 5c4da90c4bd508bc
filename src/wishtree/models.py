# src/wishtree/models.py
import io
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Tuple, Union

import pathspec

from wishtree.config import PATTERN_SYNTAX
from wishtree.errors import BuildError, PatternError


def to_include_line(pattern: str) -> str:
    """
    Turns an include pattern into a gitwildmatch line that only ever adds
    paths. "!" negation and empty lines are rejected, a leading "#" is
    escaped so it names a file instead of starting a comment.
    """
    if not isinstance(pattern, str):
        raise PatternError(f"Include pattern must be a string, got {type(pattern).__name__}")
    if not pattern.strip():
        raise PatternError("Include pattern is empty")
    if pattern.startswith("!"):
        raise PatternError(f"Negated patterns are not supported: {pattern!r}")
    if pattern.startswith("#"):
        return "\\" + pattern
    return pattern


@dataclass(frozen=True)
class FileSet:
    """The files below ``base_dir`` whose relative path matches one of the include patterns."""
    base_dir: Path
    patterns: Tuple[str, ...] = ()
    spec: pathspec.PathSpec = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "base_dir", Path(self.base_dir))
        object.__setattr__(self, "patterns", tuple(self.patterns))
        lines = [to_include_line(p) for p in self.patterns]
        try:
            spec = pathspec.PathSpec.from_lines(PATTERN_SYNTAX, lines)
        except ValueError as e:
            raise BuildError(f"Could not build file set for '{self.base_dir}': {e}") from e
        object.__setattr__(self, "spec", spec)

    def matches(self, path: Union[str, os.PathLike], is_directory: bool = False) -> bool:
        """
        Checks a path relative to base_dir against the include patterns.
        Directories are tested with a trailing slash so that "docs/" style
        patterns select them.
        """
        rel_path = Path(path).as_posix()
        if is_directory and not rel_path.endswith("/"):
            rel_path += "/"
        return self.spec.match_file(rel_path)


@dataclass(frozen=True)
class CopyFromPath:
    """Copies the file or directory at the given path one to one."""
    path: Path


@dataclass(frozen=True)
class CustomDirEntry:
    """A named child of a user-defined directory."""
    name: str
    source: "MountSource"


@dataclass(frozen=True)
class CustomDir:
    """A directory with user-defined entries, rendered in the given order."""
    entries: Tuple[CustomDirEntry, ...] = ()


@dataclass(frozen=True)
class TextContent:
    """A generated file containing the UTF-8 encoded text."""
    text: str


@dataclass(frozen=True)
class FileSetSource:
    """A partial directory tree selected by include patterns."""
    file_set: FileSet


MountSource = Union[CopyFromPath, CustomDir, TextContent, FileSetSource]
MOUNT_SOURCE_TYPES = (CopyFromPath, CustomDir, TextContent, FileSetSource)


@dataclass(frozen=True)
class Mount:
    """A mount source placed at a concrete point of the output tree."""
    point: str
    source: MountSource


def _empty() -> BinaryIO:
    return io.BytesIO(b"")


@dataclass(frozen=True)
class VirtualFile:
    """
    A target file or directory: its path relative to the render root and a
    way to open its content. Nothing is opened until open() is called.
    """
    path: str
    is_dir: bool
    opener: Callable[[], BinaryIO] = _empty

    @classmethod
    def file(cls, path: str, opener: Callable[[], BinaryIO]) -> "VirtualFile":
        return cls(path=path, is_dir=False, opener=opener)

    @classmethod
    def directory(cls, path: str) -> "VirtualFile":
        return cls(path=path, is_dir=True)

    @property
    def is_root(self) -> bool:
        return self.path == ""

    def open(self) -> BinaryIO:
        """Returns a fresh binary stream over the content. Use it as a context manager."""
        return self.opener()
