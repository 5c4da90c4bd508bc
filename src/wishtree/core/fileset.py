# src/wishtree/core/fileset.py
import os
from pathlib import Path
from typing import List, Tuple, Union

import pathspec
from pathspec.patterns.gitwildmatch import GitWildMatchPatternError

from wishtree.config import PATTERN_SYNTAX
from wishtree.errors import PatternError
from wishtree.models import FileSet, to_include_line


class FileSetBuilder:
    def __init__(self, base_dir: Union[str, os.PathLike]):
        self.base_dir = Path(base_dir)
        self._patterns: List[str] = []

    def __repr__(self) -> str:
        return f"FileSetBuilder(base_dir={self.base_dir!r}, patterns={self._patterns!r})"

    @property
    def patterns(self) -> Tuple[str, ...]:
        return tuple(self._patterns)

    def include(self, pattern: str) -> "FileSetBuilder":
        """
        Adds an include pattern (gitignore wildcard syntax, e.g. "**/*.txt").
        The pattern is compiled right away so that syntax errors surface here
        instead of during rendering.
        """
        line = to_include_line(pattern)
        try:
            pathspec.PathSpec.from_lines(PATTERN_SYNTAX, [line])
        except GitWildMatchPatternError as e:
            raise PatternError(f"Invalid include pattern {pattern!r}: {e}") from e
        self._patterns.append(pattern)
        return self

    def copy(self) -> "FileSetBuilder":
        clone = FileSetBuilder(self.base_dir)
        clone._patterns = list(self._patterns)
        return clone

    def build(self) -> FileSet:
        """Finalizes the accumulated patterns. No patterns means nothing matches."""
        return FileSet(base_dir=self.base_dir, patterns=tuple(self._patterns))


def dir(base_dir: Union[str, os.PathLike]) -> FileSetBuilder:
    """Mounts a set of files from the given base directory."""
    return FileSetBuilder(base_dir)
