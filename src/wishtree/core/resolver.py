# src/wishtree/core/resolver.py
import io
import logging
import os
import posixpath
from pathlib import Path
from typing import Any, Iterator, Tuple

from wishtree.core.builders import to_mount_source
from wishtree.models import (
    CopyFromPath,
    CustomDir,
    FileSetSource,
    Mount,
    MountSource,
    TextContent,
    VirtualFile,
)

_logger = logging.getLogger(__name__)


def join_mount_point(mount_point: str, name: str) -> str:
    """Appends a relative path to a mount point. The root mount point is ""."""
    if not name:
        return mount_point
    if not mount_point:
        return name
    return posixpath.join(mount_point, name)


def _raise(error: OSError) -> None:
    raise error


def _walk_dir(base_dir: Path) -> Iterator[Tuple[str, Path, bool]]:
    """
    Walks the real directory tree below base_dir and yields
    (relative posix path, absolute path, is_directory), starting with
    base_dir itself as "". Directories are announced before their content.
    Errors while listing a directory are raised, not skipped.
    """
    yield "", base_dir, True
    for root, dirs, files in os.walk(base_dir, onerror=_raise):
        root_path = Path(root)
        # Sorting in place also fixes the order os.walk descends in
        dirs.sort()
        for d in dirs:
            dir_abs_path = root_path / d
            yield dir_abs_path.relative_to(base_dir).as_posix(), dir_abs_path, True
        for f in sorted(files):
            file_abs_path = root_path / f
            yield file_abs_path.relative_to(base_dir).as_posix(), file_abs_path, False


def _file_opener(path: Path):
    return lambda: path.open("rb")


def _from_dir_entry(mount_point: str, rel_path: str, abs_path: Path, is_dir: bool) -> VirtualFile:
    full_path = join_mount_point(mount_point, rel_path)
    if is_dir:
        return VirtualFile.directory(full_path)
    return VirtualFile.file(full_path, _file_opener(abs_path))


def walk_mounts(source: Any, mount_point: str = "") -> Iterator[Mount]:
    """
    Recursively walks over all defined mounts (depth-first, pre-order),
    starting with `source` mounted at `mount_point`. Only custom directories
    have children at this level.
    """
    source = to_mount_source(source)
    yield Mount(point=mount_point, source=source)
    if isinstance(source, CustomDir):
        for entry in source.entries:
            yield from walk_mounts(entry.source, join_mount_point(mount_point, entry.name))


def resolve_virtual_files(mount: Mount) -> Iterator[VirtualFile]:
    """Expands a single mount into concrete directories and files."""
    source: MountSource = mount.source
    point = mount.point

    if isinstance(source, CopyFromPath):
        if source.path.is_dir():
            for rel_path, abs_path, is_dir in _walk_dir(source.path):
                yield _from_dir_entry(point, rel_path, abs_path, is_dir)
        else:
            yield VirtualFile.file(point, _file_opener(source.path))

    elif isinstance(source, CustomDir):
        yield VirtualFile.directory(point)

    elif isinstance(source, TextContent):
        data = source.text.encode("utf-8")
        yield VirtualFile.file(point, lambda: io.BytesIO(data))

    elif isinstance(source, FileSetSource):
        file_set = source.file_set
        for rel_path, abs_path, is_dir in _walk_dir(file_set.base_dir):
            # The base directory itself is the mount point, never a candidate
            if not rel_path:
                continue
            if file_set.matches(rel_path, is_directory=is_dir):
                yield _from_dir_entry(point, rel_path, abs_path, is_dir)

    else:
        raise TypeError(f"Unknown mount source: {source!r}")


def iter_virtual_files(source: Any) -> Iterator[VirtualFile]:
    """
    Expands all mounts of `source` into concrete directories and files,
    depth-first, in mount order. Lazy: directories are listed as the
    iteration advances and file content is only opened by the consumer.
    """
    for mount in walk_mounts(source):
        for virtual_file in resolve_virtual_files(mount):
            _logger.debug("Resolved %s '%s'", "dir" if virtual_file.is_dir else "file", virtual_file.path)
            yield virtual_file
