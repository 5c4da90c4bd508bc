# src/wishtree/core/render.py
import io
import logging
import os
import shutil
import tarfile
import zipfile
from pathlib import Path
from typing import Any, Union

from wishtree.config import (
    COPY_BUFFER_SIZE,
    DEFAULT_PERMISSIONS,
    GZIP_COMPRESSLEVEL,
    TAR_FORMAT,
    ZIP_COMPRESSION,
    ZIP_DATE_TIME,
)
from wishtree.core.resolver import iter_virtual_files
from wishtree.models import VirtualFile

_logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# st_mode file type bits, stored in the upper half of a ZIP entry's external_attr
_S_IFDIR = 0o040000
_S_IFREG = 0o100000
_MSDOS_DIRECTORY = 0x10


def render_to_filesystem(source: Any, target_dir: PathLike) -> None:
    """
    Creates the directory structure described by `source` inside target_dir.
    Existing directories are reused and existing files are overwritten.
    """
    target_dir = Path(target_dir)
    count = 0
    for vf in iter_virtual_files(source):
        absolute_path = target_dir / vf.path
        if vf.is_dir:
            absolute_path.mkdir(parents=True, exist_ok=True)
        else:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            with vf.open() as reader, open(absolute_path, "wb") as writer:
                shutil.copyfileobj(reader, writer, COPY_BUFFER_SIZE)
        count += 1
    _logger.info("Rendered %d entries to directory '%s'", count, target_dir)


def _skip_root(vf: VirtualFile) -> None:
    # An archive member cannot be named "", so the render root is never written
    if not vf.is_dir:
        _logger.warning("Skipping file mounted at the archive root, it has no name")


def _zip_info(name: str, is_dir: bool) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name + "/" if is_dir else name, date_time=ZIP_DATE_TIME)
    if is_dir:
        info.compress_type = zipfile.ZIP_STORED
        info.external_attr = ((_S_IFDIR | DEFAULT_PERMISSIONS) << 16) | _MSDOS_DIRECTORY
    else:
        info.compress_type = ZIP_COMPRESSION
        info.external_attr = (_S_IFREG | DEFAULT_PERMISSIONS) << 16
    return info


def render_to_zip(source: Any, zip_file: PathLike) -> None:
    """Creates the directory structure described by `source` as a ZIP file."""
    count = 0
    with zipfile.ZipFile(zip_file, "w", compression=ZIP_COMPRESSION) as archive:
        for vf in iter_virtual_files(source):
            if vf.is_root:
                _skip_root(vf)
                continue
            if vf.is_dir:
                # Only matters for empty directories, file entries imply their parents
                archive.writestr(_zip_info(vf.path, is_dir=True), b"")
            else:
                # A file set may yield files whose parent directory was never
                # announced. Archive readers create it implicitly.
                with vf.open() as reader, archive.open(_zip_info(vf.path, is_dir=False), "w") as writer:
                    shutil.copyfileobj(reader, writer, COPY_BUFFER_SIZE)
            count += 1
    _logger.info("Rendered %d entries to ZIP file '%s'", count, zip_file)


def _tar_info(name: str, is_dir: bool, size: int = 0) -> tarfile.TarInfo:
    info = tarfile.TarInfo(name)
    info.type = tarfile.DIRTYPE if is_dir else tarfile.REGTYPE
    info.mode = DEFAULT_PERMISSIONS
    info.size = size
    return info


def render_to_tar_gz(source: Any, archive_path: PathLike) -> None:
    """Creates the directory structure described by `source` as a gzipped tarball."""
    count = 0
    with tarfile.open(archive_path, "w:gz", compresslevel=GZIP_COMPRESSLEVEL, format=TAR_FORMAT) as archive:
        for vf in iter_virtual_files(source):
            if vf.is_root:
                _skip_root(vf)
                continue
            if vf.is_dir:
                archive.addfile(_tar_info(vf.path, is_dir=True))
            else:
                # The header needs the exact size, so the content is buffered first
                with vf.open() as reader:
                    data = reader.read()
                archive.addfile(_tar_info(vf.path, is_dir=False, size=len(data)), io.BytesIO(data))
            count += 1
    _logger.info("Rendered %d entries to tar.gz file '%s'", count, archive_path)
