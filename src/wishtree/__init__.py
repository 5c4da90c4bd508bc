# src/wishtree/__init__.py
"""
Describe a directory tree declaratively and render it to a directory,
a ZIP file or a gzipped tarball.

    from wishtree import dir, text, tree, render_to_zip

    layout = tree({
        "README.md": "README.md",
        "docs": dir("docs").include("**/*.md"),
        "notes.txt": text("Some notes"),
    })
    render_to_zip(layout, "dist.zip")
"""
from wishtree.core.builders import text, to_mount_source, tree
from wishtree.core.fileset import FileSetBuilder, dir
from wishtree.core.render import render_to_filesystem, render_to_tar_gz, render_to_zip
from wishtree.core.resolver import iter_virtual_files, resolve_virtual_files, walk_mounts
from wishtree.core.tree import format_tree, list_paths
from wishtree.errors import BuildError, PatternError, WishTreeError
from wishtree.models import (
    CopyFromPath,
    CustomDir,
    CustomDirEntry,
    FileSet,
    FileSetSource,
    Mount,
    MountSource,
    TextContent,
    VirtualFile,
)

__all__ = [
    "BuildError",
    "CopyFromPath",
    "CustomDir",
    "CustomDirEntry",
    "FileSet",
    "FileSetBuilder",
    "FileSetSource",
    "Mount",
    "MountSource",
    "PatternError",
    "TextContent",
    "VirtualFile",
    "WishTreeError",
    "dir",
    "format_tree",
    "iter_virtual_files",
    "list_paths",
    "render_to_filesystem",
    "render_to_tar_gz",
    "render_to_zip",
    "resolve_virtual_files",
    "text",
    "to_mount_source",
    "tree",
    "walk_mounts",
]
