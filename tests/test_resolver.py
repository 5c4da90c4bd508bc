# tests/test_resolver.py
import shutil
import pytest
from pathlib import Path

from wishtree import (
    CopyFromPath,
    CustomDir,
    FileSetSource,
    Mount,
    TextContent,
    dir,
    iter_virtual_files,
    resolve_virtual_files,
    text,
    to_mount_source,
    tree,
    walk_mounts,
)
from wishtree.core.resolver import join_mount_point

# --- Fixtures ---

@pytest.fixture
def sample_dir(tmp_path):
    """
    base/
      a.txt
      b.log
      sub/
        c.txt
    """
    base = tmp_path / "base"
    (base / "sub").mkdir(parents=True)
    (base / "a.txt").write_text("A", encoding="utf-8")
    (base / "b.log").write_text("B", encoding="utf-8")
    (base / "sub" / "c.txt").write_text("C", encoding="utf-8")
    return base


def entries(source):
    return [(vf.path, vf.is_dir) for vf in iter_virtual_files(source)]


def read_all(source):
    result = {}
    for vf in iter_virtual_files(source):
        if not vf.is_dir:
            with vf.open() as reader:
                result[vf.path] = reader.read()
    return result

# --- Test 1: Conversions & builders ---

def test_text_builds_text_content():
    assert text("hi") == TextContent("hi")

def test_text_rejects_bytes():
    with pytest.raises(TypeError):
        text(b"hi")

def test_conversions(tmp_path):
    assert to_mount_source("README.md") == CopyFromPath(Path("README.md"))
    assert to_mount_source(tmp_path) == CopyFromPath(tmp_path)

    file_set = dir(tmp_path).include("*.txt").build()
    assert to_mount_source(file_set) == FileSetSource(file_set)

    from_builder = to_mount_source(dir(tmp_path).include("*.txt"))
    assert isinstance(from_builder, FileSetSource)
    assert from_builder.file_set.patterns == ("*.txt",)

    nested = to_mount_source({"a": text("x")})
    assert isinstance(nested, CustomDir)
    assert nested.entries[0].name == "a"

    source = text("x")
    assert to_mount_source(source) is source

def test_unsupported_value_raises_type_error():
    with pytest.raises(TypeError):
        to_mount_source(42)

def test_tree_keeps_insertion_order():
    source = tree({"c": text("3"), "a": text("1")}, b=text("2"))
    assert [e.name for e in source.entries] == ["c", "a", "b"]

def test_tree_accepts_pairs_with_repeated_names():
    source = tree([("x", text("1")), ("x", text("2"))])
    assert [e.name for e in source.entries] == ["x", "x"]

def test_empty_tree():
    assert tree() == CustomDir(())

def test_building_does_no_io(tmp_path):
    missing = tmp_path / "does-not-exist"
    source = tree({"copy": missing, "set": dir(missing).include("*")})
    assert len(source.entries) == 2

# --- Test 2: Mount walk ---

def test_walk_mounts_is_depth_first_pre_order():
    inner = tree({"x": text("x")})
    source = tree({"a": inner, "b": text("b"), "c": tree({"d": text("d")})})
    points = [m.point for m in walk_mounts(source)]
    assert points == ["", "a", "a/x", "b", "c", "c/d"]

def test_walk_mounts_yields_mount_pairs():
    leaf = text("x")
    mounts = list(walk_mounts(tree({"sub": leaf})))
    assert mounts[1] == Mount(point="sub", source=leaf)

def test_join_mount_point():
    assert join_mount_point("", "a") == "a"
    assert join_mount_point("a", "b") == "a/b"
    assert join_mount_point("a", "") == "a"
    assert join_mount_point("a", "b/c") == "a/b/c"

def test_shared_source_is_mounted_at_each_parent():
    shared = text("same")
    source = tree({"one": shared, "two": tree({"three": shared})})
    assert entries(source) == [
        ("", True),
        ("one", False),
        ("two", True),
        ("two/three", False),
    ]

# --- Test 3: Resolution ---

def test_path_composition():
    assert entries(tree({"sub": text("x")})) == [("", True), ("sub", False)]

def test_ordering_keeps_sibling_subtrees_together():
    source = tree({
        "a": tree({"a1": text("1"), "a2": tree({"deep": text("d")})}),
        "b": tree({"b1": text("1")}),
        "c": text("c"),
    })
    paths = [p for p, _ in entries(source)]
    assert paths == ["", "a", "a/a1", "a/a2", "a/a2/deep", "b", "b/b1", "c"]

def test_text_content_is_utf8():
    assert read_all(tree({"t": text("héllo")})) == {"t": "héllo".encode("utf-8")}

def test_custom_dir_resolves_to_single_directory():
    mount = Mount(point="x", source=tree({"child": text("c")}))
    resolved = list(resolve_virtual_files(mount))
    assert [(vf.path, vf.is_dir) for vf in resolved] == [("x", True)]

def test_copy_single_file(sample_dir):
    source = tree({"renamed.txt": sample_dir / "a.txt"})
    assert entries(source) == [("", True), ("renamed.txt", False)]
    assert read_all(source) == {"renamed.txt": b"A"}

def test_copy_directory_mirrors_whole_subtree(sample_dir):
    source = tree({"copy": sample_dir})
    assert entries(source) == [
        ("", True),
        ("copy", True),
        ("copy/sub", True),
        ("copy/a.txt", False),
        ("copy/b.log", False),
        ("copy/sub/c.txt", False),
    ]

def test_copy_directory_at_root(sample_dir):
    paths = [p for p, _ in entries(sample_dir)]
    assert paths[0] == ""
    assert set(paths) == {"", "sub", "a.txt", "b.log", "sub/c.txt"}

def test_file_set_filters_by_relative_path(sample_dir):
    source = tree({"doc": dir(sample_dir).include("**/*.txt")})
    resolved = entries(source)
    files = {p for p, is_dir in resolved if not is_dir}
    assert files == {"doc/a.txt", "doc/sub/c.txt"}
    assert ("doc/b.log", False) not in resolved

def test_file_set_without_patterns_is_empty(sample_dir):
    assert entries(tree({"doc": dir(sample_dir)})) == [("", True)]

def test_file_set_with_directory_pattern(sample_dir):
    source = dir(sample_dir).include("sub/")
    assert entries(source) == [("sub", True), ("sub/c.txt", False)]

def test_file_set_over_missing_directory_raises(tmp_path):
    source = tree({"doc": dir(tmp_path / "missing").include("*")})
    with pytest.raises(FileNotFoundError):
        list(iter_virtual_files(source))

def test_no_deduplication():
    source = tree([("x", text("1")), ("x", text("2"))])
    assert entries(source) == [("", True), ("x", False), ("x", False)]

# --- Test 4: Laziness ---

def test_missing_file_fails_only_when_opened(tmp_path):
    source = tree({"ghost": tmp_path / "ghost.txt"})
    resolved = list(iter_virtual_files(source))
    assert [(vf.path, vf.is_dir) for vf in resolved] == [("", True), ("ghost", False)]
    with pytest.raises(FileNotFoundError):
        resolved[1].open()

def test_iteration_is_lazy(sample_dir):
    source = tree({"first": text("1"), "copy": sample_dir})
    iterator = iter_virtual_files(source)
    assert next(iterator).path == ""
    # Removing the directory before the walk reaches it is noticed
    shutil.rmtree(sample_dir)
    remaining = [vf.path for vf in iterator]
    assert remaining == ["first", "copy"]

def test_each_render_sees_latest_content(sample_dir):
    source = tree({"a.txt": sample_dir / "a.txt"})
    assert read_all(source) == {"a.txt": b"A"}
    (sample_dir / "a.txt").write_text("changed", encoding="utf-8")
    assert read_all(source) == {"a.txt": b"changed"}

def test_directory_content_is_empty():
    root = next(iter_virtual_files(tree()))
    with root.open() as reader:
        assert reader.read() == b""

# --- Test 5: Entry names ---

@pytest.mark.parametrize("name", ["/abs", "../up", "a/../../up"])
def test_entry_names_cannot_escape_their_parent(name):
    with pytest.raises(ValueError):
        tree({name: text("x")})

def test_nested_entry_name_is_allowed():
    assert entries(tree({"a/b": text("x")})) == [("", True), ("a/b", False)]
