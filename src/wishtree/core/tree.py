# src/wishtree/core/tree.py
from typing import Any, Dict, List

from wishtree.core.resolver import iter_virtual_files


def list_paths(source: Any) -> List[str]:
    """
    Lists the resolved output paths in render order, without opening any file.
    Directories end with a slash; the render root is left out.
    """
    paths = []
    for vf in iter_virtual_files(source):
        if vf.is_root:
            continue
        paths.append(vf.path + "/" if vf.is_dir else vf.path)
    return paths


def format_tree(source: Any, root_name: str = ".") -> str:
    """Generates a string representation of the tree `source` would render."""
    tree_dict: Dict = {}
    dir_paths = set()
    for path in list_paths(source):
        if path.endswith("/"):
            path = path.rstrip("/")
            dir_paths.add(path)
        current_level = tree_dict
        for part in path.split("/"):
            current_level = current_level.setdefault(part, {})

    lines = [f"{root_name}/"]

    def _generate_lines_recursive(subtree: Dict, prefix: str, parent: str):
        entries = sorted(subtree.items())
        for i, (name, children) in enumerate(entries):
            is_last = (i == len(entries) - 1)
            connector = "└── " if is_last else "├── "
            full_path = f"{parent}/{name}" if parent else name
            is_dir = bool(children) or full_path in dir_paths
            lines.append(f"{prefix}{connector}{name}{'/' if is_dir else ''}")

            if children:
                new_prefix = prefix + ("    " if is_last else "│   ")
                _generate_lines_recursive(children, new_prefix, full_path)

    _generate_lines_recursive(tree_dict, "", "")
    return "\n".join(lines) + "\n"
