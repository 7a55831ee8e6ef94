"""Render node trees as indented text."""

import io
from typing import Any

from dcmview.core.tree.navigation import path_to, walk
from dcmview.models.node import Node

INDENT = "  "


def format_row(node: Node, depth: int) -> str:
    """One display line: indentation, expand marker and label."""
    if node.children:
        marker = "[-] " if node.expanded else "[+] "
    else:
        marker = "    "
    return f"{INDENT * depth}{marker}{node.label}"


def render_tree(root: Node, *, max_depth: int | None = None) -> str:
    """Render a whole tree, ignoring expand state.

    Args:
        root: The node to start rendering from.
        max_depth: Max levels below the root to include (None = unlimited).

    Returns:
        One line per node, children indented below their parent.
    """
    out = io.StringIO()
    for node, _parent, depth in walk(root):
        if max_depth is not None and depth > max_depth:
            continue
        out.write(f"{INDENT * depth}{node.label}\n")

        # Truncation indicator when children are cut off by max_depth
        if max_depth is not None and depth == max_depth and node.children:
            count = len(node.children)
            noun = "child" if count == 1 else "children"
            out.write(f"{INDENT * (depth + 1)}... ({count} more {noun})\n")
    return out.getvalue()


def tree_to_dict(node: Node, *, max_depth: int | None = None, _depth: int = 0) -> dict[str, Any]:
    """Nested dict form of a tree, for JSON output."""
    data: dict[str, Any] = {"label": node.label}
    if node.reference is not None:
        data["tag"] = str(node.reference.tag)
        data["vr"] = node.reference.vr
    if node.children:
        if max_depth is not None and _depth >= max_depth:
            data["child_count"] = len(node.children)
        else:
            data["children"] = [
                tree_to_dict(child, max_depth=max_depth, _depth=_depth + 1)
                for child in node.children
            ]
    return data


def breadcrumbs(root: Node, node: Node, *, width: int = 40) -> str:
    """Ancestor labels of ``node`` joined with ``" > "``."""
    return " > ".join(ancestor.label[:width] for ancestor in path_to(root, node))
