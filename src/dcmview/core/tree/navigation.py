"""Tree navigation: walks, parents, siblings and cursor movement.

Nodes carry no parent links, so every parent or sibling lookup walks the tree
from the root. Trees here hold a few thousand nodes at most.

All movement functions are total: when there is nothing to move to they leave
the cursor where it is.
"""

from collections.abc import Iterator

from dcmview.models.node import Node, TreeView

# --- Walks ---


def walk(root: Node, *, visible_only: bool = False) -> Iterator[tuple[Node, Node | None, int]]:
    """Yield ``(node, parent, depth)`` in pre-order.

    With ``visible_only`` the walk does not descend into collapsed nodes.
    """
    stack: list[tuple[Node, Node | None, int]] = [(root, None, 0)]
    while stack:
        node, parent, depth = stack.pop()
        yield node, parent, depth
        if visible_only and not node.expanded:
            continue
        for child in reversed(node.children):
            stack.append((child, node, depth + 1))


def visible_rows(root: Node) -> list[tuple[Node, int]]:
    """Every visible node with its depth, in display order."""
    return [(node, depth) for node, _parent, depth in walk(root, visible_only=True)]


def visible_nodes(root: Node) -> list[Node]:
    return [node for node, _parent, _depth in walk(root, visible_only=True)]


def visible_nodes_at_level(root: Node, level: int) -> list[Node]:
    """Visible nodes at the given depth (root is depth 0), in display order."""
    return [node for node, _parent, depth in walk(root, visible_only=True) if depth == level]


def path_to(root: Node, target: Node) -> list[Node]:
    """Ancestors of ``target`` from the root down to its parent.

    Empty if ``target`` is the root or not in the tree.
    """
    stack: list[tuple[Node, list[Node]]] = [(root, [])]
    while stack:
        node, ancestors = stack.pop()
        if node is target:
            return ancestors
        for child in reversed(node.children):
            stack.append((child, [*ancestors, node]))
    return []


def parent_of(root: Node, target: Node) -> Node | None:
    for node, parent, _depth in walk(root):
        if node is target:
            return parent
    return None


def depth_of(root: Node, target: Node) -> int:
    for node, _parent, depth in walk(root):
        if node is target:
            return depth
    msg = "Node is not part of this tree"
    raise ValueError(msg)


def siblings_of(root: Node, target: Node) -> list[Node]:
    """The child list of ``target``'s parent, or ``[root]`` for the root."""
    for node, parent, _depth in walk(root):
        if node is target:
            return [root] if parent is None else parent.children
    return []


def index_path(root: Node, target: Node) -> tuple[int, ...] | None:
    """Child indices leading from the root to ``target``."""
    stack: list[tuple[Node, tuple[int, ...]]] = [(root, ())]
    while stack:
        node, path = stack.pop()
        if node is target:
            return path
        for i, child in enumerate(node.children):
            stack.append((child, (*path, i)))
    return None


def node_at_index_path(root: Node, path: tuple[int, ...]) -> Node:
    """Follow ``path`` as far as it exists and return the deepest node reached."""
    node = root
    for i in path:
        if i >= len(node.children):
            break
        node = node.children[i]
    return node


def find_by_index_path(root: Node, path: tuple[int, ...]) -> Node | None:
    """The node at exactly ``path``, or None if the tree has no such node."""
    node = root
    for i in path:
        if i >= len(node.children):
            return None
        node = node.children[i]
    return node


def expanded_index_paths(root: Node) -> list[tuple[int, ...]]:
    """Index paths of every expanded node."""
    paths: list[tuple[int, ...]] = []
    stack: list[tuple[Node, tuple[int, ...]]] = [(root, ())]
    while stack:
        node, path = stack.pop()
        if node.expanded:
            paths.append(path)
        for i, child in enumerate(node.children):
            stack.append((child, (*path, i)))
    return paths


# --- Cursor movement ---


def move_down(view: TreeView, count: int = 1) -> None:
    """Move ``count`` rows down the visible list, stopping at the last row."""
    rows = visible_nodes(view.root)
    idx = _index_of(rows, view.current)
    if idx is not None:
        view.current = rows[min(idx + count, len(rows) - 1)]


def move_up(view: TreeView, count: int = 1) -> None:
    """Move ``count`` rows up the visible list, stopping at the first row."""
    rows = visible_nodes(view.root)
    idx = _index_of(rows, view.current)
    if idx is not None:
        view.current = rows[max(idx - count, 0)]


def move_up_same_level(view: TreeView) -> None:
    """Move to the previous visible node with the same depth."""
    nodes = _level_peers(view)
    idx = _index_of(nodes, view.current)
    if idx is not None and idx > 0:
        view.current = nodes[idx - 1]


def move_down_same_level(view: TreeView) -> None:
    """Move to the next visible node with the same depth."""
    nodes = _level_peers(view)
    idx = _index_of(nodes, view.current)
    if idx is not None and idx < len(nodes) - 1:
        view.current = nodes[idx + 1]


def collapse_or_move_to_parent(view: TreeView) -> None:
    current = view.current
    if current.children and current.expanded:
        current.expanded = False
    else:
        move_to_parent(view)


def expand_or_move_to_first_child(view: TreeView) -> None:
    current = view.current
    if current.children:
        if current.expanded:
            view.current = current.children[0]
        else:
            current.expanded = True


def move_to_parent(view: TreeView) -> None:
    parent = parent_of(view.root, view.current)
    if parent is not None:
        view.current = parent


def move_to_first_child(view: TreeView) -> None:
    """Expand the current node and step onto its first child."""
    current = view.current
    if current.children:
        current.expanded = True
        view.current = current.children[0]


def move_to_first_sibling(view: TreeView) -> None:
    siblings = siblings_of(view.root, view.current)
    if siblings:
        view.current = siblings[0]


def move_to_last_sibling(view: TreeView) -> None:
    siblings = siblings_of(view.root, view.current)
    if siblings:
        view.current = siblings[-1]


def expand_current_and_siblings(view: TreeView) -> None:
    for sibling in siblings_of(view.root, view.current):
        sibling.expanded = True


def collapse_current_and_siblings(view: TreeView) -> None:
    for sibling in siblings_of(view.root, view.current):
        sibling.expanded = False


def toggle_current(view: TreeView) -> None:
    current = view.current
    if current.children:
        current.expanded = not current.expanded


def jump_to_root(view: TreeView) -> None:
    view.current = view.root


def jump_to_last_visible(view: TreeView) -> None:
    view.current = visible_nodes(view.root)[-1]


def expand_recursive(view: TreeView) -> None:
    """Expand the current node and every node below it."""
    _set_subtree_expanded(view.current, expanded=True)


def collapse_recursive(view: TreeView) -> None:
    """Collapse the current node and every node below it."""
    _set_subtree_expanded(view.current, expanded=False)


def expand_path_to(view: TreeView, target: Node) -> None:
    """Expand every ancestor of ``target``, root included."""
    for ancestor in path_to(view.root, target):
        ancestor.expanded = True
    if target is view.root:
        target.expanded = True


def _set_subtree_expanded(node: Node, *, expanded: bool) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        current.expanded = expanded
        stack.extend(current.children)


def _index_of(nodes: list[Node], target: Node) -> int | None:
    for i, node in enumerate(nodes):
        if node is target:
            return i
    return None


def _level_peers(view: TreeView) -> list[Node]:
    """Visible nodes at the cursor's depth; empty if the cursor is not in the tree."""
    for node, _parent, depth in walk(view.root):
        if node is view.current:
            return visible_nodes_at_level(view.root, depth)
    return []
