"""Incremental substring search over the whole tree."""

from dcmview.config import MIN_SEARCH_LENGTH
from dcmview.core.tree.navigation import expand_path_to, walk
from dcmview.models.node import Node, TreeView


def find_matches(view: TreeView, query: str) -> tuple[list[Node], int]:
    """Find nodes whose label contains ``query``, ignoring case and expand state.

    Returns:
        Tuple of (matches in walk order, anchor index). The anchor is the
        cursor's index when the cursor matches, otherwise the index of the last
        match before the cursor, or 0 when no match precedes it.
    """
    needle = query.lower()
    if not needle:
        return [], 0

    matches: list[Node] = []
    anchor = 0
    for node, _parent, _depth in walk(view.root):
        if needle in node.label.lower():
            matches.append(node)
        if node is view.current and matches:
            anchor = len(matches) - 1
    return matches, anchor


def jump_to_nth(
    view: TreeView,
    query: str,
    offset: int,
    *,
    min_length: int = MIN_SEARCH_LENGTH,
) -> bool:
    """Move the cursor ``offset`` matches away from the anchor match.

    Wraps around in both directions. The ancestors of the new cursor node are
    expanded so that it is visible.

    Returns:
        True if the cursor moved.
    """
    if len(query) < min_length:
        return False

    matches, anchor = find_matches(view, query)
    if not matches:
        return False

    target = matches[(anchor + len(matches) + offset) % len(matches)]
    if target is view.current:
        return False

    view.current = target
    expand_path_to(view, target)
    return True


def jump_to_next(view: TreeView, query: str, *, min_length: int = MIN_SEARCH_LENGTH) -> bool:
    return jump_to_nth(view, query, 1, min_length=min_length)


def jump_to_prev(view: TreeView, query: str, *, min_length: int = MIN_SEARCH_LENGTH) -> bool:
    return jump_to_nth(view, query, -1, min_length=min_length)
