"""Project dataset entries into a node tree under a grouping mode."""

from collections.abc import Sequence

from loguru import logger

from dcmview.config import MIN_DISTINCT_VALUES, VALUE_DISPLAY_LIMIT
from dcmview.core.tree.labels import (
    element_label,
    group_label,
    occurrence_label,
    tag_label,
    value_text,
)
from dcmview.errors import ConfigurationError
from dcmview.models.node import GroupingMode, Node
from dcmview.models.record import DatasetEntry, TagKey


def build_tree(
    root_label: str,
    entries: Sequence[DatasetEntry],
    mode: GroupingMode = GroupingMode.BY_FILE,
    *,
    limit: int = VALUE_DISPLAY_LIMIT,
) -> Node:
    """Build a fresh tree for the given entries.

    Args:
        root_label: Label of the root node (ignored for a single file, whose
            node becomes the root).
        entries: Dataset entries in display order.
        mode: Grouping mode. The by-tag modes fall back to by-file for a
            single entry.
        limit: Max characters of a value shown in a label.

    Returns:
        The root node; every node starts collapsed.
    """
    if not entries:
        msg = "no records to display"
        raise ConfigurationError(msg)

    if mode is GroupingMode.BY_FILE or len(entries) == 1:
        root = build_by_file(root_label, entries, limit=limit)
    elif mode is GroupingMode.BY_TAG:
        root = build_by_tag(root_label, entries, limit=limit)
    else:
        root = build_by_tag(
            root_label, entries, min_distinct_values=MIN_DISTINCT_VALUES, limit=limit
        )

    logger.debug("Built {} tree with {} nodes", mode.value, _count_nodes(root))
    return root


def build_by_file(
    root_label: str,
    entries: Sequence[DatasetEntry],
    *,
    limit: int = VALUE_DISPLAY_LIMIT,
) -> Node:
    """One node per file, group nodes opened whenever the group id changes."""
    root = Node(label=root_label)
    for entry in entries:
        file_node = Node(label=entry.filename)
        if len(entries) == 1:
            root = file_node
        else:
            root.add_child(file_node)

        group_node: Node | None = None
        current_group: int | None = None
        for element in entry.elements:
            if group_node is None or element.tag.group != current_group:
                current_group = element.tag.group
                group_node = file_node.add_child(Node(label=group_label(current_group)))
            group_node.add_child(
                Node(label=element_label(element, limit=limit), reference=element)
            )
    return root


def distinct_values(entries: Sequence[DatasetEntry]) -> dict[TagKey, set[str]]:
    """Map each tag to the set of value texts it takes across all entries."""
    values: dict[TagKey, set[str]] = {}
    for entry in entries:
        for element in entry.elements:
            values.setdefault(element.tag, set()).add(value_text(element))
    return values


def build_by_tag(
    root_label: str,
    entries: Sequence[DatasetEntry],
    *,
    min_distinct_values: int = 1,
    limit: int = VALUE_DISPLAY_LIMIT,
) -> Node:
    """Group nodes, then one node per tag with one child per file occurrence.

    Tags with fewer than ``min_distinct_values`` different values are left out.
    Group nodes are created on first sighting even when all of their tags are
    left out.
    """
    values = distinct_values(entries) if min_distinct_values > 1 else {}

    root = Node(label=root_label)
    group_nodes: dict[int, Node] = {}
    tag_nodes: dict[TagKey, Node] = {}
    for entry in entries:
        for element in entry.elements:
            group = element.tag.group
            group_node = group_nodes.get(group)
            if group_node is None:
                group_node = root.add_child(Node(label=group_label(group)))
                group_nodes[group] = group_node

            if values and len(values[element.tag]) < min_distinct_values:
                continue

            tag_node = tag_nodes.get(element.tag)
            if tag_node is None:
                tag_node = group_node.add_child(
                    Node(label=tag_label(element), reference=element)
                )
                tag_nodes[element.tag] = tag_node

            tag_node.add_child(
                Node(
                    label=occurrence_label(entry.filename, element, limit=limit),
                    reference=element,
                )
            )
    return root


def _count_nodes(root: Node) -> int:
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.children)
    return count
