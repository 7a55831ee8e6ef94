"""Tree model shared by the builder, the navigation and the search."""

from dataclasses import dataclass, field
from enum import Enum

from dcmview.models.record import Element


class GroupingMode(str, Enum):
    """How a record set is projected into a tree."""

    BY_FILE = "file"
    BY_TAG = "tag"
    BY_TAG_DIFF = "tag-diff"


@dataclass(eq=False)
class Node:
    """A vertex of the displayed tree.

    Nodes compare by identity: two occurrence nodes with the same label are
    still different positions in the tree.
    """

    label: str
    children: list["Node"] = field(default_factory=list)
    expanded: bool = False
    reference: Element | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, child: "Node") -> "Node":
        self.children.append(child)
        return child


@dataclass(eq=False)
class TreeView:
    """A tree plus the cursor that points into it.

    The cursor starts on the root and must always be a node of this tree.
    """

    root: Node
    current: Node = field(init=False)

    def __post_init__(self) -> None:
        self.current = self.root
