"""Browser session: the view state every command operates on."""

from collections.abc import Callable, Sequence

from loguru import logger

from dcmview.config import SEQUENCE_VR, Settings
from dcmview.core.importer.json_reader import value_length
from dcmview.core.search import searcher
from dcmview.core.tree import navigation
from dcmview.core.tree.builder import build_tree
from dcmview.models.node import GroupingMode, Node, TreeView
from dcmview.models.record import DatasetEntry

_MODE_STATUS = {
    GroupingMode.BY_FILE: "sorted by filename",
    GroupingMode.BY_TAG: "sorted by tag",
    GroupingMode.BY_TAG_DIFF: "sorted by tag, displaying only different tags",
}

# Commands that only need the tree view, with the status text they leave behind.
_VIEW_COMMANDS: dict[str, tuple[Callable[[TreeView], None], str]] = {
    "move_up_same_level": (navigation.move_up_same_level, "previous node on this level"),
    "move_down_same_level": (navigation.move_down_same_level, "next node on this level"),
    "collapse_or_move_to_parent": (navigation.collapse_or_move_to_parent, "collapse or up"),
    "expand_or_move_to_first_child": (
        navigation.expand_or_move_to_first_child,
        "expand or down",
    ),
    "move_to_parent": (navigation.move_to_parent, "move to parent"),
    "move_to_first_child": (navigation.move_to_first_child, "move to first child"),
    "move_to_first_sibling": (navigation.move_to_first_sibling, "move to first sibling"),
    "move_to_last_sibling": (navigation.move_to_last_sibling, "move to last sibling"),
    "expand_siblings": (navigation.expand_current_and_siblings, "expanded node and siblings"),
    "collapse_siblings": (
        navigation.collapse_current_and_siblings,
        "collapsed node and siblings",
    ),
    "expand_recursive": (navigation.expand_recursive, "expanded node recursively"),
    "collapse_recursive": (navigation.collapse_recursive, "collapsed node recursively"),
    "toggle": (navigation.toggle_current, "toggled node"),
    "jump_to_root": (navigation.jump_to_root, "move to first"),
    "jump_to_last_visible": (navigation.jump_to_last_visible, "move to last"),
}


class BrowserSession:
    """Dataset entries plus grouping mode, tree, cursor and search text.

    One session is driven by one command at a time; every command runs to
    completion before the next one.
    """

    def __init__(
        self,
        entries: Sequence[DatasetEntry],
        *,
        root_label: str,
        settings: Settings | None = None,
        mode: GroupingMode = GroupingMode.BY_FILE,
    ) -> None:
        self.entries = list(entries)
        self.root_label = root_label
        self.settings = settings or Settings()
        self.search_text: str | None = None
        self.mode = mode
        self.view = self._build(mode)
        self.status = _MODE_STATUS[mode]

    @property
    def root(self) -> Node:
        return self.view.root

    @property
    def current(self) -> Node:
        return self.view.current

    def _build(self, mode: GroupingMode) -> TreeView:
        root = build_tree(
            self.root_label, self.entries, mode, limit=self.settings.value_display_limit
        )
        root.expanded = True
        if mode is not GroupingMode.BY_FILE:
            for child in root.children:
                child.expanded = True
        return TreeView(root=root)

    def set_mode(self, mode: GroupingMode) -> None:
        """Rebuild the tree; cursor and expand state start over."""
        self.mode = mode
        self.view = self._build(mode)
        self.status = _MODE_STATUS[mode]

    def visible_rows(self) -> list[tuple[Node, int]]:
        return navigation.visible_rows(self.view.root)

    # --- Commands ---

    def run(self, command: str) -> None:
        """Run a named command (as bound to a key)."""
        if command in _VIEW_COMMANDS:
            func, status = _VIEW_COMMANDS[command]
            func(self.view)
            self.status = status
            return

        page = self.settings.page_size
        commands: dict[str, Callable[[], object]] = {
            "move_down": lambda: self.move_down(1),
            "move_up": lambda: self.move_up(1),
            "half_page_down": lambda: self.move_down(max(page // 2, 1)),
            "half_page_up": lambda: self.move_up(max(page // 2, 1)),
            "page_down": lambda: self.move_down(page),
            "page_up": lambda: self.move_up(page),
            "mode_file": lambda: self.set_mode(GroupingMode.BY_FILE),
            "mode_tag": lambda: self.set_mode(GroupingMode.BY_TAG),
            "mode_tag_diff": lambda: self.set_mode(GroupingMode.BY_TAG_DIFF),
            "search_next": self.search_next,
            "search_prev": self.search_prev,
        }
        func = commands.get(command)
        if func is None:
            msg = f"Unknown command: {command!r}"
            raise ValueError(msg)
        func()

    def move_down(self, count: int = 1) -> None:
        navigation.move_down(self.view, count)
        self.status = "down"

    def move_up(self, count: int = 1) -> None:
        navigation.move_up(self.view, count)
        self.status = "up"

    # --- Search ---

    def search(self, text: str) -> bool:
        """Search as you type: jump to the match nearest to the cursor."""
        self.search_text = text or None
        return self._jump(0)

    def search_next(self) -> bool:
        return self._jump(1)

    def search_prev(self) -> bool:
        return self._jump(-1)

    def clear_search(self) -> None:
        self.search_text = None
        self.status = "search cleared"

    def _jump(self, offset: int) -> bool:
        query = self.search_text
        if not query:
            self.status = "nothing to search for"
            return False

        moved = searcher.jump_to_nth(
            self.view, query, offset, min_length=self.settings.min_search_length
        )
        matches, anchor = searcher.find_matches(self.view, query)
        if len(query) < self.settings.min_search_length:
            self.status = f"search: {query}"
        elif not matches:
            self.status = f"search: {query} (no match)"
        else:
            self.status = f"search: {query} ({anchor + 1}/{len(matches)})"
        return moved

    # --- Value editing ---

    def can_edit_current(self) -> bool:
        """True if the cursor is on one occurrence of a non-sequence element."""
        current = self.view.current
        element = current.reference
        return element is not None and not current.children and element.vr != SEQUENCE_VR

    def edit_current_value(self, text: str) -> bool:
        """Replace the value of the element under the cursor.

        Only nodes for a single element occurrence can be edited. The tree is
        rebuilt in the current mode and the cursor and expanded nodes are put
        back where they were, as far as the new tree allows.

        Returns:
            True if a value was changed.
        """
        current = self.view.current
        element = current.reference
        if element is None or not self.can_edit_current():
            self.status = "nothing to edit"
            return False

        value: str | tuple[str, ...] = tuple(text.split("\\")) if "\\" in text else text
        element.value = value
        element.length = value_length(value)
        logger.debug("Edited {} -> {!r}", element.tag, text)

        cursor_path = navigation.index_path(self.view.root, current) or ()
        expanded = navigation.expanded_index_paths(self.view.root)

        self.view = self._build(self.mode)
        for path in expanded:
            node = navigation.find_by_index_path(self.view.root, path)
            if node is not None:
                node.expanded = True
        self.view.current = navigation.node_at_index_path(self.view.root, cursor_path)
        navigation.expand_path_to(self.view, self.view.current)
        self.status = f"edited {element.tag}"
        return True
