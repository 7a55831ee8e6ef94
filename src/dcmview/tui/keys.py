"""Key bindings of the terminal browser.

Keys are the strings returned by curses ``getkey()``.
"""

# Browser actions handled by the front-end itself.
QUIT = "quit"
HELP = "help"
SEARCH = "search"
EDIT = "edit"

UI_ACTIONS: dict[str, str] = {
    "q": QUIT,
    "\x1b": QUIT,
    "?": HELP,
    "/": SEARCH,
    "i": EDIT,
}

# Keys bound to BrowserSession commands.
SESSION_COMMANDS: dict[str, str] = {
    "1": "mode_file",
    "2": "mode_tag",
    "3": "mode_tag_diff",
    "k": "move_up",
    "KEY_UP": "move_up",
    "\x10": "move_up",  # ctrl+p
    "j": "move_down",
    "KEY_DOWN": "move_down",
    "\x0e": "move_down",  # ctrl+n
    "K": "move_up_same_level",
    "KEY_SR": "move_up_same_level",
    "J": "move_down_same_level",
    "KEY_SF": "move_down_same_level",
    "h": "collapse_or_move_to_parent",
    "KEY_LEFT": "collapse_or_move_to_parent",
    "l": "expand_or_move_to_first_child",
    "KEY_RIGHT": "expand_or_move_to_first_child",
    "H": "move_to_parent",
    "KEY_SLEFT": "move_to_parent",
    "L": "move_to_first_child",
    "KEY_SRIGHT": "move_to_first_child",
    "\x15": "half_page_up",  # ctrl+u
    "\x04": "half_page_down",  # ctrl+d
    "\x06": "page_down",  # ctrl+f
    "KEY_NPAGE": "page_down",
    "\x02": "page_up",  # ctrl+b
    "KEY_PPAGE": "page_up",
    "g": "jump_to_root",
    "KEY_HOME": "jump_to_root",
    "G": "jump_to_last_visible",
    "KEY_END": "jump_to_last_visible",
    "0": "move_to_first_sibling",
    "^": "move_to_first_sibling",
    "$": "move_to_last_sibling",
    "c": "collapse_siblings",
    "e": "expand_siblings",
    "C": "collapse_recursive",
    "E": "expand_recursive",
    "\n": "toggle",
    " ": "toggle",
    "n": "search_next",
    "N": "search_prev",
}

ENTER_KEYS = frozenset({"\n", "\r", "KEY_ENTER"})
BACKSPACE_KEYS = frozenset({"KEY_BACKSPACE", "\x7f", "\b"})
ESCAPE_KEY = "\x1b"

HELP_TEXT = """\
Navigation:
  q/Esc                - Quit
  1                    - Sort tree by filename
  2                    - Sort tree by tags
  3                    - Sort tree by tags, only showing tags with different values
  i                    - Edit value of selected tag
  /                    - Enter search mode
  ?                    - Show help

  Enter/Space          - Toggle expand/collapse
  j/down/ctrl+n        - Move down visible tree structure over all hierarchy levels
  k/up/ctrl+p          - Move up visible tree structure over all hierarchy levels
  h/left               - Move to parent or close node
  l/right              - Expand node or move to first child
  H/shift+left         - Move to parent
  L/shift+right        - Move to first child (expand if collapsed)
  J/shift+down         - Move to next node on the same level
  K/shift+up           - Move to previous node on the same level
  g/Home               - Move to first element
  G/End                - Move to last element
  0/^                  - Move to first sibling
  $                    - Move to last sibling
  c                    - Collapse current node and siblings
  e                    - Expand current node and siblings
  E                    - Expand current node recursively
  C                    - Collapse current node recursively

  ctrl+u               - Move half page up
  ctrl+d               - Move half page down
  ctrl+f/page-down     - Move page down
  ctrl+b/page-up       - Move page up

  n                    - Search for next occurrence if search text present
  N                    - Search for previous occurrence if search text present
"""
