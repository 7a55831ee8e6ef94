"""Curses front-end for a BrowserSession.

Key handling is kept apart from drawing so that it can run without a
terminal: ``Browser.handle_key`` only touches the session and the input line.
"""

import curses
from dataclasses import replace
from enum import Enum

from dcmview.config import Settings
from dcmview.core.tree.labels import value_text
from dcmview.core.tree.render import format_row
from dcmview.session import BrowserSession
from dcmview.tui import keys


class InputMode(Enum):
    BROWSE = "browse"
    SEARCH = "search"
    EDIT = "edit"
    HELP = "help"


# Header, status line and input line.
_CHROME_LINES = 3

# The help overlay needs this many columns.
_MIN_WIDTH = 20


class Browser:
    """Interactive tree browser state: input mode, input line and scroll offset."""

    def __init__(self, session: BrowserSession) -> None:
        self.session = session
        self.mode = InputMode.BROWSE
        self.input_text = ""
        self.scroll_offset = 0
        self.help_offset = 0
        self.running = True

    # --- Key handling ---

    def handle_key(self, key: str) -> None:
        if self.mode is InputMode.HELP:
            self._handle_help_key(key)
        elif self.mode is InputMode.SEARCH:
            self._handle_search_key(key)
        elif self.mode is InputMode.EDIT:
            self._handle_edit_key(key)
        else:
            self._handle_browse_key(key)

    def _handle_browse_key(self, key: str) -> None:
        action = keys.UI_ACTIONS.get(key)
        if action == keys.QUIT:
            self.running = False
        elif action == keys.HELP:
            self.mode = InputMode.HELP
            self.help_offset = 0
        elif action == keys.SEARCH:
            self.mode = InputMode.SEARCH
            self.input_text = self.session.search_text or ""
        elif action == keys.EDIT:
            element = self.session.current.reference
            if element is None or not self.session.can_edit_current():
                self.session.status = "nothing to edit"
                return
            self.mode = InputMode.EDIT
            self.input_text = value_text(element)
        else:
            command = keys.SESSION_COMMANDS.get(key)
            if command is not None:
                self.session.run(command)

    def _handle_search_key(self, key: str) -> None:
        if key == keys.ESCAPE_KEY:
            self.mode = InputMode.BROWSE
            self.input_text = ""
            self.session.clear_search()
            return
        if key in keys.ENTER_KEYS:
            self.mode = InputMode.BROWSE
            return
        if not self._edit_input(key):
            return
        if not self.input_text:
            self.mode = InputMode.BROWSE
            self.session.clear_search()
            return
        self.session.search(self.input_text)

    def _handle_edit_key(self, key: str) -> None:
        if key == keys.ESCAPE_KEY:
            self.mode = InputMode.BROWSE
            self.input_text = ""
            self.session.status = "edit cancelled"
            return
        if key in keys.ENTER_KEYS:
            self.mode = InputMode.BROWSE
            self.session.edit_current_value(self.input_text)
            self.input_text = ""
            return
        self._edit_input(key)

    def _handle_help_key(self, key: str) -> None:
        if key in ("?", "q", keys.ESCAPE_KEY):
            self.mode = InputMode.BROWSE
        elif key in ("k", "KEY_UP"):
            self.help_offset = max(self.help_offset - 1, 0)
        elif key in ("j", "KEY_DOWN"):
            max_offset = max(len(keys.HELP_TEXT.splitlines()) - 3, 0)
            self.help_offset = min(self.help_offset + 1, max_offset)

    def _edit_input(self, key: str) -> bool:
        """Apply a key to the input line; returns True if the text changed."""
        if key in keys.BACKSPACE_KEYS:
            self.input_text = self.input_text[:-1]
            return True
        if len(key) == 1 and key.isprintable():
            self.input_text += key
            return True
        return False

    # --- Drawing ---

    def _ensure_cursor_visible(self, cursor_index: int, height: int) -> None:
        if cursor_index < self.scroll_offset:
            self.scroll_offset = cursor_index
        elif cursor_index >= self.scroll_offset + height:
            self.scroll_offset = cursor_index - height + 1

    def draw(self, stdscr: "curses.window") -> None:
        stdscr.erase()
        h, w = stdscr.getmaxyx()
        if h < _CHROME_LINES + 1 or w < _MIN_WIDTH:
            if h > 0 and w > 1:
                stdscr.addnstr(0, 0, "terminal too small", w - 1)
            stdscr.refresh()
            return
        list_height = h - _CHROME_LINES
        self.session.settings = _with_page_size(self.session, list_height)

        stdscr.addnstr(0, 0, f"dcmview - {self.session.root_label}", w - 1, curses.A_BOLD)

        rows = self.session.visible_rows()
        cursor_index = next(
            (i for i, (node, _depth) in enumerate(rows) if node is self.session.current), 0
        )
        self._ensure_cursor_visible(cursor_index, list_height)
        visible = rows[self.scroll_offset : self.scroll_offset + list_height]
        for line_y, (node, depth) in enumerate(visible, start=1):
            attr = curses.A_REVERSE if node is self.session.current else curses.A_NORMAL
            stdscr.addnstr(line_y, 0, format_row(node, depth), w - 1, attr)

        stdscr.addnstr(h - 2, 0, f"Value: {self.session.status}", w - 1)
        if self.mode is InputMode.SEARCH:
            stdscr.addnstr(h - 1, 0, f"/{self.input_text}", w - 1)
        elif self.mode is InputMode.EDIT:
            stdscr.addnstr(h - 1, 0, f"edit: {self.input_text}", w - 1)
        else:
            stdscr.addnstr(h - 1, 0, "? help  q quit", w - 1, curses.A_DIM)

        if self.mode is InputMode.HELP:
            self._draw_help(stdscr, h, w)
        stdscr.refresh()

    def _draw_help(self, stdscr: "curses.window", h: int, w: int) -> None:
        lines = keys.HELP_TEXT.splitlines()
        height = min(max(int(h * 0.7), 3), h)
        width = min(max(int(w * 0.6), _MIN_WIDTH), w)
        top = (h - height) // 2
        left = (w - width) // 2
        win = stdscr.derwin(height, width, top, left)
        win.erase()
        win.box()
        win.addnstr(0, 2, " dcmview help ", width - 4, curses.A_BOLD)
        for i, line in enumerate(lines[self.help_offset : self.help_offset + height - 2]):
            win.addnstr(i + 1, 2, line, width - 4)


def _with_page_size(session: BrowserSession, page_size: int) -> Settings:
    if session.settings.page_size == page_size:
        return session.settings
    return replace(session.settings, page_size=page_size)


def run_browser(session: BrowserSession) -> None:
    """Take over the terminal until the user quits."""

    def _main(stdscr: "curses.window") -> None:
        curses.curs_set(0)
        browser = Browser(session)
        while browser.running:
            browser.draw(stdscr)
            try:
                key = stdscr.getkey()
            except curses.error:
                continue
            browser.handle_key(key)

    curses.wrapper(_main)
