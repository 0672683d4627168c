"""
Input handler module for processing keyboard events.
"""

import curses
import logging
from typing import Callable, Dict, Optional, Union, Final

from ..config import EditorConfig
from ..core.buffer import Buffer, SaveError

logger = logging.getLogger(__name__)

Key = Union[int, str]

CTRL_C: Final[str] = '\x03'
CTRL_S: Final[str] = '\x13'

# curses has no constants for modified arrow keys; match them by terminfo name.
CTRL_LEFT: Final[str] = 'kLFT5'
CTRL_RIGHT: Final[str] = 'kRIT5'
CTRL_UP: Final[str] = 'kUP5'
CTRL_DOWN: Final[str] = 'kDN5'


def key_name(key: Key) -> Optional[str]:
    """Get the terminfo name of a special key, or None for characters."""

    if not isinstance(key, int):
        return None

    try:
        return curses.keyname(key).decode('ascii', errors='replace')
    except (ValueError, curses.error):
        return None


class InputHandler:
    """Handles keyboard input and executes corresponding buffer operations."""

    def __init__(self, buf: Buffer, config: Optional[EditorConfig] = None) -> None:
        self.buffer = buf
        self.config = config or EditorConfig()
        self.command_handlers: Dict[Key, Callable[[], None]] = self._setup_handlers()
        self.named_handlers: Dict[str, Callable[[], None]] = {
            CTRL_LEFT: buf.move_to_line_start,
            CTRL_RIGHT: buf.move_to_line_end,
            CTRL_UP: buf.scroll_up,
            CTRL_DOWN: buf.scroll_down,
        }

    def _setup_handlers(self) -> Dict[Key, Callable[[], None]]:
        """Set up the keyboard command handlers."""

        buf = self.buffer
        return {
            curses.KEY_LEFT: buf.move_left,
            curses.KEY_RIGHT: buf.move_right,
            curses.KEY_UP: buf.move_up,
            curses.KEY_DOWN: buf.move_down,
            curses.KEY_HOME: buf.move_to_line_start,
            curses.KEY_END: buf.move_to_line_end,

            curses.KEY_DC: buf.delete_grapheme_at_cursor,
            curses.KEY_BACKSPACE: buf.backspace,
            '\x7f': buf.backspace,
            '\x08': buf.backspace,

            curses.KEY_ENTER: buf.split_line_at_cursor,
            '\n': buf.split_line_at_cursor,
            '\r': buf.split_line_at_cursor,
            '\t': self._handle_tab,

            CTRL_S: self._save,
        }

    def handle_input(self, key: Key) -> bool:
        """Handle a single keyboard input. Returns False if should quit."""

        if key == CTRL_C:
            logger.info("Exit requested")
            return False

        handler = self.command_handlers.get(key)
        if handler is None:
            name = key_name(key)
            if name is not None:
                handler = self.named_handlers.get(name)

        if handler is not None:
            self.buffer.status_message = ""
            handler()
            return True

        if isinstance(key, str) and key.isprintable():
            self.buffer.status_message = ""
            self.buffer.type_text(key)

        return True

    def _handle_tab(self) -> None:
        """Insert spaces up to the next tab stop."""

        self.buffer.insert_tab(self.config.tab_width)

    def _save(self) -> None:
        """Save the buffer, reporting the outcome in the status message."""

        try:
            self.buffer.save_file()
            self.buffer.status_message = f"Saved: {self.buffer.filename}"
        except SaveError as e:
            self.buffer.status_message = f"Error saving: {e}"
