"""
Scrollable window over the line store.
"""

from dataclasses import dataclass
from typing import Optional

from .text import char_width, display_width, grapheme_slice


@dataclass
class Viewport:
    """
    The visible rectangle of the document.

    `top_line` is the first visible line, `left` the first visible grapheme
    column. `rows` and `cols` give the size of the text area.
    """
    top_line: int = 0
    left: int = 0
    rows: int = 0
    cols: int = 0

    @property
    def has_area(self) -> bool:
        return self.rows >= 1 and self.cols >= 1

    def clamp(self, line: int, index: int, text: Optional[str] = None) -> None:
        """
        Shift the window just enough to contain the given cursor position.

        The window is never re-centred. Does nothing while the text area has
        no rows or no columns.

        Args:
            line: Cursor line
            index: Cursor grapheme index
            text: The cursor's line; when given, wide graphemes are counted by
                the terminal cells they occupy
        """

        self.clamp_vertical(line)
        self.clamp_horizontal(index, text)

    def clamp_vertical(self, line: int) -> None:
        if not self.has_area:
            return

        if line < self.top_line:
            self.top_line = line
        elif line > self.top_line + self.rows - 1:
            self.top_line = line - self.rows + 1

    def clamp_horizontal(self, index: int, text: Optional[str] = None) -> None:
        if not self.has_area:
            return

        if index < self.left:
            self.left = index
        elif index > self.left + self.cols - 1:
            self.left = index - self.cols + 1

        if text is None:
            return

        # Past the end of the line the cursor is drawn as one space.
        cursor_cells = char_width(grapheme_slice(text, index, index + 1)) or 1
        while (self.left < index
               and display_width(grapheme_slice(text, self.left, index)) + cursor_cells > self.cols):
            self.left += 1

    def contains(self, line: int, index: int) -> bool:
        """Check whether a cursor position is inside the window."""

        return (self.top_line <= line < self.bottom_line
                and self.left <= index < self.left + self.cols)

    def resize(self, rows: int, cols: int) -> bool:
        """Set the text area size. Returns True if it changed."""

        rows, cols = max(0, rows), max(0, cols)
        if (rows, cols) == (self.rows, self.cols):
            return False

        self.rows, self.cols = rows, cols
        return True

    def scroll(self, delta: int, line_count: int) -> None:
        """Move the window vertically, keeping at least one line in view."""

        last = max(0, line_count - 1)
        self.top_line = max(0, min(self.top_line + delta, last))

    @property
    def bottom_line(self) -> int:
        """Index one past the last visible line."""

        return self.top_line + self.rows
