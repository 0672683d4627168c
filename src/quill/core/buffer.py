"""
Buffer module for the line store, cursor and viewport of an open file.
"""

import logging
import os
from typing import List, Optional

from .cursor import Cursor
from .viewport import Viewport
from .text import (
    CRLF,
    graphemes,
    grapheme_count,
    grapheme_offset,
    grapheme_index_at,
    split_lines,
    join_lines,
)

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"

LINE_BREAKS = ('\n', '\r', '\r\n')


class SaveError(IOError):
    """Raised when the buffer cannot be written back to disk."""


class Buffer:
    """
    Editable sequence of lines with a grapheme-addressed cursor.

    The line list is never empty. Every navigation and edit operation leaves
    the cursor on an existing line and at most one past the last grapheme of
    that line, and re-clamps the viewport to the cursor.
    """

    def __init__(self, lines: Optional[List[str]] = None, filename: Optional[str] = None,
                 terminator: str = CRLF) -> None:
        self.lines: List[str] = list(lines) if lines else ['']
        self.filename = filename
        self.terminator = terminator
        self.modified = False
        self.status_message = ""

        self.cursor = Cursor()
        self.viewport = Viewport()
        self.follow_cursor = True

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, index: int) -> str:
        """Get a line of text."""

        return self.lines[index]

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor.line]

    @property
    def current_line_length(self) -> int:
        return grapheme_count(self.current_line)

    @property
    def cursor_offset(self) -> int:
        """Code point offset of the cursor in the current line."""

        return grapheme_offset(self.current_line, self.cursor.index)

    @property
    def display_name(self) -> str:
        return os.path.basename(self.filename) if self.filename else UNTITLED

    @property
    def title(self) -> str:
        return f"*{self.display_name}" if self.modified else self.display_name

    @property
    def text(self) -> str:
        return join_lines(self.lines, self.terminator)

    def _follow(self) -> None:
        if self.follow_cursor:
            self.viewport.clamp(self.cursor.line, self.cursor.index, self.current_line)

    def set_text_size(self, rows: int, cols: int) -> None:
        """
        Record the size of the text area.

        Only the axis whose size changed is re-clamped, so a gutter growing by
        a digit does not undo a manual vertical scroll.
        """

        viewport = self.viewport
        old_rows, old_cols, had_area = viewport.rows, viewport.cols, viewport.has_area
        if not viewport.resize(rows, cols):
            return

        logger.debug("Text area resized to %dx%d", viewport.cols, viewport.rows)
        if not self.follow_cursor:
            return

        if viewport.rows != old_rows or not had_area:
            viewport.clamp_vertical(self.cursor.line)
        if viewport.cols != old_cols or not had_area:
            viewport.clamp_horizontal(self.cursor.index, self.current_line)

    def move_right(self) -> None:
        """Move one grapheme right, wrapping onto the start of the next line."""

        if self.cursor.index < self.current_line_length:
            self.cursor.index += 1
        elif self.cursor.line < self.line_count - 1:
            self.cursor.line += 1
            self.cursor.index = 0

        self.cursor.collapse()
        self._follow()

    def move_left(self) -> bool:
        """
        Move one grapheme left, wrapping onto the end of the previous line.

        Returns:
            bool: False if the cursor was already at the start of the document
        """

        moved = True
        if self.cursor.index > 0:
            self.cursor.index -= 1
        elif self.cursor.line > 0:
            self.cursor.line -= 1
            self.cursor.index = self.current_line_length
        else:
            moved = False

        self.cursor.collapse()
        self._follow()
        return moved

    def move_up(self) -> None:
        """Move one line up, restoring the preferred column where possible."""

        if self.cursor.line > 0:
            self.cursor.line -= 1
            self.cursor.resolve(self.current_line_length)
            self._follow()

    def move_down(self) -> None:
        """Move one line down, restoring the preferred column where possible."""

        if self.cursor.line < self.line_count - 1:
            self.cursor.line += 1
            self.cursor.resolve(self.current_line_length)
            self._follow()

    def move_to_line_start(self) -> None:
        self.cursor.index = 0
        self.cursor.collapse()
        self._follow()

    def move_to_line_end(self) -> None:
        self.cursor.index = self.current_line_length
        self.cursor.collapse()
        self._follow()

    def insert_grapheme(self, text: str) -> None:
        """
        Insert text at the cursor without moving the cursor.

        Raises:
            ValueError: If the text contains a line break
        """

        if not text:
            return
        if '\n' in text or '\r' in text:
            raise ValueError("Line breaks are inserted with split_line_at_cursor")

        line = self.current_line
        offset = grapheme_offset(line, self.cursor.index)
        self.lines[self.cursor.line] = line[:offset] + text + line[offset:]

        self.modified = True
        self.cursor.collapse()
        self._follow()

    def type_text(self, text: str) -> None:
        """Insert typed text grapheme by grapheme, advancing the cursor."""

        for cluster in graphemes(text):
            if cluster in LINE_BREAKS:
                self.split_line_at_cursor()
                continue

            offset = self.cursor_offset
            self.insert_grapheme(cluster)

            # A combining mark joins the grapheme before the cursor.
            target = grapheme_index_at(self.current_line, offset + len(cluster))
            while self.cursor.index < target:
                self.move_right()

    def insert_tab(self, width: int) -> None:
        """Insert spaces up to the next tab stop."""

        width = max(1, width)
        for _ in range(self.cursor.index % width, width):
            self.insert_grapheme(' ')
            self.move_right()

    def split_line_at_cursor(self) -> None:
        """Break the current line in two at the cursor."""

        line = self.current_line
        offset = grapheme_offset(line, self.cursor.index)

        self.lines[self.cursor.line] = line[:offset]
        self.lines.insert(self.cursor.line + 1, line[offset:])

        self.cursor.line += 1
        self.cursor.index = 0
        self.cursor.collapse()
        self.modified = True
        self._follow()

    def delete_grapheme_at_cursor(self) -> None:
        """
        Delete the grapheme under the cursor.

        At the end of a line the next line is joined onto it instead. At the
        end of the last line nothing happens.
        """

        line = self.current_line
        length = grapheme_count(line)

        if self.cursor.index < length:
            start = grapheme_offset(line, self.cursor.index)
            end = grapheme_offset(line, self.cursor.index + 1)
            self.lines[self.cursor.line] = line[:start] + line[end:]
            self.modified = True
        elif self.cursor.line < self.line_count - 1:
            next_line = self.lines.pop(self.cursor.line + 1)
            self.lines[self.cursor.line] = line + next_line
            self.modified = True

        self.cursor.collapse()
        self._follow()

    def backspace(self) -> bool:
        """Delete the grapheme before the cursor."""

        if not self.move_left():
            return False

        self.delete_grapheme_at_cursor()
        return True

    def scroll_up(self) -> None:
        """Scroll the viewport one line up without moving the cursor."""

        self.viewport.scroll(-1, self.line_count)

    def scroll_down(self) -> None:
        """Scroll the viewport one line down without moving the cursor."""

        self.viewport.scroll(1, self.line_count)

    def load_file(self, filename: str) -> None:
        """
        Load lines from a file.

        A file that does not exist or cannot be read leaves the buffer with a
        single empty line.
        """

        self.filename = filename
        self.modified = False
        self.cursor = Cursor()
        self.viewport = Viewport(rows=self.viewport.rows, cols=self.viewport.cols)

        try:
            with open(filename, 'r', encoding='utf-8', errors='replace', newline='') as f:
                content = f.read()
        except OSError as e:
            logger.info("Starting empty buffer for %s: %s", filename, e)
            self.lines = ['']
            return

        self.lines = split_lines(content)
        logger.info("Loaded %s (%d lines)", filename, len(self.lines))

    def save_file(self, filename: Optional[str] = None) -> bool:
        """
        Save the lines to a file, joined by the buffer's line terminator.

        Args:
            filename: Optional filename to save to. If None, uses current filename.

        Returns:
            bool: True if save was successful

        Raises:
            SaveError: If the file could not be written. The buffer stays modified.
        """

        save_filename = filename or self.filename
        if not save_filename:
            raise SaveError("No filename specified")

        try:
            with open(save_filename, 'w', encoding='utf-8', newline='') as f:
                f.write(self.text)
        except OSError as e:
            logger.error("Failed to save %s: %s", save_filename, e)
            raise SaveError(f"Failed to save file: {e}") from e

        self.filename = save_filename
        self.modified = False
        logger.info("Saved %s (%d lines)", save_filename, len(self.lines))
        return True

    @classmethod
    def from_file(cls, filename: str, terminator: str = CRLF) -> 'Buffer':
        buf = cls(terminator=terminator)
        buf.load_file(filename)
        return buf
