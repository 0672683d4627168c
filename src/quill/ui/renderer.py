"""
Composes the title bar, line number gutter and highlighted text into
positioned draw instructions.
"""

from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional, Tuple, Final

from ..core.buffer import Buffer
from ..core.cursor import Cursor
from ..core.syntax import HighlightSpan, SyntaxHighlighter
from ..core.text import display_width, pad_to_width, truncate_to_width
from ..core.viewport import Viewport
from .highlight import highlight_rows
from .theme import Style, Theme

TITLE_HEIGHT: Final[int] = 1


class DrawInstruction(NamedTuple):
    """Text to put at a screen position."""
    y: int
    x: int
    text: str
    style: Style


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything needed to draw a buffer, copied so later edits leave it unchanged."""
    lines: Tuple[str, ...]
    cursor: Cursor
    viewport: Viewport
    title: str
    status: str = ""

    @classmethod
    def of(cls, buf: Buffer) -> 'RenderSnapshot':
        return cls(
            lines=tuple(buf.lines),
            cursor=replace(buf.cursor),
            viewport=replace(buf.viewport),
            title=buf.title,
            status=buf.status_message,
        )


@dataclass
class Frame:
    """The result of one render pass."""
    instructions: List[DrawInstruction]
    gutter_width: int
    text_rows: int
    text_cols: int


def digit_count(number: int) -> int:
    """Number of decimal digits needed to print a non-negative number."""

    return len(str(max(0, number)))


def text_area_size(height: int, width: int, top_line: int) -> Tuple[int, int, int]:
    """
    Lay out the screen below the title bar.

    Returns:
        (rows, cols, gutter_width) of the text area
    """

    rows = max(0, height - TITLE_HEIGHT)
    gutter_width = digit_count(top_line + rows) + 1
    cols = max(0, width - gutter_width)
    return rows, cols, gutter_width


def fit_viewport(buf: Buffer, height: int, width: int) -> None:
    """Size the buffer's viewport for a screen of the given size."""

    # The gutter width depends on the top line, which the resize may move.
    for _ in range(2):
        rows, cols, _ = text_area_size(height, width, buf.viewport.top_line)
        buf.set_text_size(rows, cols)


class Renderer:
    """Turns a snapshot into draw instructions. Holds no editor state."""

    def __init__(self, theme: Theme, highlighter: SyntaxHighlighter, show_cursor: bool = True) -> None:
        self.theme = theme
        self.highlighter = highlighter
        self.show_cursor = show_cursor
        self._spans_key: Optional[Tuple[str, ...]] = None
        self._spans: List[List[HighlightSpan]] = []

    def render(self, snapshot: RenderSnapshot, origin: Tuple[int, int],
               size: Tuple[int, int]) -> Frame:
        """
        Render a snapshot into a rectangle of the screen.

        Args:
            snapshot: The buffer state to draw
            origin: (y, x) of the top left corner
            size: (height, width) of the rectangle

        Returns:
            The frame with its draw instructions
        """

        height, width = size
        rows, cols, gutter_width = text_area_size(height, width, snapshot.viewport.top_line)
        instructions = self.draw_title(snapshot, origin, width) if height > 0 else []

        if rows < 1 or cols < 1:
            return Frame(instructions, gutter_width, rows, cols)

        viewport = replace(snapshot.viewport, rows=rows, cols=cols)
        text_origin = (origin[0] + TITLE_HEIGHT, origin[1])

        instructions.extend(self.draw_line_numbers(snapshot, viewport, text_origin, gutter_width))
        instructions.extend(self.draw_text(snapshot, viewport, (text_origin[0], text_origin[1] + gutter_width)))

        return Frame(instructions, gutter_width, rows, cols)

    def draw_title(self, snapshot: RenderSnapshot, origin: Tuple[int, int],
                   width: int) -> List[DrawInstruction]:
        """Draw the title bar, padded to the full width."""

        header = f"~ {snapshot.title} ~ {snapshot.status}"
        return [DrawInstruction(origin[0], origin[1], pad_to_width(header, width), self.theme.title)]

    def draw_line_numbers(self, snapshot: RenderSnapshot, viewport: Viewport,
                          origin: Tuple[int, int], gutter_width: int) -> List[DrawInstruction]:
        """Draw right-aligned line numbers; rows past the document stay blank."""

        digits = gutter_width - 1
        result = []
        for row in range(viewport.rows):
            line_index = viewport.top_line + row
            if line_index < len(snapshot.lines):
                label = str(line_index + 1).rjust(digits) + " "
            else:
                label = " " * gutter_width
            result.append(DrawInstruction(origin[0] + row, origin[1], label, self.theme.gutter))

        return result

    def draw_text(self, snapshot: RenderSnapshot, viewport: Viewport,
                  origin: Tuple[int, int]) -> List[DrawInstruction]:
        """Draw the highlighted text rows, each padded to the full width."""

        rows = highlight_rows(
            list(snapshot.lines),
            self._categorize(snapshot.lines),
            viewport,
            snapshot.cursor,
            self.theme,
            self.show_cursor,
        )

        result = []
        for row, segments in enumerate(rows):
            y = origin[0] + row
            x = origin[1]
            remaining = viewport.cols

            for segment in segments:
                text = truncate_to_width(segment.text, remaining)
                if text:
                    result.append(DrawInstruction(y, x, text, segment.style))
                    used = display_width(text)
                    x += used
                    remaining -= used
                if len(text) < len(segment.text):
                    break

            if remaining > 0:
                result.append(DrawInstruction(y, x, " " * remaining, self.theme.default))

        return result

    def _categorize(self, lines: Tuple[str, ...]) -> List[List[HighlightSpan]]:
        if lines != self._spans_key:
            self._spans = self.highlighter.categorize(list(lines))
            self._spans_key = lines

        return self._spans
