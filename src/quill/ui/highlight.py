"""
Reduces categorised document spans to the styled segments of visible rows.
"""

from typing import List, NamedTuple, Tuple, Final

from ..core.cursor import Cursor
from ..core.syntax import HighlightSpan
from ..core.text import graphemes
from ..core.viewport import Viewport
from .theme import Style, Theme

CURSOR_CATEGORY: Final[str] = 'cursor'


class Segment(NamedTuple):
    """A styled piece of text on one visible row."""
    category: str
    text: str
    style: Style


def highlight_rows(lines: List[str], spans: List[List[HighlightSpan]], viewport: Viewport,
                   cursor: Cursor, theme: Theme, show_cursor: bool = True) -> List[List[Segment]]:
    """
    Build the styled segments of every row in the viewport.

    Args:
        lines: The lines of the document
        spans: Categorised spans for every line, as produced by SyntaxHighlighter
        viewport: The visible window
        cursor: The cursor to overlay
        theme: Category to style mapping
        show_cursor: Whether to draw the cursor overlay

    Returns:
        One list of segments per viewport row, clipped to the visible columns.
        Rows below the end of the document are empty.
    """

    rows = []
    right = viewport.left + viewport.cols

    for row in range(viewport.rows):
        line_index = viewport.top_line + row
        if line_index >= len(lines):
            rows.append([])
            continue

        pieces = _clip(spans[line_index] if line_index < len(spans) else [], viewport.left, right)

        if show_cursor and line_index == cursor.line and viewport.left <= cursor.index < right:
            pieces = _overlay_cursor(pieces, cursor.index)

        clusters = graphemes(lines[line_index])
        segments = []
        for category, start, end in pieces:
            if category == CURSOR_CATEGORY:
                text = ''.join(clusters[start:end]) or ' '
                segments.append(Segment(category, text, theme.cursor))
            else:
                segments.append(Segment(category, ''.join(clusters[start:end]), theme.style_for(category)))

        rows.append(segments)

    return rows


def _clip(spans: List[HighlightSpan], left: int, right: int) -> List[Tuple[str, int, int]]:
    """Cut spans down to the grapheme range `[left, right)`."""

    pieces = []
    for span in spans:
        start = max(span.start, left)
        end = min(span.end, right)
        if start < end:
            pieces.append((span.category, start, end))

    return pieces


def _overlay_cursor(pieces: List[Tuple[str, int, int]], index: int) -> List[Tuple[str, int, int]]:
    """Split out the grapheme under the cursor as its own piece."""

    result = []
    found = False
    for category, start, end in pieces:
        if not start <= index < end:
            result.append((category, start, end))
            continue

        found = True
        if start < index:
            result.append((category, start, index))
        result.append((CURSOR_CATEGORY, index, index + 1))
        if index + 1 < end:
            result.append((category, index + 1, end))

    if not found:
        # Past the end of the line.
        result.append((CURSOR_CATEGORY, index, index))

    return result
