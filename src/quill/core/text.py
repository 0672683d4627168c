"""
Grapheme, offset and display-width helpers for a single line of text.

Lines are Python strings, indexed by code point. The cursor addresses lines
by grapheme cluster, so every slice of a line goes through the functions in
this module instead of indexing the string directly.
"""

from typing import List, Optional, Final

import grapheme
from wcwidth import wcwidth

LF: Final[str] = "\n"
CRLF: Final[str] = "\r\n"


def graphemes(line: str) -> List[str]:
    """Split a line into its grapheme clusters."""

    return list(grapheme.graphemes(line))


def grapheme_count(line: str) -> int:
    """Get the number of grapheme clusters in a line."""

    return grapheme.length(line)


def grapheme_offset(line: str, index: int) -> int:
    """
    Convert a grapheme index into a code point offset.

    Args:
        line: The line of text
        index: Grapheme index, clamped to the end of the line

    Returns:
        The offset into the string where grapheme `index` starts
    """

    if index <= 0:
        return 0

    offset = 0
    for count, cluster in enumerate(grapheme.graphemes(line)):
        if count == index:
            return offset
        offset += len(cluster)

    return len(line)


def utf8_offset(line: str, index: int) -> int:
    """Convert a grapheme index into a UTF-8 byte offset."""

    return len(line[:grapheme_offset(line, index)].encode('utf-8'))


def grapheme_slice(line: str, start: int, end: Optional[int] = None) -> str:
    """Slice a line by grapheme indices."""

    begin = grapheme_offset(line, start)
    if end is None:
        return line[begin:]

    return line[begin:grapheme_offset(line, end)]


def char_width(cluster: str) -> int:
    """Get the number of terminal cells a grapheme cluster occupies."""

    if not cluster:
        return 0

    width = wcwidth(cluster[0])
    if width < 0:
        return 1

    return max(width, 1)


def display_width(text: str) -> int:
    """Get the number of terminal cells a string occupies."""

    return sum(char_width(cluster) for cluster in grapheme.graphemes(text))


def truncate_to_width(text: str, width: int) -> str:
    """Cut text to at most `width` cells without splitting a wide grapheme."""

    if width <= 0:
        return ""

    used = 0
    result = []
    for cluster in grapheme.graphemes(text):
        cells = char_width(cluster)
        if used + cells > width:
            break
        result.append(cluster)
        used += cells

    return ''.join(result)


def pad_to_width(text: str, width: int) -> str:
    """Truncate or right-pad text with spaces to exactly `width` cells."""

    text = truncate_to_width(text, width)
    return text + " " * (width - display_width(text))


def split_lines(content: str) -> List[str]:
    """
    Split file content into lines.

    Both LF and CRLF terminators are accepted. A trailing terminator yields a
    trailing empty line, so joining the result reproduces the content.
    """

    return [line[:-1] if line.endswith('\r') else line for line in content.split(LF)]


def join_lines(lines: List[str], terminator: str = CRLF) -> str:
    """Join lines with the given terminator."""

    return terminator.join(lines)


def grapheme_index_at(line: str, offset: int) -> int:
    """
    Convert a code point offset into a grapheme index.

    An offset that falls inside a cluster maps to the boundary after it.
    """

    if offset <= 0:
        return 0

    start = 0
    for count, cluster in enumerate(grapheme.graphemes(line)):
        if start >= offset:
            return count
        start += len(cluster)

    return grapheme.length(line)
