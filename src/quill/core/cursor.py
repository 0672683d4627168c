"""
Cursor position within the line store.
"""

from dataclasses import dataclass


@dataclass
class Cursor:
    """
    A grapheme-addressed cursor.

    `preferred` is the column a vertical move tries to restore. Only vertical
    moves keep it; every horizontal move or edit collapses it onto `index`.
    """
    line: int = 0
    index: int = 0
    preferred: int = 0

    def collapse(self) -> None:
        """Forget the remembered column."""

        self.preferred = self.index

    def resolve(self, line_length: int) -> None:
        """Restore the preferred column, clamped to the given line length."""

        self.index = min(self.preferred, line_length)
