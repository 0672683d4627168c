"""
Core package for the editor's document model.

This package implements the Buffer class holding the line store, cursor and
viewport of an open file, the grapheme helpers every line edit goes through,
and the SyntaxHighlighter that categorises a document with Pygments.
"""

from .buffer import Buffer, SaveError
from .cursor import Cursor
from .viewport import Viewport
from .syntax import SyntaxHighlighter, SyntaxConfigError, HighlightSpan

__all__ = [
    'Buffer',
    'SaveError',
    'Cursor',
    'Viewport',
    'SyntaxHighlighter',
    'SyntaxConfigError',
    'HighlightSpan',
]
