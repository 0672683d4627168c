"""
Quill - a terminal text editor with grapheme-aware editing and Pygments
syntax highlighting.
"""

__version__ = "0.1.0"
