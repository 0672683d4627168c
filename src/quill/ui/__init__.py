"""
UI package for the editor's terminal interface.

This package turns buffer state into styled draw instructions with the
Renderer, puts them on screen with the WindowManager, and dispatches keys
through the InputHandler from a single EventLoop.
"""

from .theme import Theme, Style, ThemeError, resolve_theme
from .renderer import Renderer, RenderSnapshot
from .window import WindowManager
from .input_handler import InputHandler
from .loop import EventLoop

__all__ = [
    'Theme',
    'Style',
    'ThemeError',
    'resolve_theme',
    'Renderer',
    'RenderSnapshot',
    'WindowManager',
    'InputHandler',
    'EventLoop',
]
