"""
Category to style mappings for the text area, title bar and gutter.

Extra themes are plain Python files defining `theme_name` and `theme_data`:

    theme_name = "dusk"
    theme_data = {
        "keyword": {"fg": "magenta", "bold": True},
        "comment": {"fg": "blue"},
        "cursor": {"fg": "black", "bg": "yellow"},
    }
"""

import importlib.util
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Any, Final

logger = logging.getLogger(__name__)

COLOR_NAMES: Final = ('black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white')

SPECIAL_STYLES: Final = ('default', 'cursor', 'title', 'gutter')

DEFAULT_THEME: Final[str] = 'default'


class ThemeError(Exception):
    """Raised when themes cannot be loaded."""


@dataclass(frozen=True)
class Style:
    """Terminal text attributes. Colours are curses colour names, None is the terminal default."""
    fg: Optional[str] = None
    bg: Optional[str] = None
    bold: bool = False
    reverse: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Style':
        style = cls(
            fg=data.get('fg'),
            bg=data.get('bg'),
            bold=bool(data.get('bold', False)),
            reverse=bool(data.get('reverse', False)),
        )
        for color in (style.fg, style.bg):
            if color is not None and color not in COLOR_NAMES:
                raise ValueError(f"Unknown colour: {color}")
        return style


@dataclass(frozen=True)
class Theme:
    """Maps syntax categories to styles. Unmapped categories use `default`."""
    name: str
    styles: Dict[str, Style] = field(default_factory=dict)
    default: Style = Style()
    cursor: Style = Style(fg='black', bg='white', bold=True)
    title: Style = Style(reverse=True)
    gutter: Style = Style(fg='yellow')

    def style_for(self, category: str) -> Style:
        """Get the style for a syntax category."""

        return self.styles.get(category, self.default)

    @classmethod
    def from_data(cls, name: str, data: Dict[str, Dict[str, Any]]) -> 'Theme':
        """Build a theme from a category -> style attributes dict."""

        special = {key: Style.from_dict(data[key]) for key in SPECIAL_STYLES if key in data}
        styles = {
            category: Style.from_dict(attrs)
            for category, attrs in data.items()
            if category not in SPECIAL_STYLES
        }
        return replace(cls(name=name, styles=styles), **special)


BUILTIN_THEMES: Final[Dict[str, Dict[str, Dict[str, Any]]]] = {
    'default': {
        'keyword': {'fg': 'cyan', 'bold': True},
        'type': {'fg': 'cyan'},
        'string': {'fg': 'yellow'},
        'comment': {'fg': 'green'},
        'function': {'fg': 'blue', 'bold': True},
        'class': {'fg': 'magenta', 'bold': True},
        'decorator': {'fg': 'magenta'},
        'builtin': {'fg': 'cyan'},
        'number': {'fg': 'red'},
        'operator': {'fg': 'white'},
        'variable': {'fg': 'blue'},
        'title': {'fg': 'blue', 'reverse': True},
    },
    'mono': {
        'keyword': {'bold': True},
        'class': {'bold': True},
        'function': {'bold': True},
        'cursor': {'reverse': True},
        'gutter': {},
    },
    'ocean': {
        'keyword': {'fg': 'blue', 'bold': True},
        'type': {'fg': 'blue'},
        'string': {'fg': 'green'},
        'comment': {'fg': 'cyan'},
        'function': {'fg': 'yellow'},
        'class': {'fg': 'yellow', 'bold': True},
        'number': {'fg': 'magenta'},
        'cursor': {'fg': 'black', 'bg': 'cyan'},
        'title': {'fg': 'cyan', 'reverse': True, 'bold': True},
        'gutter': {'fg': 'cyan'},
    },
}


def builtin_themes() -> Dict[str, Theme]:
    """Get the themes that ship with the editor."""

    return {name: Theme.from_data(name, data) for name, data in BUILTIN_THEMES.items()}


def load_theme_dir(path: str) -> Dict[str, Theme]:
    """
    Load every theme file in a directory.

    Args:
        path: Directory to scan for `.py` theme files

    Returns:
        Themes keyed by name

    Raises:
        ThemeError: If the directory cannot be read
    """

    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        raise ThemeError(f"Cannot read theme directory {path}: {e}") from e

    themes = {}
    for fname in names:
        if not fname.endswith('.py') or fname == '__init__.py':
            continue

        full_path = os.path.join(path, fname)
        spec = importlib.util.spec_from_file_location(f"quill_theme_{fname[:-3]}", full_path)
        if not spec or not spec.loader:
            continue

        mod = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(mod)
            theme = Theme.from_data(mod.theme_name, mod.theme_data)
        except Exception as e:
            logger.warning("Skipping theme file %s: %s", full_path, e)
            continue

        themes[theme.name] = theme
        logger.debug("Loaded theme %s from %s", theme.name, full_path)

    return themes


def resolve_theme(name: Optional[str], theme_dir: Optional[str] = None) -> Theme:
    """
    Pick the theme to draw with.

    Themes from `theme_dir` override built-in themes of the same name. An
    unknown name falls back to the default theme.
    """

    themes = builtin_themes()
    if theme_dir:
        themes.update(load_theme_dir(theme_dir))

    name = name or DEFAULT_THEME
    if name not in themes:
        logger.warning("Unknown theme %r, using %r", name, DEFAULT_THEME)
        name = DEFAULT_THEME

    return themes[name]
