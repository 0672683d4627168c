"""
Window management module executing draw instructions on curses.
"""

import curses
import logging
from typing import Dict, Iterable, Optional, Tuple, Final

from ..core.text import truncate_to_width
from .renderer import Frame, Renderer, RenderSnapshot, DrawInstruction
from .theme import Style

logger = logging.getLogger(__name__)

COLOR_CODES: Final[Dict[str, int]] = {
    'black': curses.COLOR_BLACK,
    'red': curses.COLOR_RED,
    'green': curses.COLOR_GREEN,
    'yellow': curses.COLOR_YELLOW,
    'blue': curses.COLOR_BLUE,
    'magenta': curses.COLOR_MAGENTA,
    'cyan': curses.COLOR_CYAN,
    'white': curses.COLOR_WHITE,
}


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    string = truncate_to_width(string, width - x)
    if not string:
        return

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        # Writing the bottom right cell moves the cursor off screen.
        logger.debug("curses.error in addstr at (%d,%d)", y, x)


class WindowManager:
    """Owns the curses screen and draws rendered frames onto it."""

    def __init__(self, stdscr: 'curses.window', renderer: Renderer) -> None:
        self.stdscr = stdscr
        self.renderer = renderer
        self.height, self.width = stdscr.getmaxyx()
        self.color_pairs: Dict[Tuple[int, int], int] = {}
        self.colors_enabled = False
        self.last_snapshot: Optional[RenderSnapshot] = None

    def init_colors(self) -> None:
        """Enable colours if the terminal supports them."""

        if not curses.has_colors():
            return

        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            logger.debug("Terminal has no default colours")
        self.colors_enabled = True

    def attr_for(self, style: Style) -> int:
        """Translate a style into a curses attribute, allocating colour pairs on demand."""

        attr = curses.A_NORMAL
        if style.bold:
            attr |= curses.A_BOLD
        if style.reverse:
            attr |= curses.A_REVERSE

        if not self.colors_enabled or (style.fg is None and style.bg is None):
            return attr

        key = (COLOR_CODES.get(style.fg, -1), COLOR_CODES.get(style.bg, -1))
        pair = self.color_pairs.get(key)
        if pair is None:
            pair = len(self.color_pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return attr
            try:
                curses.init_pair(pair, *key)
            except curses.error:
                logger.debug("Cannot initialise colour pair %s", key)
                return attr
            self.color_pairs[key] = pair

        return attr | curses.color_pair(pair)

    def draw(self, snapshot: RenderSnapshot, force: bool = False) -> Optional[Frame]:
        """
        Draw a snapshot unless it is identical to the last one drawn.

        Returns:
            The drawn frame, or None if nothing changed
        """

        if not force and snapshot == self.last_snapshot:
            return None

        frame = self.renderer.render(snapshot, (0, 0), (self.height, self.width))
        self.execute(frame.instructions)
        self.last_snapshot = snapshot
        return frame

    def execute(self, instructions: Iterable[DrawInstruction]) -> None:
        """Put every instruction on the screen and refresh once."""

        for instruction in instructions:
            safe_addstr(self.stdscr, instruction.y, instruction.x,
                        instruction.text, self.attr_for(instruction.style))

        self.stdscr.noutrefresh()
        curses.doupdate()

    def resize(self) -> None:
        """Handle terminal resize events."""

        self.height, self.width = self.stdscr.getmaxyx()
        logger.debug("Terminal resized to %dx%d", self.width, self.height)

        self.stdscr.erase()
        self.last_snapshot = None
