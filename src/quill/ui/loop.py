"""
Main loop multiplexing key events and frame ticks.

Keys and timer ticks are processed one at a time by the same loop, so the
buffer has a single owner and draws never observe a half-applied edit.
"""

import curses
import logging
from typing import Optional

from .input_handler import InputHandler, Key
from .renderer import RenderSnapshot, fit_viewport
from .window import WindowManager

logger = logging.getLogger(__name__)


class EventLoop:
    """Reads keys until the input handler asks to quit, drawing between events."""

    def __init__(self, window_manager: WindowManager, input_handler: InputHandler) -> None:
        self.window_manager = window_manager
        self.input_handler = input_handler
        self.buffer = input_handler.buffer

    def read_key(self) -> Optional[Key]:
        """Wait for a key. Returns None when the frame interval elapses first."""

        try:
            return self.window_manager.stdscr.get_wch()
        except curses.error:
            return None

    def step(self, key: Optional[Key]) -> bool:
        """
        Process one key event or timer tick, then draw.

        Returns:
            bool: False once the editor should exit
        """

        force = False
        if key == curses.KEY_RESIZE:
            self.window_manager.resize()
            force = True
        elif key is not None and not self.input_handler.handle_input(key):
            return False

        self.redraw(force)
        return True

    def redraw(self, force: bool = False) -> None:
        """Fit the viewport to the screen and draw the buffer if it changed."""

        fit_viewport(self.buffer, self.window_manager.height, self.window_manager.width)
        self.window_manager.draw(RenderSnapshot.of(self.buffer), force)

    def run(self, frame_interval: float) -> None:
        """Run until Ctrl+C."""

        self.window_manager.stdscr.timeout(max(1, round(frame_interval * 1000)))
        self.redraw(force=True)

        try:
            while self.step(self.read_key()):
                pass
        except KeyboardInterrupt:
            logger.info("Interrupted")

        logger.info("Editor loop stopped")
