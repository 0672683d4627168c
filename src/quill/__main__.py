"""
Entry point for Quill.
"""

import argparse
import curses
import logging
import sys
from typing import List, Optional, Final

from .config import EditorConfig, DEFAULT_LOG_FILE, DEFAULT_TAB_WIDTH, LINE_ENDINGS
from .core.buffer import Buffer
from .core.syntax import SyntaxHighlighter, SyntaxConfigError
from .ui.input_handler import InputHandler
from .ui.loop import EventLoop
from .ui.renderer import Renderer
from .ui.theme import Theme, ThemeError, resolve_theme
from .ui.window import WindowManager

logger = logging.getLogger(__name__)

LOG_FORMAT: Final[str] = '%(asctime)s %(levelname)s %(name)s: %(message)s'

# Lines scanned when the file name does not identify a language.
DETECTION_SAMPLE_LINES: Final[int] = 100


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        prog="quill",
        description="Quill - Terminal Text Editor"
    )
    parser.add_argument(
        "file",
        type=str,
        help="File to open"
    )
    parser.add_argument(
        "-t", "--theme",
        type=str,
        help="Name of the colour theme"
    )
    parser.add_argument(
        "-d", "--theme-dir",
        type=str,
        help="Extra directory of theme files"
    )
    parser.add_argument(
        "--tab-width",
        type=int,
        default=DEFAULT_TAB_WIDTH,
        help="Spaces per tab stop"
    )
    parser.add_argument(
        "--line-ending",
        choices=sorted(LINE_ENDINGS),
        default="crlf",
        help="Line terminator used when saving"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=DEFAULT_LOG_FILE,
        help="Where to write the log"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug messages"
    )
    return parser.parse_args(argv)


def setup_logging(config: EditorConfig) -> None:
    """Send log records to a file; the terminal belongs to curses."""

    level = logging.DEBUG if config.verbose else logging.INFO
    try:
        handler: logging.Handler = logging.FileHandler(config.log_file, encoding='utf-8')
    except OSError:
        handler = logging.NullHandler()

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def run_editor(stdscr: 'curses.window', buf: Buffer, highlighter: SyntaxHighlighter,
               theme: Theme, config: EditorConfig) -> None:
    """Run the editor on an initialised curses screen."""

    curses.raw()
    try:
        curses.curs_set(0)
    except curses.error:
        pass

    window_manager = WindowManager(stdscr, Renderer(theme, highlighter, config.show_cursor))
    window_manager.init_colors()

    input_handler = InputHandler(buf, config)
    EventLoop(window_manager, input_handler).run(config.frame_interval)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    config = EditorConfig.from_args(args)
    setup_logging(config)

    try:
        theme = resolve_theme(config.theme_name, config.theme_dir)
        buf = Buffer.from_file(args.file, config.line_terminator)
        highlighter = SyntaxHighlighter(
            args.file,
            '\n'.join(buf.lines[:DETECTION_SAMPLE_LINES]),
            config.allow_plain_text,
        )
    except (ThemeError, SyntaxConfigError) as e:
        logger.critical("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Editing %s as %s with theme %s",
                args.file, highlighter.get_language_name(), theme.name)
    curses.wrapper(run_editor, buf, highlighter, theme, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
