"""
Runtime configuration for the editor.
"""

import argparse
from dataclasses import dataclass
from typing import Dict, Optional, Final

from .core.text import CRLF, LF

DEFAULT_TAB_WIDTH: Final[int] = 4
DEFAULT_FRAME_INTERVAL: Final[float] = 0.03
DEFAULT_LOG_FILE: Final[str] = 'quill.log'

LINE_ENDINGS: Final[Dict[str, str]] = {
    'crlf': CRLF,
    'lf': LF,
}


@dataclass
class EditorConfig:
    """Settings for one editor session. Nothing here is persisted."""
    tab_width: int = DEFAULT_TAB_WIDTH
    line_terminator: str = CRLF
    theme_name: Optional[str] = None
    theme_dir: Optional[str] = None
    frame_interval: float = DEFAULT_FRAME_INTERVAL
    show_cursor: bool = True
    allow_plain_text: bool = True
    log_file: str = DEFAULT_LOG_FILE
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'EditorConfig':
        """Build a configuration from parsed command line arguments."""

        return cls(
            tab_width=max(1, args.tab_width),
            line_terminator=LINE_ENDINGS[args.line_ending],
            theme_name=args.theme,
            theme_dir=args.theme_dir,
            log_file=args.log_file,
            verbose=args.verbose,
        )
