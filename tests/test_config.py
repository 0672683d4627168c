"""Test configuration and command line parsing."""

import logging

import pytest

from quill.__main__ import parse_args, setup_logging
from quill.config import DEFAULT_LOG_FILE, DEFAULT_TAB_WIDTH, EditorConfig
from quill.core.text import CRLF, LF


def test_defaults():
    args = parse_args(["notes.txt"])
    config = EditorConfig.from_args(args)

    assert args.file == "notes.txt"
    assert config.tab_width == DEFAULT_TAB_WIDTH
    assert config.line_terminator == CRLF
    assert config.theme_name is None
    assert config.theme_dir is None
    assert config.log_file == DEFAULT_LOG_FILE
    assert not config.verbose


def test_options():
    args = parse_args([
        "notes.txt", "-t", "ocean", "-d", "themes", "--tab-width", "8",
        "--line-ending", "lf", "--log-file", "q.log", "-v",
    ])
    config = EditorConfig.from_args(args)

    assert config.theme_name == "ocean"
    assert config.theme_dir == "themes"
    assert config.tab_width == 8
    assert config.line_terminator == LF
    assert config.log_file == "q.log"
    assert config.verbose


def test_tab_width_at_least_one():
    config = EditorConfig.from_args(parse_args(["notes.txt", "--tab-width", "0"]))
    assert config.tab_width == 1


def test_invalid_line_ending():
    with pytest.raises(SystemExit):
        parse_args(["notes.txt", "--line-ending", "cr"])


def test_missing_file_argument():
    with pytest.raises(SystemExit):
        parse_args([])


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_writes_to_file(tmp_path, restore_logging):
    log_file = tmp_path / "quill.log"
    setup_logging(EditorConfig(log_file=str(log_file), verbose=True))

    logging.getLogger("quill.test").debug("hello from test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    content = log_file.read_text()
    assert "DEBUG quill.test: hello from test" in content


def test_setup_logging_default_level(tmp_path, restore_logging):
    setup_logging(EditorConfig(log_file=str(tmp_path / "quill.log")))
    assert logging.getLogger().level == logging.INFO
