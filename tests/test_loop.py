"""Test the event loop driving input and drawing."""

import curses
from unittest.mock import Mock

from quill.core.buffer import Buffer
from quill.ui.input_handler import CTRL_C, InputHandler
from quill.ui.loop import EventLoop
from quill.ui.renderer import RenderSnapshot


def create_loop(lines=None, height=5, width=20):
    window_manager = Mock()
    window_manager.height = height
    window_manager.width = width
    return EventLoop(window_manager, InputHandler(Buffer(lines)))


def test_step_applies_key_then_draws():
    loop = create_loop(["abc"])

    assert loop.step('x')
    assert loop.buffer.lines == ["xabc"]

    snapshot, force = loop.window_manager.draw.call_args[0]
    assert isinstance(snapshot, RenderSnapshot)
    assert snapshot.lines == ("xabc",)
    assert force is False


def test_step_sizes_viewport():
    loop = create_loop(["abc"])
    loop.step(None)
    assert (loop.buffer.viewport.rows, loop.buffer.viewport.cols) == (4, 18)


def test_step_stops_on_ctrl_c():
    loop = create_loop(["abc"])
    assert not loop.step(CTRL_C)
    loop.window_manager.draw.assert_not_called()


def test_resize_forces_draw():
    loop = create_loop(["abc"])
    assert loop.step(curses.KEY_RESIZE)

    loop.window_manager.resize.assert_called_once()
    assert loop.window_manager.draw.call_args[0][1] is True


def test_read_key_timeout():
    loop = create_loop()
    loop.window_manager.stdscr.get_wch.side_effect = curses.error("no input")
    assert loop.read_key() is None


def test_run_until_ctrl_c():
    loop = create_loop()
    stdscr = loop.window_manager.stdscr
    stdscr.get_wch.side_effect = ['a', curses.error("no input"), 'b', CTRL_C, 'c']

    loop.run(0.03)
    stdscr.timeout.assert_called_once_with(30)
    assert loop.buffer.lines == ["ab"]
    # Initial draw plus one per processed event.
    assert loop.window_manager.draw.call_count == 4


def test_run_handles_keyboard_interrupt():
    loop = create_loop(["abc"])
    loop.window_manager.stdscr.get_wch.side_effect = KeyboardInterrupt

    loop.run(0.03)
    assert loop.buffer.lines == ["abc"]


def test_scroll_survives_gutter_growth():
    loop = create_loop(["x"] * 200, height=11, width=40)
    loop.step(None)

    # The gutter gains a digit once line 100 comes into view.
    for _ in range(95):
        loop.buffer.scroll_down()
        loop.step(None)

    assert loop.buffer.viewport.top_line == 95
    assert loop.buffer.viewport.cols == 36
    assert (loop.buffer.cursor.line, loop.buffer.cursor.index) == (0, 0)
