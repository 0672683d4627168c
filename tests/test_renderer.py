"""Test composing frames from buffer snapshots."""

import pytest

from quill.core.buffer import Buffer
from quill.core.syntax import SyntaxHighlighter
from quill.core.text import display_width, pad_to_width
from quill.ui.renderer import (
    DrawInstruction,
    Renderer,
    RenderSnapshot,
    digit_count,
    fit_viewport,
    text_area_size,
)
from quill.ui.theme import resolve_theme


@pytest.fixture
def renderer():
    return Renderer(resolve_theme(None), SyntaxHighlighter("notes.unknownext"))


def render_buffer(renderer, buf, height, width):
    fit_viewport(buf, height, width)
    return renderer.render(RenderSnapshot.of(buf), (0, 0), (height, width))


@pytest.mark.parametrize("number,digits", [(0, 1), (9, 1), (10, 2), (999, 3)])
def test_digit_count(number, digits):
    assert digit_count(number) == digits


def test_text_area_size():
    assert text_area_size(25, 80, 0) == (24, 77, 3)
    assert text_area_size(25, 80, 990) == (24, 75, 5)
    assert text_area_size(1, 80, 0) == (0, 78, 2)


def test_title_bar(renderer):
    buf = Buffer(["ab"], filename="f.txt")
    buf.status_message = "Saved: f.txt"
    frame = render_buffer(renderer, buf, 5, 30)

    assert frame.instructions[0] == DrawInstruction(
        0, 0, pad_to_width("~ f.txt ~ Saved: f.txt", 30), renderer.theme.title)


def test_title_marks_modified_buffer(renderer):
    buf = Buffer(["ab"], filename="f.txt")
    buf.type_text("x")
    frame = render_buffer(renderer, buf, 5, 30)

    assert frame.instructions[0].text.startswith("~ *f.txt ~ ")


def test_line_numbers(renderer):
    buf = Buffer(["ab", "c"], filename="f.txt")
    frame = render_buffer(renderer, buf, 5, 20)

    assert frame.gutter_width == 2
    gutter = [i for i in frame.instructions if i.x == 0 and i.y > 0]
    assert [i.text for i in gutter] == ["1 ", "2 ", "  ", "  "]
    assert all(i.style == renderer.theme.gutter for i in gutter)


def test_rows_fill_the_width(renderer):
    buf = Buffer(["ab", "c中d"], filename="f.txt")
    frame = render_buffer(renderer, buf, 5, 20)

    for y in range(1, 5):
        row = [i for i in frame.instructions if i.y == y]
        assert sum(display_width(i.text) for i in row) == 20


def test_cursor_is_drawn(renderer):
    buf = Buffer(["ab"], filename="f.txt")
    buf.move_right()
    frame = render_buffer(renderer, buf, 3, 10)

    cursor = [i for i in frame.instructions if i.style == renderer.theme.cursor]
    assert cursor == [DrawInstruction(1, 3, "b", renderer.theme.cursor)]


def test_long_line_scrolls_horizontally(renderer):
    buf = Buffer(["abcdefghij"], filename="f.txt")
    buf.move_to_line_end()
    frame = render_buffer(renderer, buf, 2, 6)

    # Four text columns, cursor one past the last grapheme.
    assert frame.text_cols == 4
    assert buf.viewport.left == 7
    text = ''.join(i.text for i in frame.instructions if i.y == 1 and i.x >= 2)
    assert text == "hij "


def test_small_terminal(renderer):
    buf = Buffer(["ab"], filename="f.txt")

    frame = render_buffer(renderer, buf, 1, 20)
    assert len(frame.instructions) == 1
    assert frame.text_rows == 0

    frame = render_buffer(renderer, buf, 0, 20)
    assert frame.instructions == []


def test_fit_viewport_accounts_for_gutter_growth():
    buf = Buffer(["x"] * 200)
    buf.cursor.line = 150

    fit_viewport(buf, 11, 40)
    assert buf.viewport.rows == 10
    assert buf.viewport.top_line == 141
    assert buf.viewport.cols == 36


def test_snapshot_is_a_copy():
    buf = Buffer(["ab"])
    snapshot = RenderSnapshot.of(buf)
    assert snapshot == RenderSnapshot.of(buf)

    buf.move_right()
    assert snapshot.cursor.index == 0
    assert snapshot != RenderSnapshot.of(buf)


def test_cursor_drawn_on_wide_line(renderer):
    buf = Buffer(["中" * 10], filename="f.txt")
    for _ in range(7):
        buf.move_right()

    frame = render_buffer(renderer, buf, 3, 10)

    cursor = [i for i in frame.instructions if i.style == renderer.theme.cursor]
    assert cursor == [DrawInstruction(1, 8, "中", renderer.theme.cursor)]
