"""Test viewport clamping and scrolling."""

from quill.core.viewport import Viewport


def test_clamp_down_and_up():
    viewport = Viewport(rows=5, cols=10)

    viewport.clamp(7, 0)
    assert viewport.top_line == 3

    viewport.clamp(4, 0)
    assert viewport.top_line == 3  # Already visible

    viewport.clamp(1, 0)
    assert viewport.top_line == 1


def test_clamp_horizontal():
    viewport = Viewport(rows=5, cols=10)

    viewport.clamp(0, 15)
    assert viewport.left == 6
    assert viewport.contains(0, 15)

    viewport.clamp(0, 2)
    assert viewport.left == 2


def test_clamp_is_idempotent():
    viewport = Viewport(rows=3, cols=4)
    viewport.clamp(10, 9)
    first = (viewport.top_line, viewport.left)

    viewport.clamp(10, 9)
    assert (viewport.top_line, viewport.left) == first


def test_clamp_keeps_cursor_inside():
    viewport = Viewport(rows=4, cols=6)
    for line, index in [(0, 0), (20, 3), (5, 40), (19, 0), (0, 41)]:
        viewport.clamp(line, index)
        assert viewport.contains(line, index)


def test_clamp_without_text_area_is_noop():
    viewport = Viewport(top_line=2, left=1, rows=0, cols=10)
    viewport.clamp(50, 50)
    assert (viewport.top_line, viewport.left) == (2, 1)

    viewport = Viewport(top_line=2, left=1, rows=5, cols=0)
    viewport.clamp(50, 50)
    assert (viewport.top_line, viewport.left) == (2, 1)


def test_resize_reports_change():
    viewport = Viewport()
    assert viewport.resize(5, 10)
    assert not viewport.resize(5, 10)
    assert viewport.resize(-3, 10)
    assert viewport.rows == 0


def test_scroll_stays_in_document():
    viewport = Viewport(rows=5, cols=10)
    viewport.scroll(-1, 10)
    assert viewport.top_line == 0

    viewport.scroll(20, 10)
    assert viewport.top_line == 9
    assert viewport.bottom_line == 14


def test_clamp_counts_wide_graphemes():
    viewport = Viewport(rows=1, cols=8)
    line = "中" * 10

    viewport.clamp(0, 7, line)
    assert viewport.left == 4

    # Already fits; a second clamp leaves the window alone.
    viewport.clamp(0, 7, line)
    assert viewport.left == 4


def test_clamp_wide_cursor_past_line_end():
    viewport = Viewport(rows=1, cols=4)
    viewport.clamp(0, 3, "中中中")

    # Two cells for the last wide grapheme plus one for the cursor space.
    assert viewport.left == 2


def test_axes_clamp_independently():
    viewport = Viewport(top_line=5, left=0, rows=3, cols=4)

    viewport.clamp_horizontal(10)
    assert (viewport.top_line, viewport.left) == (5, 7)

    viewport.clamp_vertical(0)
    assert (viewport.top_line, viewport.left) == (0, 7)
