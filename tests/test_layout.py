"""Test the offset/coordinate mapping."""

import pytest
from pixelinput.config import InputConfig
from pixelinput.layout import GlyphRecord, LayoutMapper, Point, Rect

LINE_HEIGHT = 10
TEXT = 0x000000
SELECTED = 0xFFFFFF
ORIGIN = Point(2, 2)


def measure(text):
    """Fixed-width glyphs: 5 pixels wide with 1 pixel of spacing."""
    glyphs = []
    col = row = 0
    for index, char in enumerate(text):
        if char == "\n":
            row += 1
            col = 0
            continue
        glyphs.append(GlyphRecord(index, col * 6, col * 6 + 4, row * LINE_HEIGHT))
        col += 1
    return glyphs


@pytest.fixture
def mapper():
    return LayoutMapper(width=100, height=30, line_height=LINE_HEIGHT)


def test_no_glyphs_puts_caret_at_padding(mapper):
    assert mapper.coordinates("", [], 0, Point(-40, -7)) == Point(2, 2)


def test_caret_before_and_after_glyphs(mapper):
    text = "ab"
    glyphs = measure(text)
    assert mapper.coordinates(text, glyphs, 0, ORIGIN) == Point(2, 2)
    assert mapper.coordinates(text, glyphs, 1, ORIGIN) == Point(7, 2)
    assert mapper.coordinates(text, glyphs, 2, ORIGIN) == Point(12, 2)


def test_caret_on_following_lines(mapper):
    text = "ab\nc"
    glyphs = measure(text)
    assert mapper.coordinates(text, glyphs, 2, ORIGIN) == Point(12, 2)
    assert mapper.coordinates(text, glyphs, 3, ORIGIN) == Point(2, 12)
    assert mapper.coordinates(text, glyphs, 4, ORIGIN) == Point(6, 12)


def test_caret_on_empty_line(mapper):
    text = "a\n\nb"
    glyphs = measure(text)
    assert mapper.coordinates(text, glyphs, 2, ORIGIN) == Point(2, 12)
    assert mapper.coordinates(text, glyphs, 3, ORIGIN) == Point(2, 22)


def test_glyph_at_synthesizes_line_start(mapper):
    text = "ab\nc"
    glyph = mapper.glyph_at(text, measure(text), 3)
    assert glyph.ordinal == 2
    assert glyph.buffer_index == 3
    assert (glyph.x, glyph.right, glyph.top) == (1, 0, LINE_HEIGHT)


def test_glyph_at_falls_back_to_first_glyph(mapper):
    text = "\nab"
    glyph = mapper.glyph_at(text, measure(text), 0)
    assert glyph.ordinal == 0
    assert glyph.buffer_index == 1


def test_scroll_right_then_back(mapper):
    narrow = LayoutMapper(width=20, height=30, line_height=LINE_HEIGHT)
    text = "abcd"
    glyphs = measure(text)
    origin = narrow.scroll(text, glyphs, 4, ORIGIN)
    assert origin == Point(-5, 2)
    assert narrow.coordinates(text, glyphs, 4, origin).x == 20 - 2 - 1
    assert narrow.scroll(text, glyphs, 0, origin) == ORIGIN


def test_scroll_down_to_last_line():
    mapper = LayoutMapper(width=100, height=14, line_height=LINE_HEIGHT)
    text = "a\nb\nc"
    glyphs = measure(text)
    origin = mapper.scroll(text, glyphs, 4, ORIGIN)
    assert origin == Point(2, -18)
    assert mapper.coordinates(text, glyphs, 4, origin) == Point(2, 2)
    assert mapper.scroll(text, glyphs, 0, origin) == ORIGIN


def test_visible_caret_does_not_scroll(mapper):
    text = "abc"
    assert mapper.scroll(text, measure(text), 1, ORIGIN) == ORIGIN


def test_empty_selection_is_one_pixel_caret(mapper):
    text = "ab"
    rects = mapper.selection_rects(text, measure(text), 2, 2, ORIGIN)
    assert rects == [Rect(12, 2, 1, LINE_HEIGHT)]


def test_selection_split_at_line_breaks(mapper):
    text = "ab\nc"
    rects = mapper.selection_rects(text, measure(text), 1, 4, ORIGIN)
    assert rects == [Rect(7, 2, 6, LINE_HEIGHT), Rect(2, 12, 5, LINE_HEIGHT)]


def test_tints_follow_selection(mapper):
    text = "ab\nc"
    glyphs = measure(text)
    assert mapper.selection_tints(text, glyphs, 1, 4, TEXT, SELECTED) == (TEXT, SELECTED, SELECTED)
    assert mapper.selection_tints(text, glyphs, 0, 2, TEXT, SELECTED) == (SELECTED, SELECTED, TEXT)
    assert mapper.selection_tints(text, glyphs, 2, 2, TEXT, SELECTED) == (TEXT, TEXT, TEXT)


def test_selected_line_break_tints_nothing(mapper):
    text = "\nab"
    assert mapper.selection_tints(text, measure(text), 0, 1, TEXT, SELECTED) == (TEXT, TEXT)


def test_box_and_clip(mapper):
    border, background = mapper.box()
    assert border == Rect(0, 0, 100, 30)
    assert background == Rect(1, 1, 98, 28)
    assert mapper.clip() == Rect(2, 0, 96, 30)


def test_layout_builds_full_frame():
    config = InputConfig(width=20, height=30, selection_color=0x123456)
    mapper = LayoutMapper(config.width, config.height, LINE_HEIGHT)
    text = "abcd"
    frame = mapper.layout(text, measure(text), 4, 2, ORIGIN, config, line_spacing=0.5)
    assert frame.origin == Point(-5, 2)
    assert frame.cursor == Point(17, 2)
    assert frame.selection_rects == (Rect(6, 2, 12, LINE_HEIGHT),)
    assert frame.tints == (config.text_color, config.text_color,
                           config.selected_text_color, config.selected_text_color)
    assert frame.selection_color == 0x123456
    assert frame.line_spacing == 0.5
    assert frame.line_height == LINE_HEIGHT
    assert frame.clip == Rect(2, 0, 16, 30)
