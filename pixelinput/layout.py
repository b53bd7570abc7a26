"""Mapping between buffer offsets and on-screen glyph coordinates.

Everything here is a pure function of the text, the selection, the glyph
metrics the renderer measured for the current text, and the current text
origin. Nothing here touches rendering objects; the result is a
RenderInstructions value for the renderer to carry out.
"""

from dataclasses import dataclass
from typing import NamedTuple, Sequence

from .config import InputConfig
from .constants import InputConstants

LINE_BREAK = InputConstants.LINE_BREAK


@dataclass(frozen=True)
class GlyphRecord:
    """Renderer-measured extents of one rendered character.

    Line breaks are not rendered and have no record, so the position of a
    record in the glyph sequence (its ordinal) differs from its buffer index
    once the text spans several lines. Coordinates are relative to the text
    origin.
    """
    buffer_index: int
    x: int
    right: int
    top: int


class ResolvedGlyph(NamedTuple):
    """A glyph chosen to stand for a buffer offset."""
    ordinal: int
    buffer_index: int
    x: int
    right: int
    top: int


class Point(NamedTuple):
    x: int
    y: int


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class RenderInstructions:
    """Everything the renderer needs to draw one frame of the widget.

    Attributes:
        text: Current buffer content
        origin: Position of the text relative to the widget
        cursor: Caret position relative to the widget
        selection_rects: Highlight rectangles; a single 1 pixel wide
            rectangle is the caret when nothing is selected
        tints: Color per glyph ordinal
        border: Outer rectangle, filled with border_color
        background: Inner rectangle, filled with bg_color
        clip: Area text and highlight are masked to
        line_height: Height of one line of text
        line_spacing: Extra spacing the renderer must apply between lines
        selection_color: Fill color of selection_rects
    """
    text: str
    origin: Point
    cursor: Point
    selection_rects: tuple[Rect, ...]
    tints: tuple[int, ...]
    border: Rect
    background: Rect
    clip: Rect
    line_height: int
    line_spacing: float
    selection_color: int
    border_color: int
    bg_color: int


class LayoutMapper:
    """Offset/coordinate arithmetic for one widget's geometry."""

    def __init__(self, width: int, height: int, line_height: int,
                 padding: int = InputConstants.PADDING,
                 border: int = InputConstants.BORDER):
        self.width = width
        self.height = height
        self.line_height = line_height
        self.padding = padding
        self.border = border

    def glyph_at(self, text: str, glyphs: Sequence[GlyphRecord], index: int) -> ResolvedGlyph:
        """Resolve a buffer offset to the glyph that positions it.

        Picks the rightmost glyph whose buffer index is at most ``index``
        (the first glyph if there is none). At the start of a line, the
        glyph's own position is meaningless for the offset, so a line-start
        glyph is synthesized from the number of preceding line breaks while
        keeping the found glyph's ordinal and index.
        """
        ordinal = 0
        for i, glyph in enumerate(glyphs):
            if glyph.buffer_index <= index and glyphs[ordinal].buffer_index < glyph.buffer_index:
                ordinal = i
        found = glyphs[ordinal]
        if index == 0 or text[index - 1:index] == LINE_BREAK:
            lines = text.count(LINE_BREAK, 0, index)
            return ResolvedGlyph(
                ordinal=ordinal,
                buffer_index=found.buffer_index,
                x=self.padding - 1,
                right=self.padding - 2,
                top=lines * self.line_height,
            )
        return ResolvedGlyph(ordinal, found.buffer_index, found.x, found.right, found.top)

    def coordinates(self, text: str, glyphs: Sequence[GlyphRecord], index: int,
                    origin: Point) -> Point:
        """Widget-relative position of the caret at buffer offset ``index``.

        The caret sits one pixel left of the glyph it precedes, or one pixel
        past the right edge of the last glyph at the end of the text.
        """
        if not glyphs:
            return Point(self.padding, self.padding)
        glyph = self.glyph_at(text, glyphs, index)
        x = glyph.x if glyph.buffer_index == index else glyph.right + 1
        return Point(x + origin.x - 1, glyph.top + origin.y)

    def scroll(self, text: str, glyphs: Sequence[GlyphRecord], cursor_pos: int,
               origin: Point) -> Point:
        """Shift the text origin the least amount that keeps the caret visible."""
        cursor = self.coordinates(text, glyphs, cursor_pos, origin)
        left_offset = max(0, self.padding - cursor.x)
        right_offset = max(0, cursor.x - (self.width - self.padding - 1))
        origin = Point(origin.x + left_offset - right_offset, origin.y)

        cursor = self.coordinates(text, glyphs, cursor_pos, origin)
        cursor_bottom = cursor.y + self.line_height
        top_offset = max(0, self.padding - cursor.y)
        bottom_offset = max(0, cursor_bottom - (self.height - self.padding))
        return Point(origin.x, origin.y + top_offset - bottom_offset)

    def _line_rect(self, text: str, glyphs: Sequence[GlyphRecord], start: int, end: int,
                   origin: Point) -> Rect:
        start_point = self.coordinates(text, glyphs, start, origin)
        end_x = self.coordinates(text, glyphs, end, origin).x
        return Rect(start_point.x, start_point.y,
                    max(1, end_x - start_point.x + 1), self.line_height)

    def selection_rects(self, text: str, glyphs: Sequence[GlyphRecord], start: int, end: int,
                        origin: Point) -> list[Rect]:
        """Highlight rectangles for ``[start, end)``, one per line it touches."""
        rects = []
        for i in range(start, end):
            if text[i] == LINE_BREAK:
                rects.append(self._line_rect(text, glyphs, start, i, origin))
                start = i + 1
        rects.append(self._line_rect(text, glyphs, start, end, origin))
        return rects

    def _ordinal_bound(self, text: str, glyphs: Sequence[GlyphRecord], index: int) -> int:
        glyph = self.glyph_at(text, glyphs, index)
        return glyph.ordinal + (1 if glyph.buffer_index < index else 0)

    def selection_tints(self, text: str, glyphs: Sequence[GlyphRecord], start: int, end: int,
                        text_color: int, selected_text_color: int) -> tuple[int, ...]:
        """Color of every glyph: selected glyphs in ``selected_text_color``."""
        if not glyphs:
            return ()
        first = self._ordinal_bound(text, glyphs, start)
        last = self._ordinal_bound(text, glyphs, end)
        return tuple(
            selected_text_color if first <= ordinal < last else text_color
            for ordinal in range(len(glyphs))
        )

    def box(self) -> tuple[Rect, Rect]:
        """Border and background rectangles of the widget."""
        inset = self.border * 2
        return (Rect(0, 0, self.width, self.height),
                Rect(self.border, self.border, self.width - inset, self.height - inset))

    def clip(self) -> Rect:
        return Rect(self.padding, 0, self.width - self.padding * 2, self.height)

    def layout(self, text: str, glyphs: Sequence[GlyphRecord], cursor_pos: int,
               anchor_pos: int, origin: Point, config: InputConfig,
               line_spacing: float = 0.0, scroll: bool = True) -> RenderInstructions:
        """Compute a full frame: scroll first, then geometry at the new origin."""
        if scroll:
            origin = self.scroll(text, glyphs, cursor_pos, origin)
        start = min(cursor_pos, anchor_pos)
        end = max(cursor_pos, anchor_pos)
        border, background = self.box()
        return RenderInstructions(
            text=text,
            origin=origin,
            cursor=self.coordinates(text, glyphs, cursor_pos, origin),
            selection_rects=tuple(self.selection_rects(text, glyphs, start, end, origin)),
            tints=self.selection_tints(text, glyphs, start, end,
                                       config.text_color, config.selected_text_color),
            border=border,
            background=background,
            clip=self.clip(),
            line_height=self.line_height,
            line_spacing=line_spacing,
            selection_color=config.selection_color,
            border_color=config.border_color,
            bg_color=config.bg_color,
        )
