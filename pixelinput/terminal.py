"""Terminal renderer using Blessed for display and Curtsies for input.

The terminal is treated as a coarse pixel display: every character cell is
two units wide and two units tall, so the one unit border and two unit
padding of the widget map onto half and whole cells.
"""

import select
import sys
import termios
from typing import Optional, Sequence

import blessed
from curtsies import Input

from .config import FontMetrics
from .constants import InputConstants
from .layout import GlyphRecord, Rect, RenderInstructions

CELL_UNITS = 2


def _rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _cell_inside(rect: Rect, col: int, row: int) -> bool:
    """Whether the whole cell at (col, row) lies within ``rect``."""
    x = col * CELL_UNITS
    y = row * CELL_UNITS
    return (rect.x <= x and x + CELL_UNITS <= rect.x + rect.width
            and rect.y <= y and y + CELL_UNITS <= rect.y + rect.height)


def _cell_span(start: int, length: int) -> range:
    """Cells covered by ``length`` units from ``start``; at least one cell."""
    first = start // CELL_UNITS
    last = max(first, (start + length - CELL_UNITS) // CELL_UNITS)
    return range(first, last + 1)


class TerminalRenderer:
    """Draws one input widget into a region of the terminal.

    Also owns the terminal session: fullscreen mode and the curtsies input
    reader the demo loop takes key tokens from.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None,
                 row: int = 1, col: int = 2):
        """Initialize with a terminal instance (or create one).

        Args:
            terminal: Blessed terminal to draw on
            row: Screen row of the widget's top edge
            col: Screen column of the widget's left edge
        """
        self.term = terminal or blessed.Terminal()
        self.row = row
        self.col = col
        self.is_fullscreen = False
        self.destroyed = False
        self._curtsies_input: Optional[Input] = None
        self._last_box: Optional[Rect] = None

    def setup(self):
        """Enter fullscreen mode and start reading keys."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')
                self._curtsies_input.__enter__()
            except (termios.error, OSError):
                # Not a terminal (piped stdin, CI): run without input
                self._curtsies_input = None

    def cleanup(self):
        """Exit fullscreen mode and restore the terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def get_key(self, timeout=None) -> Optional[str]:
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name such as 'a' or '<Ctrl-z>', or None
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    def font_metrics(self, font: str, font_size: float) -> FontMetrics:
        """Every font is the terminal's font: one cell per line."""
        return FontMetrics(size=font_size, line_height=CELL_UNITS)

    def measure(self, text: str, line_spacing: float) -> Sequence[GlyphRecord]:
        """Lay ``text`` out on the character grid.

        Line spacing is meaningless on a grid and is ignored.
        """
        glyphs = []
        col = row = 0
        for index, char in enumerate(text):
            if char == InputConstants.LINE_BREAK:
                row += 1
                col = 0
                continue
            glyphs.append(GlyphRecord(
                buffer_index=index,
                x=col * CELL_UNITS + 1,
                right=col * CELL_UNITS + 2,
                top=row * CELL_UNITS,
            ))
            col += 1
        return glyphs

    def _cell(self, char: str, fg: int, bg: int) -> str:
        if not self.term.does_styling:
            return char
        return self.term.color_rgb(*_rgb(fg)) + self.term.on_color_rgb(*_rgb(bg)) + char

    def _compose(self, instructions: RenderInstructions) -> list[str]:
        """Build the screen rows of the widget, colors included."""
        box = instructions.border
        cols = box.width // CELL_UNITS
        rows = box.height // CELL_UNITS
        chars = [[' '] * cols for _ in range(rows)]
        fg = [[instructions.bg_color] * cols for _ in range(rows)]
        bg = [[instructions.border_color] * cols for _ in range(rows)]

        def visible(col: int, row: int) -> bool:
            return (0 <= col < cols and 0 <= row < rows
                    and _cell_inside(instructions.background, col, row)
                    and _cell_inside(instructions.clip, col, row))

        for row in range(rows):
            for col in range(cols):
                if _cell_inside(instructions.background, col, row):
                    bg[row][col] = instructions.bg_color

        for rect in instructions.selection_rects:
            for row in _cell_span(rect.y, rect.height):
                for col in _cell_span(rect.x, rect.width):
                    if visible(col, row):
                        bg[row][col] = instructions.selection_color

        origin = instructions.origin
        glyph_chars = [c for c in instructions.text if c != InputConstants.LINE_BREAK]
        for glyph, char, color in zip(self.measure(instructions.text, 0.0),
                                      glyph_chars, instructions.tints):
            col = (origin.x + glyph.x) // CELL_UNITS
            row = (origin.y + glyph.top) // CELL_UNITS
            if visible(col, row):
                chars[row][col] = char
                fg[row][col] = color

        lines = []
        for row in range(rows):
            parts = []
            for col in range(cols):
                parts.append(self._cell(chars[row][col], fg[row][col], bg[row][col]))
            lines.append(''.join(parts) + self.term.normal)
        return lines

    def draw(self, instructions: RenderInstructions) -> None:
        if self.destroyed:
            return
        self._last_box = instructions.border
        for offset, line in enumerate(self._compose(instructions)):
            print(self.term.move(self.row + offset, self.col) + line, end='')
        print('', end='', flush=True)

    def destroy(self) -> None:
        """Blank the widget's region; later draws are ignored."""
        if self.destroyed:
            return
        self.destroyed = True
        if self._last_box is not None:
            blank = ' ' * (self._last_box.width // CELL_UNITS)
            for offset in range(self._last_box.height // CELL_UNITS):
                print(self.term.move(self.row + offset, self.col) + self.term.normal + blank,
                      end='')
            print('', end='', flush=True)
